"""CLI 测试 — click CliRunner"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

import pubcache.core.config as cfgmod
from conftest import FakeExecutor
from pubcache import __version__
from pubcache.cli import main
from pubcache.core.dep.resolver import PackageResolver
from pubcache.core.pub import Pub
from pubcache.services.container import ServiceContainer, reset_container, set_container

SOURCE = "library demo;\nimport 'package:a/lib.dart';\nimport 'dart:io';\n"


@pytest.fixture()
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.dart"
    path.write_text(SOURCE, encoding="utf-8")
    return path


@pytest.fixture()
def executor() -> FakeExecutor:
    return FakeExecutor(stdout="Pub 2.1.0\n")


@pytest.fixture(autouse=True)
def _container(cache, executor, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfgmod, "_current", cfgmod.Config())
    # 不改动 pytest 自身挂在根日志器上的 handler
    monkeypatch.setattr("pubcache.cli.setup_logging", lambda **kwargs: None)
    c = ServiceContainer(config=cfgmod.Config())
    c._instances["pub"] = Pub(PackageResolver(executor=executor), cache)
    set_container(c)
    yield
    reset_container()


class TestCli:
    def test_version_option(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert __version__ in result.output

    def test_imports(self, source_file: Path) -> None:
        result = CliRunner().invoke(main, ["imports", str(source_file)])
        assert result.exit_code == 0
        assert result.output == "a\n"

    def test_imports_all(self, source_file: Path) -> None:
        result = CliRunner().invoke(main, ["imports", "--all", str(source_file)])
        assert result.output.splitlines() == ["dart:io", "package:a/lib.dart"]

    def test_resolve(self, source_file: Path) -> None:
        result = CliRunner().invoke(main, ["resolve", str(source_file)])
        assert result.exit_code == 0
        assert "a" in result.output
        assert "2.1.0+1" in result.output

    def test_read(self, source_file: Path) -> None:
        result = CliRunner().invoke(main, ["read", str(source_file), "package:a/lib.dart"])
        assert result.exit_code == 0
        assert result.output == "hi"

    def test_read_unknown_package(self, source_file: Path) -> None:
        result = CliRunner().invoke(main, ["read", str(source_file), "package:zzz/x.dart"])
        assert result.exit_code == 1
        assert "PACKAGE_NOT_FOUND" in result.output

    def test_resolve_failure(self, source_file: Path, executor: FakeExecutor) -> None:
        executor.returncode = 1
        executor.stderr = "version solving failed"
        result = CliRunner().invoke(main, ["resolve", str(source_file)])
        assert result.exit_code == 1
        assert "RESOLUTION_ERROR" in result.output

    def test_tool_version(self) -> None:
        result = CliRunner().invoke(main, ["tool-version"])
        assert result.output.strip() == "Pub 2.1.0"

    def test_disabled_via_config_file(self, tmp_path: Path, source_file: Path) -> None:
        cfg = tmp_path / "c.yml"
        cfg.write_text("packages_enabled: false\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["--config", str(cfg), "resolve", str(source_file)])
        assert result.exit_code == 0
        assert "已关闭" in result.output

    def test_invalid_config_file(self, tmp_path: Path, source_file: Path) -> None:
        cfg = tmp_path / "c.yml"
        cfg.write_text("fetch_timeout: 0\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["--config", str(cfg), "resolve", str(source_file)])
        assert result.exit_code == 1
        assert "fetch_timeout" in result.output
