"""Pub 门面与 DisabledPub 测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import FakeDownloader, FakeExecutor
from pubcache.core.config import Config
from pubcache.core.dep.cache import PackageCache
from pubcache.core.dep.resolver import PackageResolver
from pubcache.core.exceptions import ConfigError, ResolutionError
from pubcache.core.models import PackageRef
from pubcache.core.pub import DisabledPub, Pub, create_pub

SOURCE = """\
library demo;

import 'package:a/lib.dart';
import 'dart:async';

void main() {}
"""


@pytest.fixture()
def pub(cache: PackageCache) -> Pub:
    return Pub(PackageResolver(executor=FakeExecutor()), cache)


class TestPub:
    def test_catalog_for_source(self, pub: Pub) -> None:
        catalog = pub.catalog_for_source(SOURCE)
        assert catalog.has_packages
        assert catalog.packages.names() == ["a", "b"]
        assert catalog.read_content("package:a/lib.dart") == "hi"

    def test_requested_names_come_from_safe_imports(self, cache: PackageCache) -> None:
        executor = FakeExecutor()
        Pub(PackageResolver(executor=executor), cache).catalog_for_source(SOURCE)
        assert "  a: any" in executor.pubspecs[0]
        assert "async" not in executor.pubspecs[0]

    def test_source_without_packages_skips_resolution(self, cache: PackageCache) -> None:
        executor = FakeExecutor()
        catalog = Pub(PackageResolver(executor=executor), cache).catalog_for_source(
            "import 'dart:io';\nmain() {}"
        )
        assert not catalog.has_packages
        assert executor.calls == []

    def test_resolution_failure_is_not_empty(self, cache: PackageCache) -> None:
        pub = Pub(PackageResolver(executor=FakeExecutor(returncode=1, stderr="boom")), cache)
        with pytest.raises(ResolutionError, match="boom"):
            pub.catalog_for_source(SOURCE)

    def test_passthrough(self, pub: Pub, downloader: FakeDownloader) -> None:
        assert pub.enabled
        assert pub.cache_root == pub.cache.root
        lib = pub.ensure_lib_dir(PackageRef("a", "1.0"))
        assert (lib / "lib.dart").exists()
        pub.flush_cache()
        assert not lib.exists()


class TestDisabledPub:
    def test_no_io(self) -> None:
        pub = DisabledPub()
        assert not pub.enabled
        assert pub.cache_root is None
        assert pub.tool_version() is None
        assert len(pub.resolve_packages({"a", "b"})) == 0
        assert pub.ensure_lib_dir(PackageRef("a", "1.0")) is None
        pub.flush_cache()
        pub.close()

    def test_catalog_is_empty(self) -> None:
        catalog = DisabledPub().catalog_for_source(SOURCE)
        assert not catalog.has_packages
        assert catalog.lookup("a") is None


class TestCreatePub:
    def test_disabled(self) -> None:
        assert isinstance(create_pub(Config(packages_enabled=False)), DisabledPub)

    def test_enabled(self, tmp_path: Path) -> None:
        executor = FakeExecutor()
        pub = create_pub(
            Config(pub_executable="dart-pub", resolve_timeout=7, cache_prefix="pc-"),
            executor=executor,
            downloader=FakeDownloader(),
        )
        try:
            assert isinstance(pub, Pub)
            assert pub.resolver.timeout == 7
            assert pub.cache.root.name.startswith("pc-")
            pub.resolve_packages({"a"})
            assert executor.calls[0]["cmd"] == ["dart-pub", "get"]
        finally:
            pub.close()

    def test_invalid_config(self) -> None:
        with pytest.raises(ConfigError, match="resolve_timeout"):
            create_pub(Config(resolve_timeout=0))
