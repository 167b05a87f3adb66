"""依赖解析器 — 包装外部 pub 工具

本身不实现版本约束求解，只负责:
  - 生成临时 pubspec.yaml 并在临时目录执行 `pub get`
  - 超时控制
  - 解析 pubspec.lock 得到 ResolvedSet
  - 无论成败都删除临时目录
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable

from pubcache.core.dep.lockfile import read_lock, write_pubspec
from pubcache.core.exceptions import ResolutionError
from pubcache.core.models import ResolvedSet
from pubcache.utils.shell import CommandExecutor, LocalExecutor

DEFAULT_RESOLVE_TIMEOUT = 20


class PackageResolver:
    """把一组包名解析为传递闭包中各包的最新兼容版本"""

    def __init__(
        self,
        executable: str = "pub",
        *,
        timeout: float = DEFAULT_RESOLVE_TIMEOUT,
        executor: CommandExecutor | None = None,
        project_name: str = "temp",
        logger: logging.Logger | None = None,
    ) -> None:
        self.executable = executable
        self.timeout = timeout
        self.executor = executor or LocalExecutor()
        self.project_name = project_name
        self.log = logger or logging.getLogger(__name__)

    def tool_version(self) -> str | None:
        """返回 pub 自报的版本；查询失败不致命，返回 None"""
        try:
            r = self.executor.execute(
                [self.executable, "--version"], timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            self.log.warning("查询 %s 版本失败: %s", self.executable, e)
            return None
        if not r.success:
            self.log.warning(
                "查询 %s 版本失败 (rc=%d): %s",
                self.executable, r.returncode, r.stderr.strip()[:300],
            )
            return None
        return r.stdout.strip()

    def resolve(self, names: Iterable[str]) -> ResolvedSet:
        """解析包名集合；空输入直接返回空集合，不调用外部工具

        Raises:
            ResolutionError: 工具执行失败、超时或锁文件不合法
        """
        requested = set(names)
        if not requested:
            return ResolvedSet.empty()

        self.log.info("解析依赖: %s", ", ".join(sorted(requested)))
        with tempfile.TemporaryDirectory(prefix="temp_package") as tmp:
            scratch = Path(tmp)
            write_pubspec(scratch, requested, project=self.project_name)
            self._run_get(scratch)
            resolved = read_lock(scratch)

        self.log.info("解析完成: %s", resolved)
        return resolved

    def _run_get(self, scratch: Path) -> None:
        try:
            r = self.executor.execute(
                [self.executable, "get"], cwd=str(scratch), timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            self.log.error("%s get 超时 (%ss)", self.executable, self.timeout)
            raise ResolutionError(
                f"timeout: {self.executable} get exceeded {self.timeout}s"
            ) from e
        except OSError as e:
            self.log.error("无法启动 %s: %s", self.executable, e)
            raise ResolutionError(f"failed to run {self.executable}: {e}") from e

        if not r.success:
            message = r.stderr.strip() or f"failed to get pub packages: {r.returncode}"
            self.log.error("Error running pub get: %s", message)
            raise ResolutionError(message)
