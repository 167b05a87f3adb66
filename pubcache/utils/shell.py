"""子进程执行 — 统一外部工具调用

通过 CommandExecutor 协议抽象子进程执行，解析器只依赖该协议，
测试时注入假执行器即可，无需真实的 pub 可执行文件。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """命令执行器协议

    约定:
        - 超时抛 subprocess.TimeoutExpired
        - 可执行文件不存在等启动失败抛 OSError
    """

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        args = shlex.split(cmd) if isinstance(cmd, str) else cmd
        logger.debug("执行: %s (cwd=%s, timeout=%s)", args, cwd, timeout)
        r = subprocess.run(
            args, capture_output=True, text=True,
            cwd=cwd, env=env, check=False, timeout=timeout,
        )
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )
