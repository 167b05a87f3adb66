"""共享 fixture — 假执行器、假下载器、归档构造

所有测试都不调用真实 pub 工具、不访问网络。
"""

from __future__ import annotations

import io
import tarfile
import threading
from pathlib import Path

import pytest

from pubcache.core.exceptions import FetchError
from pubcache.utils.shell import CommandResult

LOCK_A_B = """\
packages:
  a:
    description: a
    source: hosted
    version: "1.0"
  b:
    description: b
    source: hosted
    version: "2.1.0+1"
sdks:
  dart: ">=2.0.0 <3.0.0"
"""


def make_tgz(files: dict[str, str | bytes]) -> bytes:
    """构造 .tar.gz 字节串，files: {归档内路径: 内容}"""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        for name, content in files.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


class FakeExecutor:
    """CommandExecutor 假实现 — 记录调用，`get` 时写出预设的 pubspec.lock"""

    def __init__(
        self,
        lock_text: str | None = LOCK_A_B,
        *,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        raises: BaseException | None = None,
    ) -> None:
        self.lock_text = lock_text
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.raises = raises
        self.calls: list[dict] = []
        self.pubspecs: list[str] = []

    def execute(self, cmd, *, cwd=".", env=None, timeout=None) -> CommandResult:
        self.calls.append({"cmd": list(cmd), "cwd": cwd, "timeout": timeout})
        pubspec = Path(cwd) / "pubspec.yaml"
        if pubspec.exists():
            self.pubspecs.append(pubspec.read_text(encoding="utf-8"))
        if self.raises is not None:
            raise self.raises
        if cmd[-1] == "get" and self.returncode == 0 and self.lock_text is not None:
            (Path(cwd) / "pubspec.lock").write_text(self.lock_text, encoding="utf-8")
        return CommandResult(self.returncode, self.stdout, self.stderr)


class FakeDownloader:
    """ArchiveDownloader 假实现 — url 后缀到归档字节的映射"""

    def __init__(self, archives: dict[str, bytes] | None = None) -> None:
        self.archives = archives or {}
        self.calls: list[str] = []
        self.block: threading.Event | None = None
        self.started = threading.Event()
        self._lock = threading.Lock()

    def download(self, url: str, *, timeout: float) -> bytes:
        with self._lock:
            self.calls.append(url)
        self.started.set()
        if self.block is not None:
            self.block.wait(timeout=5)
        name = url.rsplit("/", 1)[-1]
        if name not in self.archives:
            raise FetchError(f"下载失败: {url} - HTTP 404")
        return self.archives[name]


@pytest.fixture()
def downloader() -> FakeDownloader:
    return FakeDownloader({
        "a-1.0.tar.gz": make_tgz({
            "pubspec.yaml": "name: a\n",
            "lib/lib.dart": "hi",
            "lib/src/impl.dart": "// impl\n",
        }),
        "b-2.1.0+1.tar.gz": make_tgz({"lib/b.dart": "library b;\n"}),
    })


@pytest.fixture()
def cache(tmp_path: Path, downloader: FakeDownloader):
    from pubcache.core.dep.cache import PackageCache
    return PackageCache(
        base_url="https://example.com/packages",
        downloader=downloader,
        root=tmp_path / "cache",
    )
