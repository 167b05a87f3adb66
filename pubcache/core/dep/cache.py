"""包内容磁盘缓存

缓存键为 (name, version)：解析阶段已经为每个包钉死了确切版本，
而同一 name+version 发布后内容不可变，因此不需要内容哈希。

目录布局:
    <root>/<name>-<version>/lib/...     缓存条目（lib/ 存在即命中）
    <root>/<name>-<version>.tar.gz      可选：原始归档，仅供排查，不作为命中依据

并发:
    - 同一 (name, version) 的并发未命中合并为一次下载（single-flight）
    - flush() 与 ensure_lib_dir() 互斥
"""

from __future__ import annotations

import gzip
import io
import logging
import shutil
import tarfile
import tempfile
import threading
import zlib
from concurrent.futures import Future
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pubcache.core.config import DEFAULT_ARCHIVE_BASE_URL
from pubcache.core.exceptions import FetchError
from pubcache.core.models import PackageRef
from pubcache.utils.net import ArchiveDownloader, HttpDownloader, validate_url_scheme

DEFAULT_FETCH_TIMEOUT = 60


class _SharedExclusiveLock:
    """读写锁：多个 shared 可并存，exclusive 独占；有 exclusive 等待时不再放行新的 shared"""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def shared(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class PackageCache:
    """(name, version) -> 本地 lib/ 目录；未命中时下载并解压"""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_ARCHIVE_BASE_URL,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        downloader: ArchiveDownloader | None = None,
        keep_archives: bool = False,
        prefix: str = "pubcache",
        root: Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        validate_url_scheme(base_url, context="archive base url")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.downloader = downloader or HttpDownloader()
        self.keep_archives = keep_archives
        self.log = logger or logging.getLogger(__name__)

        # 进程级私有临时目录，只由本组件写入
        self._root = Path(root) if root else Path(tempfile.mkdtemp(prefix=prefix))
        self._root.mkdir(parents=True, exist_ok=True)

        self._guard = _SharedExclusiveLock()
        self._inflight: dict[PackageRef, Future[Path]] = {}
        self._inflight_lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def package_dir(self, ref: PackageRef) -> Path:
        return self._root / ref.dir_name

    def lib_dir(self, ref: PackageRef) -> Path:
        return self.package_dir(ref) / "lib"

    def is_cached(self, ref: PackageRef) -> bool:
        """包目录和 lib/ 同时存在才算命中"""
        return self.package_dir(ref).is_dir() and self.lib_dir(ref).is_dir()

    def archive_url(self, ref: PackageRef) -> str:
        return f"{self.base_url}/{ref.dir_name}.tar.gz"

    def ensure_lib_dir(self, ref: PackageRef) -> Path:
        """返回包的 lib/ 目录，未缓存时下载并解压

        Raises:
            FetchError: 下载失败、归档损坏或归档中没有 lib/
        """
        with self._guard.shared():
            if self.is_cached(ref):
                self.log.debug("缓存命中: %s", ref)
                return self.lib_dir(ref)
            return self._fetch_once(ref)

    def flush(self) -> None:
        """删除整个缓存根目录并重建为空目录"""
        with self._guard.exclusive():
            if self._root.exists():
                shutil.rmtree(self._root)
            self._root.mkdir(parents=True)
            self.log.info("缓存已清空: %s", self._root)

    def close(self) -> None:
        """进程退出前删除缓存根目录"""
        with self._guard.exclusive():
            shutil.rmtree(self._root, ignore_errors=True)

    # ------------------------------------------------------------------
    # 下载与解压
    # ------------------------------------------------------------------

    def _fetch_once(self, ref: PackageRef) -> Path:
        """同一个 ref 只允许一个线程真正下载，其余线程等待其结果"""
        with self._inflight_lock:
            flight = self._inflight.get(ref)
            leader = flight is None
            if leader:
                flight = Future()
                self._inflight[ref] = flight

        if not leader:
            self.log.debug("等待进行中的下载: %s", ref)
            return flight.result()

        try:
            # 上一个 leader 可能刚完成，拿到 leader 身份后再检查一次
            if not self.is_cached(ref):
                self._populate(ref)
            lib = self.lib_dir(ref)
            flight.set_result(lib)
            return lib
        except BaseException as e:
            flight.set_exception(e)
            raise
        finally:
            with self._inflight_lock:
                self._inflight.pop(ref, None)

    def _populate(self, ref: PackageRef) -> None:
        url = self.archive_url(ref)
        self.log.info("缓存未命中，下载: %s", url)
        data = self.downloader.download(url, timeout=self.timeout)

        if self.keep_archives:
            (self._root / f"{ref.dir_name}.tar.gz").write_bytes(data)

        target = self.package_dir(ref)
        staging = Path(tempfile.mkdtemp(prefix=f".{ref.dir_name}-", dir=self._root))
        try:
            self._unpack(data, staging, url)
            if not (staging / "lib").is_dir():
                raise FetchError(f"malformed archive: no lib/ in {url}")
            if target.exists():
                # 没有 lib/ 的残留目录不是缓存条目，直接替换
                shutil.rmtree(target)
            staging.rename(target)
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        self.log.info("已解压: %s -> %s", ref, target)

    @staticmethod
    def _unpack(data: bytes, dest: Path, url: str) -> None:
        """先 gunzip 再 untar；越界路径（绝对路径、..、外链）由 data 过滤器拒绝"""
        try:
            raw = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as e:
            raise FetchError(f"corrupt archive (gzip): {url} - {e}") from e

        try:
            with tarfile.open(fileobj=io.BytesIO(raw), mode="r:") as tf:
                tf.extractall(path=str(dest), filter="data")
        except (tarfile.TarError, OSError) as e:
            raise FetchError(f"corrupt archive (tar): {url} - {e}") from e
