"""已解析包集合上的内容读取

PackageCatalog 持有一次解析得到的 ResolvedSet，
按 package:<name>/<path> 引用返回包内文件内容，并做路径安全检查。
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from pubcache.core.dep.scanner import PACKAGE_PREFIX
from pubcache.core.exceptions import (
    InvalidReferenceError,
    PackageFileNotFoundError,
    PackageFileUnreadableError,
    PackageNotFoundError,
)
from pubcache.core.models import PackageRef, ResolvedSet
from pubcache.core.protocols import LibDirProvider


def split_reference(reference: str) -> tuple[str, PurePosixPath]:
    """package:<name>/<path> -> (name, 规范化后的相对路径)

    纯字符串处理，不访问文件系统。越出包根目录的路径直接拒绝。
    """
    if not reference.startswith(PACKAGE_PREFIX):
        raise InvalidReferenceError(f"invalid package reference: {reference}")

    fragment = reference[len(PACKAGE_PREFIX):]
    if not fragment.strip():
        raise InvalidReferenceError(f"invalid path: {reference}")

    index = fragment.find("/")
    if index == -1:
        raise InvalidReferenceError(f"invalid path: {reference}")

    name, rel = fragment[:index], fragment[index + 1:]
    if "\\" in rel or "\x00" in rel:
        raise InvalidReferenceError(f"invalid path: {reference}")

    parts: list[str] = []
    for part in PurePosixPath(rel).parts:
        if part in ("", "."):
            continue
        if part == "/":
            raise InvalidReferenceError(f"absolute path not allowed: {reference}")
        if part == "..":
            if not parts:
                raise InvalidReferenceError(f"path escapes package root: {reference}")
            parts.pop()
            continue
        parts.append(part)

    if not parts:
        raise InvalidReferenceError(f"invalid path: {reference}")
    return name, PurePosixPath(*parts)


class PackageCatalog:
    """一组已解析的包，以及读取包内 lib/ 文件内容的能力"""

    def __init__(
        self,
        provider: LibDirProvider,
        packages: ResolvedSet,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.provider = provider
        self.packages = packages
        self.log = logger or logging.getLogger(__name__)

    @property
    def has_packages(self) -> bool:
        return bool(self.packages)

    def lookup(self, name: str) -> PackageRef | None:
        """按包名查找；不存在返回 None，由调用方显式处理"""
        for ref in self.packages:
            if ref.name == name:
                return ref
        return None

    def read_content(self, reference: str) -> str:
        """返回 package: 引用指向的文件内容

        Raises:
            InvalidReferenceError: 引用格式不合法或路径越界
            PackageNotFoundError: 包不在解析结果中
            PackageFileNotFoundError: 包内不存在该文件
            PackageFileUnreadableError: 文件不是 UTF-8 文本
            FetchError: 包下载/解压失败
        """
        name, rel = split_reference(reference)

        ref = self.lookup(name)
        if ref is None:
            raise PackageNotFoundError(name)

        lib_dir = self.provider.ensure_lib_dir(ref)
        if lib_dir is None:
            raise PackageNotFoundError(name)
        self.log.debug("PACKAGE: reference to %s", reference)

        path = Path(lib_dir).joinpath(rel)
        # 词法检查之外再防一次符号链接越界
        root = Path(lib_dir).resolve()
        resolved = path.resolve()
        if resolved != root and root not in resolved.parents:
            raise InvalidReferenceError(f"path escapes package root: {reference}")

        if not resolved.is_file():
            raise PackageFileNotFoundError(reference)
        try:
            return resolved.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise PackageFileUnreadableError(reference) from e
