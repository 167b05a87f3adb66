"""能力接口定义

使用 typing.Protocol 而非 ABC：真实实现与禁用实现互不继承，
只要结构匹配即可互换。
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from pubcache.core.dep.catalog import PackageCatalog
    from pubcache.core.models import PackageRef, ResolvedSet


class LibDirProvider(Protocol):
    """能把 PackageRef 落地为本地 lib/ 目录的对象"""

    def ensure_lib_dir(self, ref: PackageRef) -> Path | None:
        ...


class PackageSupport(Protocol):
    """package: 支持的完整能力（解析 + 缓存 + 内容读取）

    Pub 为真实实现；DisabledPub 为管理员关闭 package 支持时的无 IO 实现。
    """

    @property
    def enabled(self) -> bool:
        ...

    @property
    def cache_root(self) -> Path | None:
        ...

    def tool_version(self) -> str | None:
        """外部解析工具版本，不可用时返回 None"""
        ...

    def resolve_packages(self, names: Iterable[str]) -> ResolvedSet:
        """把包名解析为传递闭包的版本集合"""
        ...

    def ensure_lib_dir(self, ref: PackageRef) -> Path | None:
        """返回包的本地 lib/ 目录"""
        ...

    def catalog_for_source(self, source: str) -> PackageCatalog:
        """提取源码中的 package: 引用并解析，返回可读内容的目录"""
        ...

    def flush_cache(self) -> None:
        ...

    def close(self) -> None:
        """释放缓存目录等进程级资源"""
        ...
