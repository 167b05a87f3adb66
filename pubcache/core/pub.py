"""package: 支持的门面

Pub 组合一个 PackageResolver 和一个 PackageCache，对外提供两类能力:

  1. 给定一组包名，解析出传递闭包中各包的最新兼容版本（隐式 any 约束）
  2. 给定包名 + 版本，返回本地缓存中该包 lib/ 目录；首次访问时下载，
     此后同一包的访问成本趋近于零

DisabledPub 是同一能力接口的第二个实现，不做任何网络或进程 IO，
始终报告零个已解析包，用于管理员关闭 package 支持的场景。

用法:
    from pubcache.core.pub import create_pub

    pub = create_pub(get_config())
    catalog = pub.catalog_for_source(source)
    text = catalog.read_content("package:path/path.dart")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from pubcache.core.config import Config
from pubcache.core.dep.cache import PackageCache
from pubcache.core.dep.catalog import PackageCatalog
from pubcache.core.dep.resolver import PackageResolver
from pubcache.core.dep.scanner import extract_unsafe_imports, filter_safe_packages
from pubcache.core.models import PackageRef, ResolvedSet
from pubcache.core.protocols import PackageSupport
from pubcache.utils.net import ArchiveDownloader
from pubcache.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class Pub:
    """真实实现：外部 pub 解析 + 磁盘缓存"""

    def __init__(
        self,
        resolver: PackageResolver,
        cache: PackageCache,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.log = logger or logging.getLogger(__name__)

    @property
    def enabled(self) -> bool:
        return True

    @property
    def cache_root(self) -> Path:
        return self.cache.root

    def tool_version(self) -> str | None:
        return self.resolver.tool_version()

    def resolve_packages(self, names: Iterable[str]) -> ResolvedSet:
        return self.resolver.resolve(names)

    def ensure_lib_dir(self, ref: PackageRef) -> Path:
        return self.cache.ensure_lib_dir(ref)

    def catalog_for_source(self, source: str) -> PackageCatalog:
        names = filter_safe_packages(extract_unsafe_imports(source))
        packages = self.resolve_packages(names)
        return PackageCatalog(self, packages, logger=self.log)

    def flush_cache(self) -> None:
        self.cache.flush()

    def close(self) -> None:
        self.cache.close()


class DisabledPub:
    """无 IO 实现：package 支持被关闭时的替身

    所有操作都平凡成功，调用方应理解为 "功能已关闭"，而不是 "确认没有依赖"。
    """

    @property
    def enabled(self) -> bool:
        return False

    @property
    def cache_root(self) -> None:
        return None

    def tool_version(self) -> None:
        return None

    def resolve_packages(self, names: Iterable[str]) -> ResolvedSet:
        return ResolvedSet.empty()

    def ensure_lib_dir(self, ref: PackageRef) -> None:
        return None

    def catalog_for_source(self, source: str) -> PackageCatalog:
        return PackageCatalog(self, ResolvedSet.empty())

    def flush_cache(self) -> None:
        pass

    def close(self) -> None:
        pass


def create_pub(
    config: Config,
    *,
    executor: CommandExecutor | None = None,
    downloader: ArchiveDownloader | None = None,
    log: logging.Logger | None = None,
) -> PackageSupport:
    """按配置选择 Pub 或 DisabledPub"""
    if not config.packages_enabled:
        logger.info("package 支持已关闭，使用 DisabledPub")
        return DisabledPub()

    config.validate()
    log = log or logger
    resolver = PackageResolver(
        config.pub_executable,
        timeout=config.resolve_timeout,
        executor=executor,
        project_name=config.manifest_name,
        logger=log,
    )
    cache = PackageCache(
        base_url=config.archive_base_url,
        timeout=config.fetch_timeout,
        downloader=downloader,
        keep_archives=config.keep_archives,
        prefix=config.cache_prefix,
        logger=log,
    )
    logger.info("package 缓存目录: %s", cache.root)
    return Pub(resolver, cache, logger=log)
