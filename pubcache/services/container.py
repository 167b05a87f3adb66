"""服务容器 — 统一构造 PackageSupport，CLI 与 Web 共享同一实例

同一容器内的 Pub 共享缓存目录，缓存随容器生命周期存在。

用法:
    container = ServiceContainer()
    pub = container.pub                  # 懒加载

    # 显式注入配置
    cfg = Config.from_file("my_config.yml")
    container = ServiceContainer(config=cfg)

    # 全局单例（Web 多线程共享）
    from pubcache.services.container import get_container
    catalog = get_container().pub.catalog_for_source(source)
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pubcache.core.config import Config
    from pubcache.core.protocols import PackageSupport

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(self, config: Config | None = None) -> None:
        self._instances: dict[str, object] = {}
        self._lock = threading.Lock()
        if config is None:
            from pubcache.core.config import get_config
            config = get_config()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    @property
    def pub(self) -> PackageSupport:
        with self._lock:
            if "pub" not in self._instances:
                from pubcache.core.pub import create_pub
                self._instances["pub"] = create_pub(self._config)
            return self._instances["pub"]  # type: ignore[return-value]

    def close(self) -> None:
        """释放已创建的实例（删除进程级缓存目录）"""
        with self._lock:
            pub = self._instances.pop("pub", None)
        if pub is not None:
            pub.close()  # type: ignore[attr-defined]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def set_container(container: ServiceContainer) -> None:
    """替换全局容器（测试注入假实现）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = container


def reset_container() -> None:
    """关闭并重置全局容器"""
    global _global  # noqa: PLW0603
    with _global_lock:
        old, _global = _global, None
    if old is not None:
        old.close()
