"""集中配置管理

提供统一的配置入口，替代各模块散落的默认常量。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urlparse

from pubcache.core.exceptions import ConfigError
from pubcache.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_BASE_URL = "https://storage.googleapis.com/pub-packages/packages"


@dataclass
class Config:
    """全局配置"""

    # 功能开关：关闭后使用无 IO 的 DisabledPub
    packages_enabled: bool = True

    # 外部解析工具
    pub_executable: str = "pub"
    resolve_timeout: int = 20  # 秒
    manifest_name: str = "temp"

    # 归档下载与缓存
    archive_base_url: str = DEFAULT_ARCHIVE_BASE_URL
    fetch_timeout: int = 60  # 秒
    cache_prefix: str = "pubcache"
    keep_archives: bool = False

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/default.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def validate(self) -> None:
        """校验配置取值，不合法时抛 ConfigError"""
        problems = []
        if self.resolve_timeout <= 0:
            problems.append(f"resolve_timeout 必须为正数: {self.resolve_timeout}")
        if self.fetch_timeout <= 0:
            problems.append(f"fetch_timeout 必须为正数: {self.fetch_timeout}")
        if not str(self.pub_executable).strip():
            problems.append("pub_executable 不能为空")
        if urlparse(self.archive_base_url).scheme not in ("http", "https"):
            problems.append(f"archive_base_url 仅支持 http/https: {self.archive_base_url}")
        if problems:
            raise ConfigError("; ".join(problems))


# 全局单例，首次 import 时不加载文件；由 CLI / Web 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/default.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    cfg = Config.from_file(path)
    cfg.validate()
    _current = cfg
    logger.info("配置已加载: %s", path)
    return _current
