"""pubspec 生成与 pubspec.lock 解析

锁文件格式（只关心 packages 段下每个包的 version）:

    packages:
      collection:
        description: collection
        source: hosted
        version: "1.1.0"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import yaml

from pubcache.core.exceptions import ResolutionError
from pubcache.core.models import PackageRef, ResolvedSet
from pubcache.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)

PUBSPEC_FILE = "pubspec.yaml"
LOCK_FILE = "pubspec.lock"


def write_pubspec(directory: Path, names: Iterable[str], *, project: str = "temp") -> Path:
    """生成只声明依赖的最小 pubspec.yaml，每个包约束为 any"""
    path = directory / PUBSPEC_FILE
    save_yaml(path, {
        "name": project,
        "dependencies": {name: "any" for name in sorted(names)},
    })
    return path


def read_lock(directory: Path) -> ResolvedSet:
    """读取并解析 directory 下的 pubspec.lock

    Raises:
        ResolutionError: 锁文件缺失或结构不合法
        ValidationError: 锁文件中的包名/版本号不合法
    """
    path = directory / LOCK_FILE
    if not path.is_file():
        raise ResolutionError(f"malformed lock manifest: {LOCK_FILE} not produced")
    try:
        data = load_yaml(path)
    except (yaml.YAMLError, ValueError) as e:
        raise ResolutionError(f"malformed lock manifest: {e}") from e
    return parse_lock(data)


def parse_lock(data: dict) -> ResolvedSet:
    """把锁文件内容转换为 ResolvedSet，保持文档中的顺序"""
    if "packages" not in data:
        raise ResolutionError("malformed lock manifest: missing 'packages'")
    packages = data["packages"]
    if packages is None:
        return ResolvedSet.empty()
    if not isinstance(packages, dict):
        raise ResolutionError("malformed lock manifest: 'packages' is not a mapping")

    refs = []
    for name, info in packages.items():
        if not isinstance(info, dict) or "version" not in info:
            raise ResolutionError(f"malformed lock manifest: no version for {name}")
        refs.append(PackageRef(str(name), str(info["version"])))

    logger.debug("锁文件解析出 %d 个包", len(refs))
    return ResolvedSet(refs)
