"""YAML 文件读写

pubspec.yaml 的生成与 pubspec.lock 的读取都走这里，
统一 utf-8 编码、大小限制与原子写入。
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 锁文件一般只有几 KB，超过该大小视为异常输入
MAX_YAML_SIZE = 10 * 1024 * 1024


def atomic_write(path: Path, content: str) -> None:
    """先写同目录临时文件再 os.replace，中途失败不留半截文件"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, str(path))
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取 YAML 文件

    返回:
        dict: 文件不存在、为空或顶层不是映射时返回空字典

    异常:
        yaml.YAMLError: 格式错误
        ValueError: 文件超过 MAX_YAML_SIZE
    """
    p = Path(path)
    if not p.exists():
        return {}

    size = p.stat().st_size
    if size > MAX_YAML_SIZE:
        raise ValueError(f"YAML 文件过大: {p} ({size} 字节)")

    try:
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("解析 YAML 失败: %s, 错误: %s", p, e)
        raise

    if result is None:
        return {}
    if not isinstance(result, dict):
        logger.warning("%s 顶层不是映射 (实际类型: %s)", p, type(result).__name__)
        return {}
    return result


def save_yaml(path: str | Path, data: Any) -> None:
    """原子写入 YAML，保持键顺序"""
    content = yaml.dump(
        data, default_flow_style=False,
        allow_unicode=True, sort_keys=False,
    )
    atomic_write(Path(path), content)
