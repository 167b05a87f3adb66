"""日志配置

普通文本与结构化 JSON 两种输出格式。组件本身不调用这里，
只接收外部传入的 logging.Logger；入口（CLI / Web）负责配置根日志器。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于日志平台采集"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            # 用 record.created 记录事件发生时间而非格式化时间
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器，输出到 stderr

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: True 时输出 JSON，否则输出人类可读格式
    """
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        fmt = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)


def reset_logging() -> None:
    """清理根日志器上已注册的 handlers，避免重复输出"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
