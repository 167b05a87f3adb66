"""网络工具 — URL 校验与归档下载"""

from __future__ import annotations

import logging
import socket
import urllib.error
import urllib.request
from typing import Protocol
from urllib.parse import urlparse

from pubcache.core.exceptions import FetchError, ValidationError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


class ArchiveDownloader(Protocol):
    """归档下载器协议 — 测试时注入假实现，无需真实网络"""

    def download(self, url: str, *, timeout: float) -> bytes:
        """下载 url 的完整响应体，失败抛 FetchError"""
        ...


class HttpDownloader:
    """基于 urllib 的默认下载器"""

    def download(self, url: str, *, timeout: float) -> bytes:
        validate_url_scheme(url, context="archive download")
        logger.debug("GET %s (timeout=%ss)", url, timeout)
        try:
            with urllib.request.urlopen(url, timeout=timeout) as resp:  # nosec B310
                return resp.read()
        except urllib.error.HTTPError as e:
            raise FetchError(f"下载失败: {url} - HTTP {e.code}") from e
        except (urllib.error.URLError, socket.timeout, OSError) as e:
            raise FetchError(f"下载失败: {url} - {e}") from e
