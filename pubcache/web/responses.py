"""Web 层统一响应辅助函数

业务异常按 code 映射 HTTP 状态码，消除各端点重复的 try/except。
"""

from __future__ import annotations

from flask import Response, jsonify

from pubcache.core.exceptions import PubCacheError

_STATUS_BY_CODE = {
    "VALIDATION_ERROR": 400,
    "INVALID_REFERENCE": 400,
    "PACKAGE_NOT_FOUND": 404,
    "FILE_NOT_FOUND": 404,
    "UNREADABLE_FILE": 422,
    "RESOLUTION_ERROR": 502,
    "FETCH_ERROR": 502,
    "CONFIG_ERROR": 500,
}


def ok(data: dict) -> Response:
    """成功响应"""
    return jsonify(data)


def bad_request(message: str) -> tuple[Response, int]:
    """请求参数错误"""
    return jsonify(error=message), 400


def error_response(exc: PubCacheError) -> tuple[Response, int]:
    """业务异常 -> JSON 错误响应"""
    status = _STATUS_BY_CODE.get(exc.code, 500)
    return jsonify(error=str(exc), code=exc.code), status
