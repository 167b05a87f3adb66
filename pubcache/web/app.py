"""HTTP API（基于 Flask）

启动方式:
    pubcache serve --port 8888
    gunicorn --config deploy/gunicorn.conf.py pubcache.web.app:app
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from pubcache.core.exceptions import PubCacheError
from pubcache.web.blueprints.packages_bp import packages_bp
from pubcache.web.responses import error_response

logger = logging.getLogger(__name__)

# 源码请求体不会很大
MAX_CONTENT_LENGTH = 2 * 1024 * 1024

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
app.register_blueprint(packages_bp)


@app.errorhandler(PubCacheError)
def handle_pubcache_error(exc: PubCacheError):
    """业务异常按 code 映射状态码"""
    logger.warning("请求失败 [%s]: %s", exc.code, exc)
    return error_response(exc)


@app.errorhandler(HTTPException)
def handle_http_exception(exc):
    """将所有 HTTP 异常统一返回 JSON"""
    return jsonify(error=exc.description), exc.code


@app.errorhandler(Exception)
def handle_generic_exception(exc):  # noqa: ARG001
    """捕获未处理异常，返回 500 JSON"""
    logger.exception("未处理的异常")
    return jsonify(error="服务器内部错误"), 500
