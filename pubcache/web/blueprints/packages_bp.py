"""package API Blueprint"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, request

from pubcache.core.dep.scanner import extract_unsafe_imports, filter_safe_packages
from pubcache.web.responses import bad_request, ok

packages_bp = Blueprint("packages", __name__, url_prefix="/api/packages")


def _pub():  # type: ignore[no-untyped-def]
    from pubcache.services.container import get_container
    return get_container().pub


def _body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _source(body: dict[str, Any]) -> str | None:
    source = body.get("source")
    return source if isinstance(source, str) else None


@packages_bp.route("/version", methods=["GET"])
def version() -> Response:
    pub = _pub()
    return ok({"version": pub.tool_version(), "enabled": pub.enabled})


@packages_bp.route("/imports", methods=["POST"])
def imports() -> tuple[Response, int] | Response:
    source = _source(_body())
    if source is None:
        return bad_request("需要提供 source")
    raw = extract_unsafe_imports(source)
    return ok({
        "imports": sorted(raw),
        "packages": sorted(filter_safe_packages(raw)),
    })


@packages_bp.route("/resolve", methods=["POST"])
def resolve() -> tuple[Response, int] | Response:
    source = _source(_body())
    if source is None:
        return bad_request("需要提供 source")
    pub = _pub()
    catalog = pub.catalog_for_source(source)
    return ok({"enabled": pub.enabled, "packages": catalog.packages.to_list()})


@packages_bp.route("/content", methods=["POST"])
def content() -> tuple[Response, int] | Response:
    body = _body()
    source = _source(body)
    reference = body.get("reference")
    if source is None or not isinstance(reference, str):
        return bad_request("需要提供 source 和 reference")
    catalog = _pub().catalog_for_source(source)
    return ok({"reference": reference, "content": catalog.read_content(reference)})


@packages_bp.route("/flush", methods=["POST"])
def flush() -> Response:
    _pub().flush_cache()
    return ok({"message": "缓存已清空"})
