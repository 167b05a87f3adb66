"""CLI — 依赖解析与包内容命令"""

from __future__ import annotations

from typing import IO

import click

from pubcache.cli import _svc
from pubcache.core.dep.scanner import extract_unsafe_imports, filter_safe_packages
from pubcache.core.exceptions import PubCacheError


def register(group: click.Group) -> None:
    group.add_command(imports)
    group.add_command(resolve)
    group.add_command(read)


def _fail(exc: PubCacheError) -> click.ClickException:
    return click.ClickException(f"[{exc.code}] {exc}")


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--all", "show_all", is_flag=True, help="输出全部原始 import（不过滤）")
def imports(source: IO[str], show_all: bool) -> None:
    """列出源码引用的 package: 包名"""
    raw = extract_unsafe_imports(source.read())
    items = raw if show_all else filter_safe_packages(raw)
    for item in sorted(items):
        click.echo(item)


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
def resolve(source: IO[str]) -> None:
    """解析源码引用的包及其传递依赖版本"""
    pub = _svc().pub
    if not pub.enabled:
        click.echo("package 支持已关闭。")
        return
    try:
        catalog = pub.catalog_for_source(source.read())
    except PubCacheError as e:
        raise _fail(e) from e
    if not catalog.has_packages:
        click.echo("没有 package: 依赖。")
        return
    for ref in catalog.packages:
        click.echo(f"  {ref.name:30s} {ref.version}")


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.argument("reference")
def read(source: IO[str], reference: str) -> None:
    """输出 REFERENCE (package:<name>/<path>) 指向的文件内容"""
    try:
        catalog = _svc().pub.catalog_for_source(source.read())
        content = catalog.read_content(reference)
    except PubCacheError as e:
        raise _fail(e) from e
    click.echo(content, nl=False)
