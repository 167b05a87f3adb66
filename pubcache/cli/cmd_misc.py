"""CLI — 工具版本、Web 服务"""

from __future__ import annotations

import click

from pubcache.cli import _svc


def register(group: click.Group) -> None:
    group.add_command(tool_version)
    group.add_command(serve)


@click.command(name="tool-version")
def tool_version() -> None:
    """显示外部 pub 工具版本"""
    version = _svc().pub.tool_version()
    if version is None:
        click.echo("不可用")
    else:
        click.echo(version)


@click.command()
@click.option("--host", default="127.0.0.1", help="监听地址")
@click.option("--port", default=8888, type=int, help="监听端口")
@click.option("--debug", is_flag=True, help="Flask 调试模式")
def serve(host: str, port: int, debug: bool) -> None:
    """启动 HTTP API"""
    from pubcache.web.app import app
    click.echo(f"pubcache API: http://{host}:{port}/api/packages")
    app.run(host=host, port=port, debug=debug, threaded=True)
