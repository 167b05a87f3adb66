"""pubcache 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
from typing import Any

import click

from pubcache import __version__
from pubcache.services.container import get_container, reset_container
from pubcache.utils.logger import setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, help="配置文件路径 (YAML)")
@click.pass_context
def main(ctx: click.Context, config_path: str | None) -> None:
    """pubcache - 包依赖解析与内容缓存"""
    setup_logging(
        level=os.getenv("PUBCACHE_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("PUBCACHE_LOG_JSON", "") == "1",
    )
    if config_path:
        from pubcache.core.config import init_config
        from pubcache.core.exceptions import ConfigError
        try:
            init_config(config_path)
        except ConfigError as e:
            raise click.ClickException(str(e)) from e
        reset_container()
    # 缓存目录是进程级资源，命令结束时删除
    ctx.call_on_close(reset_container)


from pubcache.cli.cmd_packages import register as _reg_packages  # noqa: E402
from pubcache.cli.cmd_misc import register as _reg_misc  # noqa: E402

_reg_packages(main)
_reg_misc(main)
