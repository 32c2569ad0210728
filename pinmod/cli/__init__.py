"""pinmod 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from pinmod import __version__
from pinmod.core.config import init_config
from pinmod.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default="configs/default.yml",
              help="配置文件路径（不存在时使用默认配置）")
def main(config_path: str) -> None:
    """pinmod - 单工具模块描述文件管理"""
    setup_logging(
        level=os.getenv("PINMOD_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("PINMOD_LOG_JSON", "") == "1",
    )
    init_config(config_path)


from pinmod.cli.cmd_mod import register as _reg_mod  # noqa: E402

_reg_mod(main)
