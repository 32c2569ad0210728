"""CLI — 描述文件查看与修改命令"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from pinmod.core.exceptions import PinModError
from pinmod.core.modfile import (
    ModFile,
    Module,
    Package,
    create_from_existing_or_new,
    open_mod_file,
)
from pinmod.core.toolchain import ToolchainVersion


def register(group: click.Group) -> None:
    group.add_command(show)
    group.add_command(init)
    group.add_command(set_require)


@contextmanager
def _friendly_errors() -> Iterator[None]:
    """业务异常统一转为 click 错误输出"""
    try:
        yield
    except PinModError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e


def _parse_module(text: str) -> Module:
    path, sep, version = text.rpartition("@")
    if not sep or not path or not version:
        raise click.BadParameter(f"格式应为 <module>@<version>: {text}", param_hint="MODULE@VERSION")
    return Module(path, version)


def _open_target(file: str, source: str, go: str) -> ModFile:
    if source:
        toolchain = ToolchainVersion.parse(go) if go else None
        return create_from_existing_or_new(source, file, toolchain=toolchain)
    return open_mod_file(file)


@click.command()
@click.argument("file")
def show(file: str) -> None:
    """查看描述文件中的直接依赖"""
    with _friendly_errors():
        mf = open_mod_file(file)
    # 只读查看，不写回
    mf.discard()
    pkg = mf.direct_package()
    if pkg is None:
        click.echo("直接依赖: (无)")
    else:
        click.echo(f"直接依赖: {pkg}")
        click.echo(f"  模块:     {pkg.module}")
        click.echo(f"  相对路径: {pkg.rel_path or '(模块根目录)'}")
        for env in pkg.build_envs:
            click.echo(f"  环境变量: {env}")
        for flag in pkg.build_flags:
            click.echo(f"  构建参数: {flag}")
    state = "关闭" if mf.is_directives_auto_fetch_disabled() else "开启"
    click.echo(f"自动拉取指令: {state}")


@click.command()
@click.argument("dest")
@click.option("--from", "source", default="", help="复制的源描述文件（不存在时新建）")
@click.option("--go", default="", help="指定工具链版本（不指定则执行 go version 探测）")
def init(dest: str, source: str, go: str) -> None:
    """新建或复制描述文件"""
    with _friendly_errors():
        toolchain = ToolchainVersion.parse(go) if go else None
        mf = create_from_existing_or_new(source, dest, toolchain=toolchain)
        mf.close()
    click.echo(f"已写入: {dest}")


@click.command(name="set")
@click.argument("file")
@click.argument("module")
@click.option("--rel-path", default="", help="模块内实际构建的子包路径")
@click.option("--flag", "flags", multiple=True, help="构建参数，如 -tags=netgo（可多次指定）")
@click.option("--env", "envs", multiple=True, help="构建环境变量 KEY=VALUE（可多次指定）")
@click.option("--from", "source", default="", help="从该文件复制后再修改（不存在时新建）")
@click.option("--go", default="", help="新建时使用的工具链版本")
def set_require(
    file: str, module: str, rel_path: str,
    flags: tuple[str, ...], envs: tuple[str, ...], source: str, go: str,
) -> None:
    """设置描述文件的直接依赖"""
    mod = _parse_module(module)
    if rel_path and (rel_path.startswith("-") or "=" in rel_path or len(rel_path.split()) != 1):
        raise click.BadParameter(f"无效的相对路径: {rel_path}", param_hint="--rel-path")
    for f in flags:
        if not f.startswith("-"):
            raise click.BadParameter(f"构建参数必须以 - 开头: {f}", param_hint="--flag")
    for e in envs:
        if "=" not in e or e.startswith("-"):
            raise click.BadParameter(f"环境变量格式应为 KEY=VALUE: {e}", param_hint="--env")

    pkg = Package(module=mod, rel_path=rel_path, build_flags=flags, build_envs=envs)
    with _friendly_errors():
        with _open_target(file, source, go) as mf:
            mf.set_direct_require(pkg)
    click.echo(f"已设置: {file} -> {pkg}")
