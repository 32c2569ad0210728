"""单工具模块描述文件句柄

每个 .mod 文件仍是工具链可解析的合法模块描述文件，
同时在唯一的直接依赖 require 行尾注释中携带子包路径、构建参数与环境变量。

生命周期: 打开/新建 -> 内存中读取、修改 -> close() 恰好写盘一次。

用法:
    from pinmod.core.modfile import create_from_existing_or_new, Module, Package

    with create_from_existing_or_new("", ".bingo/faillint.mod") as mf:
        mf.set_direct_require(Package(
            Module("github.com/fatih/faillint", "v1.5.0"), build_flags=["-tags=netgo"],
        ))
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from pinmod.core.config import get_config
from pinmod.core.exceptions import (
    NotFoundError,
    ParseError,
    StateError,
    ValidationError,
    WriteError,
)
from pinmod.core.modfile import annotation
from pinmod.core.modfile.directives import is_auto_fetch_disabled
from pinmod.core.modfile.models import Module, Package
from pinmod.core.modfile.parser import (
    INDIRECT,
    RequireLine,
    RequireSelector,
    format_require,
    parse,
    select_direct_require,
)
from pinmod.core.modfile.version_policy import render_go_directive
from pinmod.core.toolchain import ToolchainVersion, probe_toolchain_version
from pinmod.utils.file_io import atomic_write, read_text

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = "module _ // Auto generated by {homepage}. DO NOT EDIT\n"


def skeleton(go_directive: str, homepage: str = "") -> str:
    """新建描述文件的最小内容：头注释、空行、go 指令"""
    homepage = homepage or get_config().homepage
    return HEADER_TEMPLATE.format(homepage=homepage) + f"\ngo {go_directive}\n"


class ModFile:
    """打开的描述文件句柄

    除直接依赖所在行之外，原文逐字节保留。
    自动拉取开关在打开时确定，句柄生命周期内不再变化。
    close() 或 discard() 只能调用一次；关闭后继续修改或再次关闭抛 StateError。
    """

    def __init__(
        self,
        text: str,
        filepath: str | Path,
        source: str = "",
        selector: RequireSelector = select_direct_require,
    ) -> None:
        self.filepath = Path(filepath)
        self._text = text
        parsed = parse(text, source or str(self.filepath))
        self._lines = parsed.lines
        self._auto_fetch_disabled = is_auto_fetch_disabled(text)
        try:
            self._direct: RequireLine | None = selector(parsed.requires)
        except ParseError as e:
            if e.path:
                raise
            raise ParseError(str(e), source or str(self.filepath)) from e
        self._loaded: Package | None = None
        if self._direct is not None:
            self._loaded = _package_from_require(self._direct, source or str(self.filepath))
        self._package = self._loaded
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def is_directives_auto_fetch_disabled(self) -> bool:
        """文件中是否声明了关闭传递依赖指令的自动拉取"""
        return self._auto_fetch_disabled

    def direct_package(self) -> Package | None:
        """当前直接依赖；尚未设置 require 时为 None"""
        return self._package

    def set_direct_require(self, pkg: Package) -> None:
        """整体替换直接依赖，仅修改内存，不写盘"""
        self._check_open("set_direct_require")
        comment = annotation.encode(pkg.rel_path, pkg.build_envs, pkg.build_flags)
        if comment == INDIRECT:
            # 该注释会被当作间接依赖标记，重新打开后无法识别为直接依赖
            raise ValidationError(f"相对路径不能为 {INDIRECT!r}: {pkg}")
        self._package = pkg
        logger.debug("设置直接依赖: %s -> %s", self.filepath, pkg)

    def render(self) -> str:
        """生成 close() 将写入的完整文本"""
        self._check_open("render")
        pkg = self._package
        if pkg is None or pkg == self._loaded:
            return self._text

        comment = annotation.encode(pkg.rel_path, pkg.build_envs, pkg.build_flags)
        direct = self._direct
        if direct is None:
            text = self._text
            if text and not text.endswith("\n"):
                text += "\n"
            return text + "\n" + format_require(pkg.module.path, pkg.module.version, comment) + "\n"

        lines = list(self._lines)
        old = lines[direct.lineno - 1]
        ending = old[len(old.rstrip("\r\n")):]
        lines[direct.lineno - 1] = format_require(
            pkg.module.path, pkg.module.version, comment,
            in_block=direct.in_block, indent=direct.indent,
        ) + ending
        return "".join(lines)

    def discard(self) -> None:
        """放弃修改并关闭句柄，不写盘（只读使用时调用）"""
        self._check_open("discard")
        self._closed = True
        logger.debug("描述文件句柄已丢弃: %s", self.filepath)

    def close(self) -> None:
        """写入目标路径（完整覆盖），之后句柄不可再用

        异常:
            WriteError: 写入失败；目标文件原内容不保证保留
            StateError: 重复关闭
        """
        content = self.render()
        self._closed = True
        try:
            atomic_write(self.filepath, content)
        except OSError as e:
            raise WriteError(f"写入描述文件失败: {self.filepath}: {e}") from e
        logger.info("描述文件已写入: %s", self.filepath)

    def __enter__(self) -> ModFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._closed:
            return
        if exc_type is None:
            self.close()
        else:
            # 出错时放弃写盘
            self._closed = True

    def _check_open(self, op: str) -> None:
        if self._closed:
            raise StateError(f"描述文件已关闭，不能调用 {op}: {self.filepath}")

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"ModFile({str(self.filepath)!r}, {state}, direct={self._package})"


def _package_from_require(req: RequireLine, source: str) -> Package:
    try:
        meta = annotation.decode(req.comment)
    except ParseError as e:
        raise ParseError(str(e), source, req.lineno) from e
    return Package(
        module=Module(req.path, req.version),
        rel_path=meta.rel_path,
        build_flags=meta.build_flags,
        build_envs=meta.build_envs,
    )


def _read(path: Path) -> str:
    try:
        return read_text(path)
    except FileNotFoundError as e:
        raise NotFoundError(f"描述文件不存在: {path}") from e
    except (UnicodeDecodeError, ValueError) as e:
        raise ParseError(f"无法读取描述文件: {e}", str(path)) from e
    except OSError as e:
        # 目录、无读权限等
        raise ParseError(f"无法读取描述文件: {e.strerror or e}", str(path)) from e


def open_mod_file(
    path: str | Path,
    selector: RequireSelector = select_direct_require,
) -> ModFile:
    """打开已有描述文件，写回同一路径

    异常:
        NotFoundError: 文件不存在
        ParseError: 文件格式无效
    """
    p = Path(path)
    mf = ModFile(_read(p), p, selector=selector)
    logger.debug("已打开描述文件: %s (直接依赖: %s)", p, mf.direct_package())
    return mf


def create_from_existing_or_new(
    source: str | Path,
    dest: str | Path,
    toolchain: ToolchainVersion | None = None,
    selector: RequireSelector = select_direct_require,
) -> ModFile:
    """复制已有描述文件或新建骨架，持久化目标为 dest

    source 为空或不存在时新建骨架；此时未传入 toolchain 则探测当前工具链版本。
    close() 之前不会写入 dest，也从不修改 source。
    """
    dest_path = Path(dest)
    if source and Path(source).exists():
        src = Path(source)
        mf = ModFile(_read(src), dest_path, source=str(src), selector=selector)
        logger.info("从 %s 复制描述文件 -> %s", src, dest_path)
        return mf

    if toolchain is None:
        cfg = get_config()
        toolchain = probe_toolchain_version(cfg.toolchain_cmd, timeout=cfg.toolchain_timeout)
    text = skeleton(render_go_directive(toolchain))
    logger.info("新建描述文件: %s (go %s)", dest_path, render_go_directive(toolchain))
    return ModFile(text, dest_path, selector=selector)
