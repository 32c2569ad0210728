"""模块描述文件行级解析

不做完整语法树，只做两件事:
  1. 校验文件结构（已知语句、块的开闭、module 语句存在）
  2. 找出所有 require 条目及其所在行，供直接依赖选择与原位替换

其余内容（replace / exclude 块、注释等）原样保留在行列表中。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from pinmod.core.exceptions import ParseError

logger = logging.getLogger(__name__)

KNOWN_VERBS = frozenset({
    "module", "go", "toolchain", "godebug",
    "require", "replace", "exclude", "retract",
})
BLOCK_VERBS = frozenset({"godebug", "require", "replace", "exclude", "retract"})
INDIRECT = "indirect"

# vMAJOR[.MINOR[.PATCH]][-prerelease][+build]，覆盖伪版本与 +incompatible
_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_NUM = r"(?:0|[1-9]\d*)"
MODULE_VERSION_RE = re.compile(
    rf"^v{_NUM}(?:\.{_NUM}){{0,2}}(?:-{_IDENT})?(?:\+{_IDENT})?$"
)


@dataclass(frozen=True)
class RequireLine:
    """一条 require 条目"""

    path: str
    version: str
    comment: str
    lineno: int  # 从 1 开始
    in_block: bool = False
    indent: str = ""


@dataclass
class ParsedModFile:
    """解析结果：原始行（含换行符）+ require 条目"""

    lines: list[str]
    module_path: str
    requires: list[RequireLine] = field(default_factory=list)


RequireSelector = Callable[[list[RequireLine]], "RequireLine | None"]


def split_comment(line: str) -> tuple[str, str]:
    """拆分为 (代码, 注释)，注释不含 "//" 且去除首尾空白"""
    code, sep, comment = line.partition("//")
    return code.strip(), comment.strip() if sep else ""


def parse(text: str, path: str = "") -> ParsedModFile:
    """解析描述文件文本

    异常:
        ParseError: 未知语句、块未闭合、多余的 ")"、缺少 module 语句、
                    require 条目无法拆分为 <path> <version>
    """
    lines = text.splitlines(keepends=True)
    module_path: str | None = None
    requires: list[RequireLine] = []
    block: str | None = None

    for lineno, raw in enumerate(lines, start=1):
        code, comment = split_comment(raw)
        if not code:
            continue

        if block is not None:
            if code == ")":
                block = None
            elif code.endswith("("):
                raise ParseError("不支持嵌套块", path, lineno)
            elif block == "require":
                indent = raw[: len(raw) - len(raw.lstrip())]
                requires.append(_parse_require(
                    code.split(), comment, lineno, path, in_block=True, indent=indent,
                ))
            continue

        tokens = code.split()
        verb = tokens[0]
        if code == ")":
            raise ParseError("多余的 \")\"", path, lineno)
        if verb not in KNOWN_VERBS:
            raise ParseError(f"未知语句: {verb}", path, lineno)

        args = tokens[1:]
        if args in (["("], ["()"], ["(", ")"]):
            if verb not in BLOCK_VERBS:
                raise ParseError(f"{verb} 不支持块语法", path, lineno)
            if args == ["("]:
                block = verb
            continue

        if verb == "module":
            if module_path is not None:
                raise ParseError("重复的 module 语句", path, lineno)
            if len(args) != 1:
                raise ParseError("module 语句应为: module <path>", path, lineno)
            module_path = _unquote(args[0])
        elif verb == "go" and len(args) != 1:
            raise ParseError("go 语句应为: go <version>", path, lineno)
        elif verb == "require":
            requires.append(_parse_require(args, comment, lineno, path))

    if block is not None:
        raise ParseError(f"{block} 块未闭合", path)
    if module_path is None:
        raise ParseError("缺少 module 语句", path)

    logger.debug("解析完成: %s (%d 行, %d 条 require)", path or "<text>", len(lines), len(requires))
    return ParsedModFile(lines=lines, module_path=module_path, requires=requires)


def _parse_require(
    args: list[str], comment: str, lineno: int, path: str,
    in_block: bool = False, indent: str = "",
) -> RequireLine:
    if len(args) != 2:
        raise ParseError("require 条目应为: <path> <version>", path, lineno)
    mod_path, version = _unquote(args[0]), args[1]
    if not mod_path:
        raise ParseError("require 条目缺少模块路径", path, lineno)
    if not MODULE_VERSION_RE.match(version):
        raise ParseError(f"无效的模块版本: {version}", path, lineno)
    return RequireLine(
        path=mod_path, version=version, comment=comment,
        lineno=lineno, in_block=in_block, indent=indent,
    )


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"`":
        return token[1:-1]
    return token


def select_direct_require(requires: list[RequireLine]) -> RequireLine | None:
    """默认的直接依赖选择规则

    忽略注释恰为 "indirect" 的条目；剩余恰好一条时即为直接依赖，
    没有剩余时返回 None。剩余多条时只保留带元数据注释的条目，
    恰好一条则选中，否则报错。
    """
    candidates = [r for r in requires if r.comment != INDIRECT]
    if not candidates:
        return None
    if len(candidates) > 1:
        annotated = [r for r in candidates if r.comment]
        if len(annotated) == 1:
            return annotated[0]
        candidates = annotated or candidates
        raise ParseError(
            "存在多个直接依赖: "
            + ", ".join(f"{r.path}@{r.version} (行 {r.lineno})" for r in candidates)
        )
    return candidates[0]


def format_require(
    path: str, version: str, comment: str, in_block: bool = False, indent: str = "",
) -> str:
    """生成 require 条目文本（不含换行符）；注释为空时不写 "//" """
    text = f"{indent}{path} {version}" if in_block else f"require {path} {version}"
    if comment:
        text += f" // {comment}"
    return text
