"""require 行尾注释编解码

注释中以空白分隔的各个 token 按内容逐个分类，不依赖出现顺序:
  - 以 "-" 开头: 构建参数，如 -tags=yolo,linux
  - 含 "=" : 构建环境变量，如 CGO_ENABLED=1
  - 其余: 子包相对路径，至多出现一次

编码时固定输出顺序: 相对路径、环境变量、构建参数。
"""

from __future__ import annotations

from dataclasses import dataclass

from pinmod.core.exceptions import ParseError


@dataclass(frozen=True)
class Annotation:
    """注释中携带的元数据"""

    rel_path: str = ""
    build_envs: tuple[str, ...] = ()
    build_flags: tuple[str, ...] = ()


def decode(comment: str) -> Annotation:
    """解析注释文本；空注释返回全空元数据

    异常:
        ParseError: 出现多个相对路径 token
    """
    rel_path = ""
    envs: list[str] = []
    flags: list[str] = []
    for token in comment.split():
        if token.startswith("-"):
            flags.append(token)
        elif "=" in token:
            envs.append(token)
        elif rel_path:
            raise ParseError(
                f"注释中出现多个相对路径: {rel_path!r}, {token!r}"
            )
        else:
            rel_path = token
    return Annotation(rel_path=rel_path, build_envs=tuple(envs), build_flags=tuple(flags))


def encode(
    rel_path: str = "",
    build_envs: tuple[str, ...] | list[str] = (),
    build_flags: tuple[str, ...] | list[str] = (),
) -> str:
    """生成规范顺序的注释文本（不含 "//"）；无元数据时返回空串"""
    parts = [rel_path] if rel_path else []
    parts.extend(build_envs)
    parts.extend(build_flags)
    return " ".join(parts)
