"""模块描述文件数据模型

数据类:
- Module: 模块路径 + 版本
- Package: 受管的直接依赖（模块 + 子包路径 + 构建参数）
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from pinmod.core.exceptions import ValidationError

_INDEX_SUFFIX_RE = re.compile(r"\.\d+$")


@dataclass(frozen=True)
class Module:
    """模块路径与版本；版本按不透明字符串处理（含伪版本、+incompatible）"""

    path: str
    version: str

    def __str__(self) -> str:
        return f"{self.path}@{self.version}"


@dataclass(frozen=True)
class Package:
    """受管的直接依赖

    build_flags / build_envs 保持原始顺序，允许重复。
    构造时接受任意字符串可迭代对象，统一存为元组。
    """

    module: Module
    rel_path: str = ""
    build_flags: tuple[str, ...] = field(default_factory=tuple)
    build_envs: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "build_flags", _as_tuple(self.build_flags))
        object.__setattr__(self, "build_envs", _as_tuple(self.build_envs))

    def path(self) -> str:
        """实际构建的包导入路径"""
        if not self.rel_path:
            return self.module.path
        return f"{self.module.path}/{self.rel_path}"

    def with_version(self, version: str) -> Package:
        return replace(self, module=Module(self.module.path, version))

    def __str__(self) -> str:
        return f"{self.path()}@{self.module.version}"


def _as_tuple(items: Iterable[str] | None) -> tuple[str, ...]:
    if items is None:
        return ()
    if isinstance(items, str):
        return (items,)
    return tuple(items)


def name_from_mod_file(path: str | Path) -> str:
    """从描述文件名推导工具名: foo.mod -> foo, foo.1.mod -> foo"""
    name = Path(path).name
    if not name.endswith(".mod"):
        raise ValidationError(f"不是 .mod 描述文件: {path}")
    return _INDEX_SUFFIX_RE.sub("", name[: -len(".mod")])
