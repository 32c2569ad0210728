"""模块描述文件读写

拆分说明:
- models.py: Module / Package 数据模型
- version_policy.py: 新建文件的 go 指令版本
- annotation.py: require 行尾注释编解码
- directives.py: 文件级指令注释扫描
- parser.py: 行级解析与直接依赖选择
- modfile.py: ModFile 句柄
"""

from pinmod.core.modfile.annotation import Annotation, decode, encode
from pinmod.core.modfile.directives import NO_DIRECTIVE_FETCH, is_auto_fetch_disabled
from pinmod.core.modfile.modfile import ModFile, create_from_existing_or_new, open_mod_file
from pinmod.core.modfile.models import Module, Package, name_from_mod_file
from pinmod.core.modfile.parser import RequireLine, select_direct_require
from pinmod.core.modfile.version_policy import render_go_directive

__all__ = [
    "Annotation",
    "decode",
    "encode",
    "NO_DIRECTIVE_FETCH",
    "is_auto_fetch_disabled",
    "ModFile",
    "create_from_existing_or_new",
    "open_mod_file",
    "Module",
    "Package",
    "name_from_mod_file",
    "RequireLine",
    "select_direct_require",
    "render_go_directive",
]
