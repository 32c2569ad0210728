"""go 指令版本策略

工具链自 1.21 起，`go mod init` 写入完整语义化版本；
此前只写 <major>.<minor>。新建描述文件时需与当前工具链的约定保持一致。
"""

from __future__ import annotations

from pinmod.core.toolchain import GO_1_21, ToolchainVersion


def render_go_directive(toolchain: ToolchainVersion) -> str:
    """返回新建描述文件中 go 指令应写入的版本字符串"""
    if toolchain < GO_1_21:
        return f"{toolchain.major}.{toolchain.minor}"
    return str(toolchain)
