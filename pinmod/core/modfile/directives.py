"""文件级指令注释扫描"""

from __future__ import annotations

NO_DIRECTIVE_FETCH = "// bingo:no_directive_fetch"


def is_auto_fetch_disabled(text: str) -> bool:
    """require 段之前（块外）是否存在关闭自动拉取的指令注释

    只接受整行精确匹配（忽略首尾空白），不做模糊匹配。
    """
    depth = 0
    for raw in text.splitlines():
        line = raw.strip()
        if depth == 0 and line == NO_DIRECTIVE_FETCH:
            return True
        code = line.split("//", 1)[0].strip()
        if not code:
            continue
        if depth == 0 and code.split()[0] == "require":
            return False
        if code.endswith("("):
            depth += 1
        elif code == ")" and depth > 0:
            depth -= 1
    return False
