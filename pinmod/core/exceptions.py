"""统一异常体系

所有业务异常继承 PinModError，替代散落的 ValueError / OSError。
CLI 层可据此输出友好提示。
"""

from __future__ import annotations


class PinModError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NotFoundError(PinModError):
    """要求打开的描述文件不存在"""

    code = "NOT_FOUND"


class ParseError(PinModError):
    """描述文件或 require 行格式无效"""

    code = "PARSE_ERROR"

    def __init__(self, message: str, path: str = "", lineno: int = 0) -> None:
        self.path = path
        self.lineno = lineno
        if path and lineno:
            message = f"{path}:{lineno}: {message}"
        elif path:
            message = f"{path}: {message}"
        super().__init__(message)


class WriteError(PinModError):
    """持久化写入失败"""

    code = "WRITE_ERROR"


class StateError(PinModError):
    """在已关闭的句柄上继续操作"""

    code = "STATE_ERROR"


class ConfigError(PinModError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(PinModError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ExecutionError(PinModError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"
