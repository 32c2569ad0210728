"""测试共享 fixture — 隔离全局配置、命令执行器与日志 handler"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from pinmod.core import config as config_mod
from pinmod.utils import shell


@pytest.fixture(autouse=True)
def _isolate_globals() -> Iterator[None]:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    saved_config = config_mod._current
    saved_executor = shell.get_executor()
    config_mod._current = None
    yield
    config_mod._current = saved_config
    shell.set_executor(saved_executor)
    # CLI 入口会重新配置根日志器，测试结束后还原
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
    root.setLevel(saved_level)
