"""集中配置管理

替代各模块散落的 DEFAULT_* 常量，提供统一的配置入口。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields

from pinmod.core.exceptions import ConfigError
from pinmod.utils.file_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_HOMEPAGE = "https://github.com/bwplotka/bingo"


@dataclass
class Config:
    """全局配置"""

    # 描述文件目录（每个工具一个 .mod 文件）
    mod_dir: str = ".bingo"

    # 工具链
    toolchain_cmd: str = "go"
    toolchain_timeout: float = 30

    # 新建文件头注释中的主页地址
    homepage: str = DEFAULT_HOMEPAGE

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("mod_dir", "toolchain_cmd", "homepage"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"配置项 {name} 必须是字符串")
        timeout = self.toolchain_timeout
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"配置项 toolchain_timeout 必须是正数: {timeout!r}")

    @classmethod
    def from_file(cls, path: str = "configs/default.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/default.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
