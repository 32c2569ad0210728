"""工具链版本探测

职责:
- ToolchainVersion: 可比较的工具链版本值
- probe_toolchain_version(): 执行 `go version` 获取当前工具链版本

超时只约束探测命令本身，与描述文件的解析无关。
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass

from pinmod.core.exceptions import ExecutionError, ParseError
from pinmod.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(
    r"^(?:go)?(\d+)\.(\d+)(?:\.(\d+))?(?:(alpha|beta|rc)(\d+))?$"
)
_PROBE_RE = re.compile(r"\bgo version go(\S+)")
_PRERELEASE_RANK = {"alpha": 0, "beta": 1, "rc": 2}


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ToolchainVersion:
    """工具链版本，如 1.21.3 / 1.14 / 1.21rc2

    patch 为 None 表示版本字符串中没有补丁号（比较时按 0 处理），
    预发布版本排在同号正式版之前。
    """

    major: int
    minor: int
    patch: int | None = None
    prerelease: str = ""

    @classmethod
    def parse(cls, text: str) -> ToolchainVersion:
        m = _VERSION_RE.match(text.strip())
        if m is None:
            raise ParseError(f"无法识别的工具链版本: {text!r}")
        major, minor, patch, pre_kind, pre_num = m.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch) if patch is not None else None,
            prerelease=f"{pre_kind}{pre_num}" if pre_kind else "",
        )

    def _key(self) -> tuple:
        if self.prerelease:
            kind = self.prerelease.rstrip("0123456789")
            num = int(self.prerelease[len(kind):] or 0)
            pre = (0, _PRERELEASE_RANK.get(kind, -1), num)
        else:
            pre = (1, 0, 0)
        return (self.major, self.minor, self.patch or 0, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ToolchainVersion):
            return NotImplemented
        return self._key() < other._key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolchainVersion):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}"
        if self.patch is not None:
            text += f".{self.patch}"
        return text + self.prerelease


GO_1_21 = ToolchainVersion(1, 21, 0)


def probe_toolchain_version(
    cmd: str = "go",
    timeout: float | None = 30,
    executor: CommandExecutor | None = None,
) -> ToolchainVersion:
    """执行 `<cmd> version` 并解析输出

    异常:
        ExecutionError: 命令不存在、超时或返回非零
        ParseError: 输出无法识别
    """
    executor = executor or get_executor()
    r = executor.execute([cmd, "version"], timeout=timeout)
    if not r.success:
        raise ExecutionError(
            f"{cmd} version 失败 (rc={r.returncode}): {r.stderr.strip()[:500]}"
        )
    m = _PROBE_RE.search(r.stdout)
    if m is None:
        raise ParseError(f"无法从输出识别工具链版本: {r.stdout.strip()!r}")
    version = ToolchainVersion.parse(m.group(1))
    logger.debug("工具链版本: %s (%s)", version, cmd)
    return version
