"""描述文件行级解析测试"""

from __future__ import annotations

import pytest

from pinmod.core.exceptions import ParseError
from pinmod.core.modfile.parser import (
    RequireLine,
    format_require,
    parse,
    select_direct_require,
    split_comment,
)

_HEADER = "module _ // Auto generated by https://github.com/bwplotka/bingo. DO NOT EDIT\n\ngo 1.14\n"


class TestSplitComment:
    def test_first_double_slash_wins(self) -> None:
        assert split_comment("module _ // Auto generated by https://x.y") == (
            "module _", "Auto generated by https://x.y",
        )

    def test_no_comment(self) -> None:
        assert split_comment("  go 1.14\n") == ("go 1.14", "")


class TestParse:
    def test_minimal(self) -> None:
        parsed = parse(_HEADER)
        assert parsed.module_path == "_"
        assert parsed.requires == []
        assert "".join(parsed.lines) == _HEADER

    def test_single_require(self) -> None:
        parsed = parse(_HEADER + "\nrequire github.com/a/b v2.4.3+incompatible // cmd/b -v\n")
        assert parsed.requires == [RequireLine(
            path="github.com/a/b", version="v2.4.3+incompatible",
            comment="cmd/b -v", lineno=5,
        )]

    def test_require_block(self) -> None:
        text = _HEADER + "\nrequire (\n\tgithub.com/a/b v1.0.0 // indirect\n\tgithub.com/c/d v0.0.0-20170110192607-30d10be49292\n)\n"
        parsed = parse(text)
        assert [(r.path, r.in_block, r.indent, r.lineno) for r in parsed.requires] == [
            ("github.com/a/b", True, "\t", 6),
            ("github.com/c/d", True, "\t", 7),
        ]

    def test_replace_block_passed_through(self) -> None:
        text = _HEADER + "\nreplace (\n\t// comment\n\tk8s.io/klog => github.com/simonpasquier/klog-gokit v0.1.0\n)\n"
        assert parse(text).requires == []

    @pytest.mark.parametrize("version", [
        "v1", "v1.2", "v100.0.0", "v2.4.3+incompatible",
        "v5.0.0-beta.0.20161028183111-bd73d950fa44+incompatible",
        "v0.9.0-pre1.0.20180607123607-faf4ec335fe0",
    ])
    def test_valid_versions(self, version: str) -> None:
        assert parse(_HEADER + f"require a.b/c {version}\n").requires[0].version == version

    @pytest.mark.parametrize("version", ["1.0.0", "latest", "v01.0.0", "v1.0.0.0", "master"])
    def test_invalid_versions(self, version: str) -> None:
        with pytest.raises(ParseError, match="无效的模块版本"):
            parse(_HEADER + f"require a.b/c {version}\n")

    @pytest.mark.parametrize(("text", "match"), [
        ("go 1.14\n", "缺少 module"),
        (_HEADER + "foo bar\n", "未知语句"),
        (_HEADER + "require (\n\ta.b/c v1.0.0\n", "未闭合"),
        (_HEADER + ")\n", "多余"),
        (_HEADER + "require a.b/c\n", "require 条目应为"),
        (_HEADER + "require a.b/c v1.0.0 extra\n", "require 条目应为"),
        (_HEADER + "module other\n", "重复的 module"),
        (_HEADER + "go (\n)\n", "不支持块语法"),
    ])
    def test_malformed(self, text: str, match: str) -> None:
        with pytest.raises(ParseError, match=match):
            parse(text, "x.mod")

    def test_error_carries_location(self) -> None:
        with pytest.raises(ParseError) as exc:
            parse(_HEADER + "foo bar\n", "tool.mod")
        assert exc.value.lineno == 4
        assert exc.value.path == "tool.mod"
        assert str(exc.value).startswith("tool.mod:4:")


def _req(comment: str, lineno: int = 1) -> RequireLine:
    return RequireLine(path=f"a.b/c{lineno}", version="v1.0.0", comment=comment, lineno=lineno)


class TestSelectDirectRequire:
    def test_none(self) -> None:
        assert select_direct_require([]) is None

    def test_sole_require(self) -> None:
        r = _req("cmd/x")
        assert select_direct_require([r]) is r

    def test_skips_indirect(self) -> None:
        direct = _req("", 2)
        assert select_direct_require([_req("indirect", 1), direct, _req("indirect", 3)]) is direct

    def test_only_indirect(self) -> None:
        assert select_direct_require([_req("indirect")]) is None

    @pytest.mark.parametrize("comments", [
        ("", "cmd/tool"),
        ("cmd/tool", ""),
        ("", "indirect", "-tags=netgo"),
        ("", "", "CGO_ENABLED=0"),
    ])
    def test_prefers_annotated_require(self, comments: tuple[str, ...]) -> None:
        reqs = [_req(c, i) for i, c in enumerate(comments, start=1)]
        annotated = next(r for r in reqs if r.comment and r.comment != "indirect")
        assert select_direct_require(reqs) is annotated

    def test_multiple_annotated_rejected(self) -> None:
        with pytest.raises(ParseError, match="多个直接依赖"):
            select_direct_require([_req("", 1), _req("cmd/a", 2), _req("cmd/b", 3)])

    def test_multiple_direct_rejected(self) -> None:
        with pytest.raises(ParseError, match="多个直接依赖"):
            select_direct_require([_req("", 1), _req("", 2)])


class TestFormatRequire:
    def test_without_comment(self) -> None:
        assert format_require("a.b/c", "v1", "") == "require a.b/c v1"

    def test_with_comment(self) -> None:
        assert format_require("a.b/c", "v1", "cmd/x") == "require a.b/c v1 // cmd/x"

    def test_in_block(self) -> None:
        assert format_require("a.b/c", "v1", "-v", in_block=True, indent="\t") == "\ta.b/c v1 // -v"
