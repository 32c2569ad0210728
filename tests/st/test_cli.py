"""CLI 端到端测试"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from pinmod.cli import main
from pinmod.core.modfile import Module, Package, open_mod_file

HEADER = "module _ // Auto generated by https://github.com/bwplotka/bingo. DO NOT EDIT\n"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


class TestCli:
    def test_init_new(self, runner: CliRunner, tmp_path: Path) -> None:
        dest = tmp_path / ".bingo" / "tool.mod"
        result = runner.invoke(main, ["init", str(dest), "--go", "1.22.3"])
        assert result.exit_code == 0, result.output
        assert dest.read_text() == f"{HEADER}\ngo 1.22.3\n"

    def test_set_and_show(self, runner: CliRunner, tmp_path: Path) -> None:
        dest = tmp_path / "prom.mod"
        result = runner.invoke(main, [
            "set", str(dest), "github.com/prometheus/prometheus@v2.4.3+incompatible",
            "--from", str(tmp_path / "missing.mod"), "--go", "1.14",
            "--rel-path", "cmd/prometheus",
            "--env", "CGO_ENABLED=1", "--flag", "-tags=yolo,linux",
        ])
        assert result.exit_code == 0, result.output
        assert dest.read_text() == (
            f"{HEADER}\ngo 1.14\n\nrequire github.com/prometheus/prometheus v2.4.3+incompatible"
            " // cmd/prometheus CGO_ENABLED=1 -tags=yolo,linux\n"
        )

        result = runner.invoke(main, ["show", str(dest)])
        assert result.exit_code == 0, result.output
        assert "github.com/prometheus/prometheus/cmd/prometheus@v2.4.3+incompatible" in result.output
        assert "CGO_ENABLED=1" in result.output
        assert "-tags=yolo,linux" in result.output
        assert "自动拉取指令: 开启" in result.output

    def test_set_existing(self, runner: CliRunner, tmp_path: Path) -> None:
        dest = tmp_path / "x.mod"
        dest.write_text(f"{HEADER}\ngo 1.14\n\nrequire a.b/c v1.0.0 // cmd/c\n")
        result = runner.invoke(main, ["set", str(dest), "a.b/c@v1.2.0"])
        assert result.exit_code == 0, result.output
        assert open_mod_file(dest).direct_package() == Package(module=Module("a.b/c", "v1.2.0"))

    def test_show_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["show", str(tmp_path / "nope.mod")])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output

    def test_show_without_require(self, runner: CliRunner, tmp_path: Path) -> None:
        dest = tmp_path / "x.mod"
        dest.write_text(f"{HEADER}\ngo 1.14\n\n// bingo:no_directive_fetch\n")
        result = runner.invoke(main, ["show", str(dest)])
        assert result.exit_code == 0, result.output
        assert "直接依赖: (无)" in result.output
        assert "自动拉取指令: 关闭" in result.output

    @pytest.mark.parametrize("args", [
        ["a.b/c"],
        ["a.b/c@v1", "--flag", "tags=x"],
        ["a.b/c@v1", "--env", "NOEQUALS"],
        ["a.b/c@v1", "--rel-path", "a b"],
    ])
    def test_bad_parameters(self, runner: CliRunner, tmp_path: Path, args: list[str]) -> None:
        result = runner.invoke(main, ["set", str(tmp_path / "x.mod"), *args])
        assert result.exit_code == 2
        assert not (tmp_path / "x.mod").exists()

    def test_show_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        d = tmp_path / "dir.mod"
        d.mkdir()
        result = runner.invoke(main, ["show", str(d)])
        assert result.exit_code == 1
        assert "PARSE_ERROR" in result.output

    def test_set_indirect_rel_path(self, runner: CliRunner, tmp_path: Path) -> None:
        dest = tmp_path / "x.mod"
        dest.write_text(f"{HEADER}\ngo 1.14\n")
        result = runner.invoke(main, ["set", str(dest), "a.b/c@v1.0.0", "--rel-path", "indirect"])
        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.output
        assert dest.read_text() == f"{HEADER}\ngo 1.14\n"
