"""Tests for the ``gomin`` command-line entry point."""

from pathlib import Path

import pytest

from gomin import MinifyConfig, config_context
from gomin.cli import main

HELLO = 'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println(-1 < -2)\n}\n'


@pytest.fixture
def go_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.go"
    path.write_text(HELLO, encoding="utf-8")
    return path


class TestSuccess:
    def test_writes_minified_source(self, go_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(go_file)]) == 0
        captured = capsys.readouterr()
        assert captured.out == 'package main;import "fmt";func main(){fmt.Println(-1< -2)}'
        assert captured.err == ""

    def test_final_newline_from_config(
        self, go_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with config_context(MinifyConfig(final_newline=True)):
            assert main([str(go_file)]) == 0
        assert capsys.readouterr().out.endswith("}\n")


class TestFailures:
    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "nope.go")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("gomin: ")
        assert "nope.go" in captured.err

    def test_parse_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.go"
        path.write_text("package p\n\nfunc f() {\n", encoding="utf-8")
        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith(f"gomin: {path}:4:1 expected '}}', found EOF")

    def test_invalid_utf8(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "latin1.go"
        path.write_bytes(b'package p\nvar s = "\xe9"\n')
        assert main([str(path)]) == 1
        assert capsys.readouterr().err.startswith("gomin: ")

    def test_no_arguments_is_usage_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2
        assert "usage: gomin" in capsys.readouterr().err

    def test_too_many_arguments_is_usage_error(self, go_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(go_file), str(go_file)])
        assert exc_info.value.code == 2
