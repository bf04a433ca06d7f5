# tests/test_cli.py
"""
Tests for the ``minilang`` command-line driver.
"""

import json

import pytest

from minilang import __version__
from minilang.main import EXIT_ERROR, EXIT_INFRA, EXIT_OK, EXIT_SYNTAX, main
from tests.conftest import (
    COUNTDOWN, LET_CONST, MISSING_RPAREN, MULTI_ERROR, UNDECLARED_ADD, long_chain,
)


class TestCheckCommand:

    def test_valid(self, source_file, capsys):
        path = source_file(COUNTDOWN)
        assert main(["check", path]) == EXIT_OK
        assert capsys.readouterr().out == f"{path}: semantically correct\n"

    def test_semantic_errors(self, source_file, capsys):
        path = source_file(MULTI_ERROR)
        assert main(["check", path]) == EXIT_ERROR
        out = capsys.readouterr().out
        assert f"{path}:1:7: error: Undeclared variable 'a' [MINI-3000]" in out
        assert "[MINI-2000]" in out
        assert "[MINI-2001]" in out
        assert "--- 3 semantic error(s) ---" in out

    def test_json_diagnostics(self, source_file, capsys):
        path = source_file(UNDECLARED_ADD)
        assert main(["check", path, "--format", "json"]) == EXIT_ERROR
        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert len(records) == 1
        assert records[0]["kind"] == "UndeclaredVariable"

    def test_json_valid(self, source_file, capsys):
        assert main(["check", source_file(LET_CONST), "-f", "json"]) == EXIT_OK
        assert json.loads(capsys.readouterr().out) == {"valid": True, "diagnostics": []}

    def test_syntax_error(self, source_file, capsys):
        path = source_file(MISSING_RPAREN)
        assert main(["check", path]) == EXIT_SYNTAX
        out = capsys.readouterr().out
        assert f"{path}:1:14" in out
        assert "RPAREN" in out

    def test_lex_error(self, source_file, capsys):
        assert main(["check", source_file("let a = @;")]) == EXIT_SYNTAX
        assert "[MINI-0001]" in capsys.readouterr().out

    def test_fail_fast_reports_one(self, source_file, capsys):
        path = source_file(MULTI_ERROR)
        assert main(["check", path, "--fail-fast"]) == EXIT_ERROR
        out = capsys.readouterr().out
        assert "[MINI-3000]" in out
        assert "[MINI-2000]" not in out

    def test_missing_file(self, tmp_path):
        assert main(["check", str(tmp_path / "absent.mini")]) == EXIT_INFRA


class TestTokensCommand:

    def test_lists_tokens(self, source_file, capsys):
        assert main(["tokens", source_file(LET_CONST)]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "1:1\tLET\tlet"
        assert lines[-1] == "1:11\tSEMICOLON\t;"
        assert len(lines) == 5

    def test_lex_error(self, source_file):
        assert main(["tokens", source_file("?")]) == EXIT_SYNTAX


class TestParseCommand:

    def test_tree(self, source_file, capsys):
        assert main(["parse", source_file(LET_CONST)]) == EXIT_OK
        assert capsys.readouterr().out.splitlines() == ["Program", "  Let x", "    Number 10"]

    def test_json(self, source_file, capsys):
        assert main(["parse", source_file(LET_CONST), "--format", "json", "--locations"]) == EXIT_OK
        tree = json.loads(capsys.readouterr().out)
        assert tree["statements"][0]["loc"] == {"line": 1, "column": 1}

    def test_syntax_error(self, source_file):
        assert main(["parse", source_file("let = 1;")]) == EXIT_SYNTAX


class TestGlobalOptions:

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == EXIT_INFRA
        assert "commands" in capsys.readouterr().err

    def test_verbose_logs_summary(self, source_file, capsys):
        assert main(["-vv", "check", source_file(LET_CONST)]) == EXIT_OK
        assert "1 statements, 0 diagnostics" in capsys.readouterr().err


class TestRobustness:

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "latin1.mini"
        path.write_bytes(b"let x = \xff;")
        assert main(["check", str(path)]) == EXIT_INFRA
        assert "Cannot read source file" in capsys.readouterr().err

    def test_check_long_sum(self, source_file):
        assert main(["check", source_file(f"let x = {long_chain(2000)};")]) == EXIT_OK

    def test_parse_long_sum(self, source_file, capsys):
        assert main(["parse", source_file(f"let x = {long_chain(2000)};")]) == EXIT_OK
        assert capsys.readouterr().out.count("BinaryOp +") == 1999

    def test_tokens_lex_error_shows_source_line(self, source_file, capsys):
        assert main(["tokens", source_file("let a = 1;\nlet b = a @ 2;")]) == EXIT_SYNTAX
        out = capsys.readouterr().out
        assert "    let b = a @ 2;" in out
        assert "    " + " " * 10 + "^" in out
