# tests/test_frontend.py
"""
End-to-end tests of ``check_source``: text in, verdict out.
"""

import logging

import pytest

import minilang
from minilang.config import AnalyzerConfig, FrontendConfig
from minilang.errors import LexError, SemanticError, SyntaxError
from minilang.frontend import CheckResult, check_source
from minilang.semantic import MiniType, UndeclaredVariable
from tests.conftest import (
    COUNTDOWN, LET_CONST, MISSING_RPAREN, MULTI_ERROR, UNDECLARED_ADD,
)


class TestCheckSource:

    def test_valid_program(self):
        result = check_source(COUNTDOWN)
        assert isinstance(result, CheckResult)
        assert result.valid
        assert len(result.program.statements) == 2

    def test_semantic_errors_are_returned(self):
        result = check_source(UNDECLARED_ADD)
        assert not result.valid
        assert result.semantic.diagnostics == (UndeclaredVariable("x"),)

    def test_symbols_exposed(self):
        assert check_source(LET_CONST).semantic.symbols == {"x": MiniType.NUMBER}

    def test_lex_error_propagates(self):
        with pytest.raises(LexError):
            check_source("let a = 1 # 2;")

    def test_syntax_error_propagates_with_source_line(self):
        with pytest.raises(SyntaxError) as excinfo:
            check_source(MISSING_RPAREN, FrontendConfig(filename="w.mini"))
        rendered = excinfo.value.to_gcc_format()
        assert rendered.startswith("w.mini:1:14: fatal:")
        assert MISSING_RPAREN in rendered

    def test_fail_fast(self):
        with pytest.raises(SemanticError):
            check_source(MULTI_ERROR, FrontendConfig(fail_fast=True))

    def test_filename_reaches_diagnostics(self):
        result = check_source(UNDECLARED_ADD, FrontendConfig(filename="p.mini"))
        assert result.semantic.diagnostics[0].loc.file == "p.mini"


class TestConfig:

    def test_defaults(self):
        config = FrontendConfig()
        assert config.filename == "<input>"
        assert not config.fail_fast
        assert config.validate() == []

    def test_analyzer_config_derived(self):
        assert FrontendConfig(fail_fast=True).analyzer_config() == AnalyzerConfig(fail_fast=True)

    def test_empty_filename_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="minilang"):
            check_source(LET_CONST, FrontendConfig(filename=""))
        assert "filename should not be empty" in caplog.text

    def test_summary_logged_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="minilang"):
            check_source(COUNTDOWN, FrontendConfig(filename="c.mini"))
        assert "c.mini: 2 statements, 0 diagnostics" in caplog.text


class TestPackageApi:

    def test_reexports(self):
        assert minilang.check_source is check_source
        assert minilang.tokenize("x")[0].lexeme == "x"
        assert minilang.parse_source(LET_CONST) == minilang.parse(minilang.tokenize(LET_CONST))
        assert minilang.analyze(minilang.parse_source(LET_CONST)).valid

    def test_version(self):
        assert minilang.__version__.count(".") == 2
