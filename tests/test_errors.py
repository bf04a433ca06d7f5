# tests/test_errors.py
"""
Tests for the error hierarchy and its rendering.
"""

import pytest

from minilang.errors import (
    ConditionTypeError,
    ErrorPhase,
    ErrorSeverity,
    LexError,
    LexicalError,
    M,
    MinilangError,
    SemanticError,
    SourceSpan,
    SyntaxError,
    TypeMismatchError,
    UndeclaredVariableError,
    UnexpectedEOFError,
    UnexpectedTokenError,
)
from minilang.tokens import Token, TokenKind


class TestErrorCodes:

    def test_format(self):
        assert str(M.INVALID_CHARACTER) == "MINI-0001"
        assert str(M.UNDECLARED_VARIABLE) == "MINI-3000"

    def test_compares_to_string(self):
        assert M.TYPE_MISMATCH == "MINI-2000"

    def test_phases(self):
        assert M.UNEXPECTED_TOKEN.phase is ErrorPhase.SYNTAX
        assert M.CONDITION_TYPE.phase is ErrorPhase.SEMANTIC


class TestSourceSpan:

    def test_str(self):
        assert str(SourceSpan("a.mini", 3, 4)) == "a.mini:3:4"
        assert str(SourceSpan(line=3, column=4)) == "3:4"

    def test_end_of_input(self):
        span = SourceSpan.end_of_input("a.mini")
        assert span.is_end_of_input
        assert str(span) == "a.mini:end of input"
        assert str(SourceSpan.end_of_input()) == "end of input"

    def test_from_token_covers_lexeme(self):
        span = SourceSpan.from_token(Token(TokenKind.IDENTIFIER, "count", 2, 5))
        assert (span.line, span.column, span.end_column) == (2, 5, 9)


class TestHierarchy:

    @pytest.mark.parametrize("cls", [LexicalError, SyntaxError, SemanticError])
    def test_stage_errors_share_base(self, cls):
        assert issubclass(cls, MinilangError)

    def test_lex_error_alias(self):
        assert LexError is LexicalError

    def test_syntax_subclasses(self):
        assert issubclass(UnexpectedTokenError, SyntaxError)
        assert issubclass(UnexpectedEOFError, SyntaxError)

    def test_semantic_subclasses(self):
        for cls in (UndeclaredVariableError, TypeMismatchError, ConditionTypeError):
            assert issubclass(cls, SemanticError)


class TestRendering:

    def test_lex_error_message(self):
        err = LexicalError("@", span=SourceSpan("f", 1, 2))
        assert err.message == "Unrecognized character '@'"
        assert err.severity is ErrorSeverity.FATAL

    def test_non_printable_character(self):
        assert "U+0007" in LexicalError("\x07").message

    def test_unexpected_token_message(self):
        err = UnexpectedTokenError(got="{", expected=["RPAREN"])
        assert err.message == "Unexpected token '{', expected RPAREN"
        assert err.error_message.hint == "Expected RPAREN"

    def test_several_expected(self):
        err = UnexpectedEOFError(expected=["NUMBER", "STRING"])
        assert err.message == "Unexpected end of input, expected one of: NUMBER, STRING"
        assert err.got == "end of input"

    def test_caret_under_span(self):
        err = UnexpectedTokenError(
            got="{", expected=["RPAREN"], span=SourceSpan("w", 1, 14)
        ).with_source("while (a > 0 { a = a - 1; }")
        lines = err.to_gcc_format().splitlines()
        assert lines[1] == "    while (a > 0 { a = a - 1; }"
        assert lines[2] == "    " + " " * 13 + "^"

    def test_with_source_ignores_end_of_input(self):
        err = UnexpectedEOFError(expected=["SEMICOLON"]).with_source("let x = 1")
        assert err.error_message.source_line == ""

    def test_to_json(self):
        data = UndeclaredVariableError("q", span=SourceSpan("f", 2, 3)).to_json()
        assert data["code"] == "MINI-3000"
        assert data["location"]["line"] == 2
        assert data["phase"] == "semantic"

    def test_notes(self):
        err = TypeMismatchError("+", "string", "number").add_note("left operand is a string")
        assert "note: left operand is a string" in err.to_gcc_format()
