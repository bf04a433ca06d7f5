# tests/test_lexer.py
"""
Tests for the MiniLang tokenizer: source text → token list.
"""

import pytest

from minilang.errors import LexError, MinilangErrorCodes
from minilang.lexer import Lexer, tokenize
from minilang.tokens import KEYWORDS, Token, TokenKind
from tests.conftest import (
    COUNTDOWN, LET_CONST, MISSING_RPAREN, NUMBER_CONDITION,
    STRING_PLUS_NUMBER, UNDECLARED_ADD,
)

K = TokenKind


def kinds(text):
    return [t.kind for t in tokenize(text)]


def lexemes(text):
    return [t.lexeme for t in tokenize(text)]


class TestBasicTokens:

    def test_empty_source(self):
        assert tokenize("") == []

    def test_whitespace_and_comments_only(self):
        assert tokenize("  \n\t// nothing here\n   ") == []

    def test_let_statement(self):
        tokens = tokenize(LET_CONST)
        assert [t.kind for t in tokens] == [K.LET, K.IDENTIFIER, K.ASSIGN, K.NUMBER, K.SEMICOLON]
        assert tokens[1].lexeme == "x"
        assert tokens[3].lexeme == "10"

    def test_print_expression(self):
        assert kinds(UNDECLARED_ADD) == [K.PRINT, K.IDENTIFIER, K.PLUS, K.NUMBER, K.SEMICOLON]

    def test_if_statement(self):
        assert kinds(NUMBER_CONDITION) == [
            K.IF, K.LPAREN, K.NUMBER, K.RPAREN,
            K.LBRACE, K.PRINT, K.NUMBER, K.SEMICOLON, K.RBRACE,
        ]

    def test_while_statement_tokenizes_despite_syntax_error(self):
        assert kinds(MISSING_RPAREN)[:6] == [K.WHILE, K.LPAREN, K.IDENTIFIER, K.GT, K.NUMBER, K.LBRACE]

    def test_string_literal_keeps_quotes(self):
        tokens = tokenize(STRING_PLUS_NUMBER)
        assert tokens[3] == Token(K.STRING, '"a"', 1, 9)

    def test_decimal_number(self):
        assert lexemes("3.25") == ["3.25"]

    def test_trailing_dot_is_not_part_of_number(self):
        with pytest.raises(LexError):
            tokenize("3.")

    def test_all_punctuation(self):
        assert kinds("( ) { } ; ,") == [K.LPAREN, K.RPAREN, K.LBRACE, K.RBRACE, K.SEMICOLON, K.COMMA]

    def test_arithmetic_operators(self):
        assert kinds("+ - * /") == [K.PLUS, K.MINUS, K.MULTIPLY, K.DIVIDE]


class TestKeywords:

    @pytest.mark.parametrize("word,kind", sorted(KEYWORDS.items()))
    def test_keyword(self, word, kind):
        assert kinds(word) == [kind]

    @pytest.mark.parametrize("word", ["ifx", "lets", "printer", "While", "else_", "_if"])
    def test_keyword_prefix_is_identifier(self, word):
        tokens = tokenize(word)
        assert len(tokens) == 1
        assert tokens[0].kind is K.IDENTIFIER
        assert tokens[0].lexeme == word

    def test_identifier_with_digits_and_underscores(self):
        assert lexemes("_a1 b_2") == ["_a1", "b_2"]


class TestOperatorPriority:

    @pytest.mark.parametrize("text,kind", [
        ("<=", K.LE),
        (">=", K.GE),
        ("==", K.EQ),
        ("<", K.LT),
        (">", K.GT),
        ("=", K.ASSIGN),
    ])
    def test_single_operator(self, text, kind):
        assert kinds(text) == [kind]

    def test_two_char_operators_win(self):
        assert kinds("a<=b") == [K.IDENTIFIER, K.LE, K.IDENTIFIER]

    def test_triple_equals_splits(self):
        assert kinds("===") == [K.EQ, K.ASSIGN]

    def test_spaced_operator_is_two_tokens(self):
        assert kinds("< =") == [K.LT, K.ASSIGN]


class TestComments:

    def test_comment_to_end_of_line(self):
        assert kinds("let a = 1; // let b = 2;\nprint a;") == [
            K.LET, K.IDENTIFIER, K.ASSIGN, K.NUMBER, K.SEMICOLON,
            K.PRINT, K.IDENTIFIER, K.SEMICOLON,
        ]

    def test_comment_at_end_of_input(self):
        assert kinds("print 1; // done") == [K.PRINT, K.NUMBER, K.SEMICOLON]

    def test_single_slash_is_divide(self):
        assert kinds("a / b") == [K.IDENTIFIER, K.DIVIDE, K.IDENTIFIER]


class TestPositions:

    def test_first_token_at_one_one(self):
        tok = tokenize("let")[0]
        assert (tok.line, tok.column) == (1, 1)

    def test_columns_on_one_line(self):
        tokens = tokenize(LET_CONST)
        assert [t.column for t in tokens] == [1, 5, 7, 9, 11]

    def test_newline_resets_column(self):
        tokens = tokenize("let a = 1;\n  print a;")
        printed = tokens[5]
        assert printed.kind is K.PRINT
        assert (printed.line, printed.column) == (2, 3)

    def test_lines_after_comment(self):
        tokens = tokenize(COUNTDOWN)
        assert tokens[0].kind is K.LET
        assert tokens[0].line == 2

    def test_positions_are_monotonic(self):
        tokens = tokenize(COUNTDOWN)
        positions = [(t.line, t.column) for t in tokens]
        assert positions == sorted(positions)
        assert len(set(positions)) == len(positions)


class TestProperties:

    def test_idempotent(self):
        assert tokenize(COUNTDOWN) == tokenize(COUNTDOWN)

    def test_lexeme_matches_source_text(self):
        lines = COUNTDOWN.splitlines()
        for tok in tokenize(COUNTDOWN):
            line = lines[tok.line - 1]
            start = tok.column - 1
            assert line[start:start + len(tok.lexeme)] == tok.lexeme

    def test_joined_lexemes_equal_source_without_blanks(self):
        text = 'let total=a+b*(c-2);print "x",total;'
        assert "".join(lexemes(text)) == text

    def test_lexer_class_matches_function(self):
        assert Lexer(COUNTDOWN).tokenize() == tokenize(COUNTDOWN)


class TestLexErrors:

    def test_unrecognized_character(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("let a = 1;\nlet b = a @ 2;")
        err = excinfo.value
        assert err.char == "@"
        assert (err.line, err.column) == (2, 11)
        assert err.code == MinilangErrorCodes.INVALID_CHARACTER

    def test_unterminated_string(self):
        with pytest.raises(LexError) as excinfo:
            tokenize('print "open;')
        assert excinfo.value.char == '"'
        assert excinfo.value.column == 7

    def test_string_cannot_span_lines(self):
        with pytest.raises(LexError):
            tokenize('print "one\ntwo";')

    @pytest.mark.parametrize("text", ["!", "&&", "||", "#", "a.b", "'x'"])
    def test_unsupported_characters(self, text):
        with pytest.raises(LexError):
            tokenize(text)

    def test_error_carries_filename(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("$", "bad.mini")
        assert excinfo.value.span.file == "bad.mini"
        assert "bad.mini:1:1" in excinfo.value.to_gcc_format()

    def test_error_shows_source_line(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("let a = ?;")
        rendered = excinfo.value.to_gcc_format()
        assert "let a = ?;" in rendered
        assert "        ^" in rendered

    @pytest.mark.parametrize("text", ["١٢", "１", "1٢"])
    def test_numbers_are_ascii_digits_only(self, text):
        with pytest.raises(LexError):
            tokenize(f"let x = {text};")
