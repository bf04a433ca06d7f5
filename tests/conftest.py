# tests/conftest.py
"""
Shared MiniLang source snippets and fixtures.
"""

import logging

import pytest

from minilang.lexer import tokenize
from minilang.parser import parse


# ── Source snippets ──────────────────────────────────────────────

LET_CONST = "let x = 10;"

UNDECLARED_ADD = "print x + 1;"

NUMBER_CONDITION = "if (1) { print 1; }"

MISSING_RPAREN = "while (a > 0 { a = a - 1; }"

STRING_PLUS_NUMBER = 'let x = "a"; let y = x + 1;'

COUNTDOWN = """\
// count down from ten
let n = 10;
while (n > 0) {
    print "n =", n;
    n = n - 1;
}
"""

IF_ELSE = """\
let x = 3;
if (x >= 2) {
    print "big";
} else {
    print "small";
}
"""

FLAT_SCOPE = """\
if (1 < 2) {
    let inner = 5;
}
print inner;
"""

REBIND = """\
let v = 1;
v = "now a string";
print v;
"""

MULTI_ERROR = """\
print a;
let s = "x";
let t = s * 2;
while (s) { }
"""


# ── Fixtures ─────────────────────────────────────────────────────

def parse_text(text: str, filename: str = ""):
    return parse(tokenize(text, filename), filename)


def long_chain(terms: int, op: str = "+", term: str = "1") -> str:
    """``term op term op ...`` with *terms* operands."""
    return f" {op} ".join([term] * terms)


@pytest.fixture(autouse=True)
def _reset_minilang_logger():
    """Drop handlers the CLI installs so they do not outlive a test."""
    yield
    logger = logging.getLogger("minilang")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def source_file(tmp_path):
    """Write MiniLang source to a temporary file and return its path."""

    def _write(text: str, name: str = "prog.mini") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
