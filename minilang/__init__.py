"""
minilang - front end for the MiniLang teaching language.

MiniLang is a tiny imperative language with ``let`` bindings, assignment,
``print``, ``if``/``else`` and ``while``.  This package turns source text
into a token list, the token list into an abstract syntax tree, and checks
that tree for undeclared variables and type errors.

Quick start
-----------
    >>> from minilang import check_source
    >>> result = check_source('let x = 10; print x + 1;')
    >>> result.valid
    True

Pipeline stages are also available on their own::

    tokens  = tokenize(text)
    program = parse(tokens)
    verdict = analyze(program)
"""

__version__ = "0.1.0"

from minilang.config import AnalyzerConfig, FrontendConfig
from minilang.errors import (
    LexError,
    LexicalError,
    MinilangError,
    SemanticError,
    SourceSpan,
    SyntaxError,
)
from minilang.frontend import CheckResult, check_source
from minilang.lexer import tokenize
from minilang.parser import parse, parse_source
from minilang.printer import ast_to_dict, format_ast
from minilang.semantic import MiniType, SemanticResult, analyze
from minilang.tokens import Token, TokenKind

__all__ = [
    "__version__",
    "AnalyzerConfig",
    "FrontendConfig",
    "LexError",
    "LexicalError",
    "MinilangError",
    "SemanticError",
    "SourceSpan",
    "CheckResult",
    "check_source",
    "tokenize",
    "parse",
    "parse_source",
    "ast_to_dict",
    "format_ast",
    "MiniType",
    "SemanticResult",
    "analyze",
    "Token",
    "TokenKind",
]
