"""minilang/parser.py – token list → MiniLang AST.

Design principles
-----------------
* **Recursive descent**, one method per grammar rule, with a single token
  of lookahead (``current``; ``None`` once the stream is exhausted).
* **Fail-fast with location** – the first violation raises a
  :class:`~minilang.errors.SyntaxError` naming the expected token kind and
  the offending position (or "end of input").  No resynchronization.
* **Always terminates** – every loop iteration either consumes a token or
  raises.

Grammar
-------
::

    program    := statement*
    statement  := letStmt | assignStmt | printStmt | ifStmt | whileStmt
    letStmt    := 'let' IDENTIFIER '=' expression ';'
    assignStmt := IDENTIFIER '=' expression ';'
    printStmt  := 'print' expression (',' expression)* ';'
    ifStmt     := 'if' '(' comparison ')' block ('else' block)?
    whileStmt  := 'while' '(' comparison ')' block
    block      := '{' statement* '}'
    comparison := expression (('==' | '<' | '>' | '<=' | '>=') expression)?
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := NUMBER | STRING | IDENTIFIER | '(' expression ')'

Comparisons are not chainable and only appear as ``if``/``while``
conditions.  Arithmetic folds left-associatively.

Public API
----------
``parse(tokens) -> Program``
    Parse an already tokenized program.

``parse_source(text) -> Program``
    Tokenize and parse in one step.
"""

from __future__ import annotations

import logging
from typing import Dict, Final, List, Optional, Sequence, Tuple

from minilang import ast_nodes as A
from minilang.errors import (
    InvalidStatementError,
    SourceSpan,
    UnexpectedEOFError,
    UnexpectedTokenError,
)
from minilang.lexer import tokenize
from minilang.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

K = TokenKind

_ADDITIVE: Final[Dict[TokenKind, A.ArithOp]] = {
    K.PLUS: A.ArithOp.ADD,
    K.MINUS: A.ArithOp.SUB,
}

_MULTIPLICATIVE: Final[Dict[TokenKind, A.ArithOp]] = {
    K.MULTIPLY: A.ArithOp.MUL,
    K.DIVIDE: A.ArithOp.DIV,
}

_COMPARISON: Final[Dict[TokenKind, A.CompareOp]] = {
    K.EQ: A.CompareOp.EQ,
    K.LT: A.CompareOp.LT,
    K.GT: A.CompareOp.GT,
    K.LE: A.CompareOp.LE,
    K.GE: A.CompareOp.GE,
}

_FACTOR_START: Final = ["NUMBER", "STRING", "IDENTIFIER", "LPAREN"]

_STATEMENT_START: Final = ["LET", "PRINT", "IF", "WHILE", "IDENTIFIER"]


class Parser:
    """Single-use recursive-descent parser over one token list."""

    def __init__(self, tokens: Sequence[Token], filename: str = "") -> None:
        self.tokens = tokens
        self.filename = filename
        self.index = 0
        self.current: Optional[Token] = tokens[0] if tokens else None

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def advance(self) -> Optional[Token]:
        """Move past the current token and return the new current token."""
        self.index += 1
        if self.index < len(self.tokens):
            self.current = self.tokens[self.index]
        else:
            self.current = None
        return self.current

    def at_end(self) -> bool:
        return self.current is None

    def check(self, kind: TokenKind) -> bool:
        return self.current is not None and self.current.kind is kind

    def consume(self, kind: TokenKind) -> Token:
        """Return the current token if it has *kind* and advance, else raise."""
        token = self.current
        if token is None:
            raise UnexpectedEOFError(
                expected=[kind.name],
                span=SourceSpan.end_of_input(self.filename),
            )
        if token.kind is not kind:
            raise UnexpectedTokenError(
                got=token.lexeme,
                expected=[kind.name],
                span=self._span(token),
            )
        self.advance()
        return token

    def _span(self, token: Token) -> SourceSpan:
        return SourceSpan.from_token(token, self.filename)

    def _loc(self, token: Token) -> A.SourceLoc:
        return A.SourceLoc(self.filename, token.line, token.column)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse(self) -> A.Program:
        statements: List[A.Statement] = []
        while not self.at_end():
            statements.append(self._statement())
        logger.debug("Parsed %d top-level statements", len(statements))
        return A.Program(tuple(statements), loc=A.SourceLoc(self.filename, 1, 1))

    def _statement(self) -> A.Statement:
        token = self.current
        if token is None:
            raise UnexpectedEOFError(
                expected=_STATEMENT_START,
                span=SourceSpan.end_of_input(self.filename),
            )
        if token.kind is K.LET:
            return self._let()
        if token.kind is K.IDENTIFIER:
            return self._assign()
        if token.kind is K.PRINT:
            return self._print()
        if token.kind is K.IF:
            return self._if()
        if token.kind is K.WHILE:
            return self._while()
        raise InvalidStatementError(got=token.lexeme, span=self._span(token))

    def _let(self) -> A.Let:
        start = self.consume(K.LET)
        name = self.consume(K.IDENTIFIER)
        self.consume(K.ASSIGN)
        value = self._expression()
        self.consume(K.SEMICOLON)
        return A.Let(name.lexeme, value, loc=self._loc(start))

    def _assign(self) -> A.Assign:
        name = self.consume(K.IDENTIFIER)
        self.consume(K.ASSIGN)
        value = self._expression()
        self.consume(K.SEMICOLON)
        return A.Assign(name.lexeme, value, loc=self._loc(name))

    def _print(self) -> A.Print:
        start = self.consume(K.PRINT)
        arguments = [self._expression()]
        while self.check(K.COMMA):
            self.advance()
            arguments.append(self._expression())
        self.consume(K.SEMICOLON)
        return A.Print(tuple(arguments), loc=self._loc(start))

    def _if(self) -> A.If:
        start = self.consume(K.IF)
        condition = self._condition()
        then_block = self._block()
        else_block: Optional[Tuple[A.Statement, ...]] = None
        if self.check(K.ELSE):
            self.advance()
            else_block = self._block()
        return A.If(condition, then_block, else_block, loc=self._loc(start))

    def _while(self) -> A.While:
        start = self.consume(K.WHILE)
        condition = self._condition()
        body = self._block()
        return A.While(condition, body, loc=self._loc(start))

    def _condition(self) -> A.Expression:
        self.consume(K.LPAREN)
        condition = self._comparison()
        self.consume(K.RPAREN)
        return condition

    def _block(self) -> Tuple[A.Statement, ...]:
        self.consume(K.LBRACE)
        statements: List[A.Statement] = []
        while not self.check(K.RBRACE) and not self.at_end():
            statements.append(self._statement())
        self.consume(K.RBRACE)
        return tuple(statements)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _comparison(self) -> A.Expression:
        left = self._expression()
        token = self.current
        if token is not None and token.kind in _COMPARISON:
            self.advance()
            right = self._expression()
            return A.Comparison(left, _COMPARISON[token.kind], right, loc=self._loc(token))
        return left

    def _expression(self) -> A.Expression:
        left = self._term()
        while self.current is not None and self.current.kind in _ADDITIVE:
            op = self.current
            self.advance()
            right = self._term()
            left = A.BinaryOp(left, _ADDITIVE[op.kind], right, loc=self._loc(op))
        return left

    def _term(self) -> A.Expression:
        left = self._factor()
        while self.current is not None and self.current.kind in _MULTIPLICATIVE:
            op = self.current
            self.advance()
            right = self._factor()
            left = A.BinaryOp(left, _MULTIPLICATIVE[op.kind], right, loc=self._loc(op))
        return left

    def _factor(self) -> A.Expression:
        token = self.current
        if token is None:
            raise UnexpectedEOFError(
                expected=_FACTOR_START,
                span=SourceSpan.end_of_input(self.filename),
            )
        if token.kind is K.NUMBER:
            self.advance()
            return A.NumberLiteral(float(token.lexeme), loc=self._loc(token))
        if token.kind is K.STRING:
            self.advance()
            return A.StringLiteral(token.lexeme[1:-1], loc=self._loc(token))
        if token.kind is K.IDENTIFIER:
            self.advance()
            return A.Identifier(token.lexeme, loc=self._loc(token))
        if token.kind is K.LPAREN:
            self.advance()
            inner = self._expression()
            self.consume(K.RPAREN)
            return inner
        raise UnexpectedTokenError(
            got=token.lexeme,
            expected=_FACTOR_START,
            span=self._span(token),
        )


def parse(tokens: Sequence[Token], filename: str = "") -> A.Program:
    """Parse a token list into a :class:`~minilang.ast_nodes.Program`.

    Raises:
        SyntaxError: at the first token that violates the grammar.
    """
    return Parser(tokens, filename).parse()


def parse_source(text: str, filename: str = "") -> A.Program:
    """Tokenize and parse *text*."""
    return parse(tokenize(text, filename), filename)


__all__ = ["Parser", "parse", "parse_source"]
