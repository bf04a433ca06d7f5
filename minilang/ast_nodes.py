# minilang/ast_nodes.py
"""
MiniLang Abstract Syntax Tree node definitions.

Design invariants
-----------------
* Every node is a frozen dataclass (immutable after construction).
* Child sequences are tuples, never lists.
* Every node records the location of its first token (``loc``) for
  diagnostics.  ``loc`` is excluded from equality, so trees built by hand
  in tests compare equal to parsed ones.
* The node set is closed: statements are ``Let``, ``Assign``, ``Print``,
  ``If`` and ``While``; expressions are ``BinaryOp``, ``Comparison``,
  ``NumberLiteral``, ``StringLiteral`` and ``Identifier``.  Each node
  dispatches to exactly one ``visit_*`` method of
  :class:`minilang.visitor.ASTVisitor`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Tuple, Union


# ── Source Location ──────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class SourceLoc:
    """Source location for diagnostics."""

    file: str = ""
    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}:{self.col}"
        return f"{self.line}:{self.col}"


#: Sentinel for nodes built without a source position.
NO_LOC = SourceLoc()


def _loc() -> Any:
    return field(default=NO_LOC, compare=False, repr=False)


# ── Operators ────────────────────────────────────────────────────

class ArithOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class CompareOp(Enum):
    EQ = "=="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="


# ── Base ─────────────────────────────────────────────────────────

class ASTNode:
    """Common capability of every node: visitor dispatch and child walk."""

    __slots__ = ()

    #: Name of the ``ASTVisitor`` method handling this node.
    visit_method: str = ""

    def children(self) -> Iterator["ASTNode"]:
        return iter(())


# ── Expressions ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class NumberLiteral(ASTNode):
    value: float
    loc: SourceLoc = _loc()

    visit_method = "visit_number_literal"


@dataclass(frozen=True, slots=True)
class StringLiteral(ASTNode):
    value: str
    loc: SourceLoc = _loc()

    visit_method = "visit_string_literal"


@dataclass(frozen=True, slots=True)
class Identifier(ASTNode):
    name: str
    loc: SourceLoc = _loc()

    visit_method = "visit_identifier"


@dataclass(frozen=True, slots=True)
class BinaryOp(ASTNode):
    left: Expression
    operator: ArithOp
    right: Expression
    loc: SourceLoc = _loc()

    visit_method = "visit_binary_op"

    def children(self) -> Iterator[ASTNode]:
        yield self.left
        yield self.right


@dataclass(frozen=True, slots=True)
class Comparison(ASTNode):
    left: Expression
    operator: CompareOp
    right: Expression
    loc: SourceLoc = _loc()

    visit_method = "visit_comparison"

    def children(self) -> Iterator[ASTNode]:
        yield self.left
        yield self.right


Expression = Union[BinaryOp, Comparison, NumberLiteral, StringLiteral, Identifier]


# ── Statements ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Let(ASTNode):
    """``let name = value;`` – declares and initializes a variable."""

    name: str
    value: Expression
    loc: SourceLoc = _loc()

    visit_method = "visit_let"

    def children(self) -> Iterator[ASTNode]:
        yield self.value


@dataclass(frozen=True, slots=True)
class Assign(ASTNode):
    """``name = value;`` – rebinds a variable."""

    name: str
    value: Expression
    loc: SourceLoc = _loc()

    visit_method = "visit_assign"

    def children(self) -> Iterator[ASTNode]:
        yield self.value


@dataclass(frozen=True, slots=True)
class Print(ASTNode):
    arguments: Tuple[Expression, ...]
    loc: SourceLoc = _loc()

    visit_method = "visit_print"

    def children(self) -> Iterator[ASTNode]:
        yield from self.arguments


@dataclass(frozen=True, slots=True)
class If(ASTNode):
    """``if (cond) { ... } else { ... }``; ``else_block`` is ``None`` when absent."""

    condition: Expression
    then_block: Tuple[Statement, ...]
    else_block: Optional[Tuple[Statement, ...]] = None
    loc: SourceLoc = _loc()

    visit_method = "visit_if"

    def children(self) -> Iterator[ASTNode]:
        yield self.condition
        yield from self.then_block
        if self.else_block is not None:
            yield from self.else_block


@dataclass(frozen=True, slots=True)
class While(ASTNode):
    condition: Expression
    body: Tuple[Statement, ...]
    loc: SourceLoc = _loc()

    visit_method = "visit_while"

    def children(self) -> Iterator[ASTNode]:
        yield self.condition
        yield from self.body


Statement = Union[Let, Assign, Print, If, While]


@dataclass(frozen=True, slots=True)
class Program(ASTNode):
    statements: Tuple[Statement, ...]
    loc: SourceLoc = _loc()

    visit_method = "visit_program"

    def children(self) -> Iterator[ASTNode]:
        yield from self.statements


__all__ = [
    "SourceLoc",
    "NO_LOC",
    "ArithOp",
    "CompareOp",
    "ASTNode",
    "NumberLiteral",
    "StringLiteral",
    "Identifier",
    "BinaryOp",
    "Comparison",
    "Expression",
    "Let",
    "Assign",
    "Print",
    "If",
    "While",
    "Statement",
    "Program",
]
