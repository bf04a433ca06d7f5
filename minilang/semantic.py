"""
MiniLang Semantic Analyzer

Performs semantic analysis on a parsed ``Program``:
1. Name resolution - every identifier must have been bound by ``let`` or
   an assignment earlier in the traversal
2. Type checking - arithmetic needs numbers, comparisons need matching
   operand types, ``if``/``while`` conditions must be boolean
3. Diagnostic accumulation - every problem found in one full pass is
   returned, in traversal order

The symbol table is flat: there is a single program-wide mapping from name
to type and blocks do not open scopes, so a ``let`` inside an ``if`` body
stays visible after the block.  The type of the most recent binding wins.

An identifier with no binding has type ``unknown``.  ``unknown`` is
accepted wherever any type is expected, so one undeclared variable yields
exactly one diagnostic instead of a cascade of type mismatches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from minilang import ast_nodes as A
from minilang import errors as E
from minilang.config import AnalyzerConfig
from minilang.visitor import ASTVisitor, left_spine

logger = logging.getLogger(__name__)


# ============================================================================
# PART 1 - TYPE LATTICE
# ============================================================================


class MiniType(Enum):
    """Static types of MiniLang expressions."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"   # result of an unresolved identifier

    def pretty(self) -> str:
        return self.value

    def is_compatible(self, expected: "MiniType") -> bool:
        """``unknown`` is compatible with everything."""
        return self is MiniType.UNKNOWN or self is expected


# ============================================================================
# PART 2 - DIAGNOSTIC MODEL
# ============================================================================


class SemanticDiagnostic:
    """
    Base of the three semantic diagnostic kinds.

    Diagnostics are plain data.  ``to_exception`` converts one into the
    matching :class:`minilang.errors.SemanticError` for fail-fast callers.
    """

    __slots__ = ()

    code: ClassVar[E.ErrorCode]
    loc: A.SourceLoc

    @property
    def message(self) -> str:
        return self.to_exception().message

    @property
    def span(self) -> E.SourceSpan:
        return E.SourceSpan(file=self.loc.file, line=self.loc.line, column=self.loc.col)

    def to_exception(self) -> E.SemanticError:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "errorId": self.code.code,
            "kind": type(self).__name__,
            "message": self.message,
            "severity": E.ErrorSeverity.ERROR.value,
            "location": {
                "file": self.loc.file,
                "line": self.loc.line,
                "column": self.loc.col,
            },
        }

    def to_gcc_format(self) -> str:
        """Format as GCC-style diagnostic string."""
        return f"{self.span}: error: {self.message} [{self.code}]"

    def __str__(self) -> str:
        return self.to_gcc_format()


@dataclass(frozen=True, slots=True)
class UndeclaredVariable(SemanticDiagnostic):
    name: str
    loc: A.SourceLoc = field(default=A.NO_LOC, compare=False)

    code: ClassVar[E.ErrorCode] = E.MinilangErrorCodes.UNDECLARED_VARIABLE

    def to_exception(self) -> E.SemanticError:
        return E.UndeclaredVariableError(self.name, span=self.span)


@dataclass(frozen=True, slots=True)
class TypeMismatch(SemanticDiagnostic):
    operator: str
    left_type: MiniType
    right_type: MiniType
    loc: A.SourceLoc = field(default=A.NO_LOC, compare=False)

    code: ClassVar[E.ErrorCode] = E.MinilangErrorCodes.TYPE_MISMATCH

    def to_exception(self) -> E.SemanticError:
        return E.TypeMismatchError(
            self.operator,
            self.left_type.pretty(),
            self.right_type.pretty(),
            span=self.span,
        )


@dataclass(frozen=True, slots=True)
class ConditionTypeError(SemanticDiagnostic):
    construct: str   # "if" or "while"
    actual_type: MiniType
    loc: A.SourceLoc = field(default=A.NO_LOC, compare=False)

    code: ClassVar[E.ErrorCode] = E.MinilangErrorCodes.CONDITION_TYPE

    def to_exception(self) -> E.SemanticError:
        return E.ConditionTypeError(self.construct, self.actual_type.pretty(), span=self.span)


# ============================================================================
# PART 3 - DIAGNOSTIC COLLECTOR
# ============================================================================


class DiagnosticCollector:
    """Collects diagnostics during analysis, or raises the first one."""

    def __init__(self, *, fail_fast: bool = False) -> None:
        self._diagnostics: List[SemanticDiagnostic] = []
        self._fail_fast = fail_fast

    def report(self, diag: SemanticDiagnostic) -> None:
        if self._fail_fast:
            raise diag.to_exception()
        self._diagnostics.append(diag)

    @property
    def diagnostics(self) -> List[SemanticDiagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    def has_errors(self) -> bool:
        return bool(self._diagnostics)

    def error_count(self) -> int:
        return len(self._diagnostics)


# ============================================================================
# PART 4 - SYMBOL TABLE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Symbol:
    """A symbol table entry: the latest binding of a name."""

    name: str
    type: MiniType
    node: Any = field(default=None, compare=False, repr=False)


class SymbolTable:
    """Flat, program-wide name → symbol mapping."""

    def __init__(self) -> None:
        self._symbols: Dict[str, Symbol] = {}

    def define(self, symbol: Symbol) -> Optional[Symbol]:
        """
        Bind a symbol, overwriting any earlier binding of the same name.
        Returns the previous binding, or None.
        """
        previous = self._symbols.get(symbol.name)
        self._symbols[symbol.name] = symbol
        return previous

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def types(self) -> Dict[str, MiniType]:
        """Snapshot of the table as name → type."""
        return {name: sym.type for name, sym in self._symbols.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)


# ============================================================================
# PART 5 - SEMANTIC ANALYZER
# ============================================================================


@dataclass(frozen=True)
class SemanticResult:
    """Verdict of one ``analyze`` call."""

    valid: bool
    diagnostics: Tuple[SemanticDiagnostic, ...]
    symbols: Dict[str, MiniType]

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)


class _TypeChecker(ASTVisitor):
    """One pre-order pass.  Expression visits return their ``MiniType``."""

    def __init__(self, collector: DiagnosticCollector) -> None:
        self.symbols = SymbolTable()
        self.diagnostics = collector

    # --- Root and statements ---

    def visit_program(self, node: A.Program) -> None:
        self._statements(node.statements)

    def visit_let(self, node: A.Let) -> None:
        self._bind(node.name, self.visit(node.value), node)

    def visit_assign(self, node: A.Assign) -> None:
        self._bind(node.name, self.visit(node.value), node)

    def visit_print(self, node: A.Print) -> None:
        for argument in node.arguments:
            self.visit(argument)

    def visit_if(self, node: A.If) -> None:
        self._condition("if", node.condition)
        self._statements(node.then_block)
        if node.else_block is not None:
            self._statements(node.else_block)

    def visit_while(self, node: A.While) -> None:
        self._condition("while", node.condition)
        self._statements(node.body)

    # --- Expressions ---

    def visit_binary_op(self, node: A.BinaryOp) -> MiniType:
        # Fold the left spine bottom-up; diagnostics keep post-order.
        spine = left_spine(node)
        left = self.visit(spine[-1].left)
        for op in reversed(spine):
            right = self.visit(op.right)
            if not (left.is_compatible(MiniType.NUMBER) and right.is_compatible(MiniType.NUMBER)):
                self.diagnostics.report(
                    TypeMismatch(op.operator.value, left, right, loc=op.loc)
                )
            left = MiniType.NUMBER
        return left

    def visit_comparison(self, node: A.Comparison) -> MiniType:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if MiniType.UNKNOWN not in (left, right) and left is not right:
            self.diagnostics.report(
                TypeMismatch(node.operator.value, left, right, loc=node.loc)
            )
        return MiniType.BOOLEAN

    def visit_number_literal(self, node: A.NumberLiteral) -> MiniType:
        return MiniType.NUMBER

    def visit_string_literal(self, node: A.StringLiteral) -> MiniType:
        return MiniType.STRING

    def visit_identifier(self, node: A.Identifier) -> MiniType:
        symbol = self.symbols.lookup(node.name)
        if symbol is None:
            self.diagnostics.report(UndeclaredVariable(node.name, loc=node.loc))
            return MiniType.UNKNOWN
        return symbol.type

    # --- Helpers ---

    def _statements(self, statements: Tuple[A.Statement, ...]) -> None:
        for statement in statements:
            self.visit(statement)

    def _bind(self, name: str, type_: MiniType, node: A.ASTNode) -> None:
        previous = self.symbols.define(Symbol(name, type_, node))
        if previous is not None and previous.type is not type_:
            logger.debug("Rebinding '%s': %s -> %s", name, previous.type.pretty(), type_.pretty())

    def _condition(self, construct: str, condition: A.Expression) -> None:
        actual = self.visit(condition)
        if not actual.is_compatible(MiniType.BOOLEAN):
            self.diagnostics.report(
                ConditionTypeError(construct, actual, loc=condition.loc)
            )


class SemanticAnalyzer:
    """
    Semantic analyzer for MiniLang programs.

    Stateless between calls: each ``analyze`` builds a fresh symbol table
    and collector, so one instance may be reused freely.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        self.config = config or AnalyzerConfig()

    def analyze(self, program: A.Program) -> SemanticResult:
        """
        Type-check *program* and return the verdict with all diagnostics.

        Raises:
            SemanticError: only when ``config.fail_fast`` is set, for the
                first problem found.
        """
        collector = DiagnosticCollector(fail_fast=self.config.fail_fast)
        checker = _TypeChecker(collector)
        checker.visit(program)

        diagnostics = tuple(collector.diagnostics)
        logger.debug(
            "Analyzed %d statements: %d symbols, %d diagnostics",
            len(program.statements), len(checker.symbols), len(diagnostics),
        )
        return SemanticResult(
            valid=not diagnostics,
            diagnostics=diagnostics,
            symbols=checker.symbols.types(),
        )


def analyze(program: A.Program, config: Optional[AnalyzerConfig] = None) -> SemanticResult:
    """Run :class:`SemanticAnalyzer` over *program*."""
    return SemanticAnalyzer(config).analyze(program)


__all__ = [
    "MiniType",
    "SemanticDiagnostic",
    "UndeclaredVariable",
    "TypeMismatch",
    "ConditionTypeError",
    "DiagnosticCollector",
    "Symbol",
    "SymbolTable",
    "SemanticResult",
    "SemanticAnalyzer",
    "analyze",
]
