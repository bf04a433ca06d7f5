# minilang/errors.py
"""
MiniLang Error Types and Reporting Module

Error infrastructure for the MiniLang front end.  Every stage of the
pipeline reports through the types defined here so that the driver can
render a uniform, GCC-style message.

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────────────┐
│  MinilangError (base)                                                       │
│  ├── LexicalError            - Tokenization failures (alias: LexError)      │
│  ├── SyntaxError             - Parse-time grammar violations                │
│  │   ├── UnexpectedTokenError                                               │
│  │   ├── UnexpectedEOFError                                                 │
│  │   └── InvalidStatementError                                              │
│  └── SemanticError           - Raised only when analysis is fail-fast       │
│      ├── UndeclaredVariableError                                            │
│      ├── TypeMismatchError                                                  │
│      └── ConditionTypeError                                                 │
└─────────────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Each error has a unique code following the pattern MINI-XXXX where XXXX is a
4-digit number in ranges:
  - 0001-0999: Lexical errors
  - 1000-1999: Syntax errors
  - 2000-2999: Semantic errors (type)
  - 3000-3999: Semantic errors (scope)
  - 9000-9999: Internal errors

Lexical and syntax errors are fatal and raised.  Semantic problems are
normally collected as diagnostics by :mod:`minilang.semantic`; the
exception classes below exist for the fail-fast configuration.

Example Usage:
──────────────
    from minilang.errors import SyntaxError, SourceSpan

    try:
        program = parse(tokens)
    except SyntaxError as exc:
        print(exc.to_gcc_format())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto, unique
from typing import Any, Dict, List, Optional, Sequence

# ═══════════════════════════════════════════════════════════════════════════════
# ERROR SEVERITY AND CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorSeverity(Enum):
    """Severity levels for MiniLang errors."""

    # Errors that stop the pipeline
    FATAL = "fatal"

    # Standard errors that must be fixed
    ERROR = "error"

    # Warnings that indicate potential issues
    WARNING = "warning"


@unique
class ErrorPhase(Enum):
    """Compilation phase where the error occurred."""

    LEXICAL = "lexical"        # Tokenization
    SYNTAX = "syntax"          # Parsing
    SEMANTIC = "semantic"      # Type checking, symbol resolution
    INTERNAL = "internal"      # Front-end internals


@unique
class ErrorCategory(Enum):
    """Fine-grained error categories for filtering and statistics."""

    # Lexical categories
    INVALID_CHARACTER = auto()

    # Syntax categories
    UNEXPECTED_TOKEN = auto()
    UNEXPECTED_EOF = auto()
    INVALID_STATEMENT = auto()

    # Semantic categories - Type
    TYPE_MISMATCH = auto()
    CONDITION_TYPE = auto()

    # Semantic categories - Scope
    UNDECLARED_VARIABLE = auto()

    # Internal categories
    INTERNAL_ERROR = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES
# ═══════════════════════════════════════════════════════════════════════════════

class ErrorCode:
    """
    Structured error code of the form ``MINI-NNNN``.

    Ranges:
      - 0001-0999: Lexical errors
      - 1000-1999: Syntax errors
      - 2000-2999: Type errors
      - 3000-3999: Scope errors
      - 9000-9999: Internal errors
    """

    __slots__ = ("prefix", "number", "category", "phase", "default_severity")

    def __init__(
        self,
        prefix: str,
        number: int,
        category: ErrorCategory,
        phase: ErrorPhase,
        default_severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        self.prefix = prefix
        self.number = number
        self.category = category
        self.phase = phase
        self.default_severity = default_severity

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.category.name})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


class MinilangErrorCodes:
    """Predefined error codes for the MiniLang front end."""

    # LEXICAL ERRORS (0001-0999)
    INVALID_CHARACTER = ErrorCode(
        "MINI", 1, ErrorCategory.INVALID_CHARACTER, ErrorPhase.LEXICAL,
        ErrorSeverity.FATAL,
    )

    # SYNTAX ERRORS (1000-1999)
    UNEXPECTED_TOKEN = ErrorCode(
        "MINI", 1000, ErrorCategory.UNEXPECTED_TOKEN, ErrorPhase.SYNTAX,
        ErrorSeverity.FATAL,
    )
    UNEXPECTED_EOF = ErrorCode(
        "MINI", 1001, ErrorCategory.UNEXPECTED_EOF, ErrorPhase.SYNTAX,
        ErrorSeverity.FATAL,
    )
    INVALID_STATEMENT = ErrorCode(
        "MINI", 1002, ErrorCategory.INVALID_STATEMENT, ErrorPhase.SYNTAX,
        ErrorSeverity.FATAL,
    )

    # TYPE ERRORS (2000-2999)
    TYPE_MISMATCH = ErrorCode(
        "MINI", 2000, ErrorCategory.TYPE_MISMATCH, ErrorPhase.SEMANTIC
    )
    CONDITION_TYPE = ErrorCode(
        "MINI", 2001, ErrorCategory.CONDITION_TYPE, ErrorPhase.SEMANTIC
    )

    # SCOPE ERRORS (3000-3999)
    UNDECLARED_VARIABLE = ErrorCode(
        "MINI", 3000, ErrorCategory.UNDECLARED_VARIABLE, ErrorPhase.SEMANTIC
    )

    # INTERNAL ERRORS (9000-9999)
    INTERNAL_ERROR = ErrorCode(
        "MINI", 9000, ErrorCategory.INTERNAL_ERROR, ErrorPhase.INTERNAL,
        ErrorSeverity.FATAL,
    )


# Convenient alias
M = MinilangErrorCodes


# ═══════════════════════════════════════════════════════════════════════════════
# SOURCE LOCATION TYPES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceSpan:
    """
    A span of source code with start and end positions.

    A span with ``line == 0`` denotes the end of the input: the token
    stream was exhausted before the error could be pinned to a token.
    """

    file: str = ""
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0

    def __post_init__(self) -> None:
        # Normalize: if end not specified, use start
        if self.end_line == 0:
            object.__setattr__(self, "end_line", self.line)
        if self.end_column == 0:
            object.__setattr__(self, "end_column", self.column)

    @classmethod
    def from_token(cls, token: Any, file: str = "") -> "SourceSpan":
        """Create a SourceSpan covering the lexeme of *token*."""
        line = getattr(token, "line", 0) or 0
        col = getattr(token, "column", 0) or 0
        lexeme = getattr(token, "lexeme", "") or ""
        return cls(
            file=file,
            line=line,
            column=col,
            end_line=line,
            end_column=col + max(len(lexeme) - 1, 0),
        )

    @classmethod
    def end_of_input(cls, file: str = "") -> "SourceSpan":
        """The position used when the token stream is exhausted."""
        return cls(file=file)

    @property
    def is_end_of_input(self) -> bool:
        return self.line == 0

    def __str__(self) -> str:
        if self.line == 0:
            return f"{self.file}:end of input" if self.file else "end of input"

        parts = []
        if self.file:
            parts.append(self.file)
        parts.append(str(self.line))
        if self.column > 0:
            parts.append(str(self.column))
        return ":".join(parts)


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR MESSAGE FORMATTING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class ErrorNote:
    """Additional note attached to an error, e.g. the observed types."""

    message: str
    span: Optional[SourceSpan] = None
    label: str = ""  # e.g., "note", "help"

    def __str__(self) -> str:
        prefix = f"{self.label}: " if self.label else ""
        if self.span:
            return f"{self.span}: {prefix}{self.message}"
        return f"{prefix}{self.message}"


@dataclass
class ErrorMessage:
    """
    A complete error message with all context.

    This is the internal representation of an error before it's printed.
    """

    code: ErrorCode
    message: str
    span: SourceSpan = field(default_factory=SourceSpan)
    severity: Optional[ErrorSeverity] = None  # None means use code's default
    notes: List[ErrorNote] = field(default_factory=list)
    hint: str = ""
    source_line: str = ""  # The actual source code line, if available

    def __post_init__(self) -> None:
        if self.severity is None:
            self.severity = self.code.default_severity

    def add_note(
        self,
        message: str,
        span: Optional[SourceSpan] = None,
        label: str = "note",
    ) -> "ErrorMessage":
        """Add a note to this error message."""
        self.notes.append(ErrorNote(message=message, span=span, label=label))
        return self

    def with_source(self, line: str) -> "ErrorMessage":
        """Add the source line for display."""
        self.source_line = line
        return self

    def to_gcc_format(self) -> str:
        """Format as a GCC-style error message."""
        severity = self.severity.value if self.severity else "error"
        main = f"{self.span}: {severity}: {self.message} [{self.code}]"

        lines = [main]

        # Add source line with caret if available
        if self.source_line:
            lines.append(f"    {self.source_line}")
            if self.span.column > 0:
                caret_pos = self.span.column - 1
                caret_len = max(1, self.span.end_column - self.span.column + 1)
                lines.append(f"    {' ' * caret_pos}{'^' * caret_len}")

        for note in self.notes:
            lines.append(str(note))

        if self.hint:
            lines.append(f"hint: {self.hint}")

        return "\n".join(lines)

    def to_json(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code.code,
            "message": self.message,
            "severity": self.severity.value if self.severity else "error",
            "location": {
                "file": self.span.file,
                "line": self.span.line,
                "column": self.span.column,
                "end_line": self.span.end_line,
                "end_column": self.span.end_column,
            },
            "phase": self.code.phase.value,
            "category": self.code.category.name,
            "notes": [
                {"message": note.message, "label": note.label}
                for note in self.notes
            ],
            "hint": self.hint,
        }

    def __str__(self) -> str:
        return self.to_gcc_format()


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class MinilangError(Exception):
    """
    Base exception for all MiniLang errors.

    Carries structured error information that can be pretty-printed or
    serialized.
    """

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        severity: Optional[ErrorSeverity] = None,
        notes: Optional[List[ErrorNote]] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.error_message = ErrorMessage(
            code=code or MinilangErrorCodes.INTERNAL_ERROR,
            message=message,
            span=span or SourceSpan(),
            severity=severity,
            notes=notes or [],
            hint=hint,
        )

    @property
    def message(self) -> str:
        return self.error_message.message

    @property
    def code(self) -> ErrorCode:
        return self.error_message.code

    @property
    def span(self) -> SourceSpan:
        return self.error_message.span

    @property
    def line(self) -> int:
        """1-based line, or 0 when the error is at end of input."""
        return self.error_message.span.line

    @property
    def column(self) -> int:
        """1-based column, or 0 when the error is at end of input."""
        return self.error_message.span.column

    @property
    def severity(self) -> ErrorSeverity:
        return self.error_message.severity or ErrorSeverity.ERROR

    def add_note(
        self,
        message: str,
        span: Optional[SourceSpan] = None,
        label: str = "note",
    ) -> "MinilangError":
        """Add a note to this error."""
        self.error_message.add_note(message, span, label)
        return self

    def with_source(self, source: str) -> "MinilangError":
        """Attach the offending source line, looked up from the full text."""
        if self.line > 0:
            lines = source.splitlines()
            if self.line <= len(lines):
                self.error_message.with_source(lines[self.line - 1])
        return self

    def to_gcc_format(self) -> str:
        """Format as a GCC-style error message."""
        return self.error_message.to_gcc_format()

    def to_json(self) -> Dict[str, Any]:
        return self.error_message.to_json()

    def __str__(self) -> str:
        return self.to_gcc_format()


# ───────────────────────────────────────────────────────────────────────────────
# LEXICAL ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class LexicalError(MinilangError):
    """No token pattern matches the character under the cursor."""

    def __init__(
        self,
        char: str,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        if len(char) == 1 and not char.isprintable():
            char_desc = f"U+{ord(char):04X}"
        else:
            char_desc = repr(char)

        super().__init__(
            message=f"Unrecognized character {char_desc}",
            code=MinilangErrorCodes.INVALID_CHARACTER,
            span=span,
            **kwargs,
        )
        self.char = char


LexError = LexicalError


# ───────────────────────────────────────────────────────────────────────────────
# SYNTAX ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class SyntaxError(MinilangError):
    """Error during parsing."""

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        expected: Optional[Sequence[str]] = None,
        got: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message=message,
            code=code or MinilangErrorCodes.UNEXPECTED_TOKEN,
            span=span,
            **kwargs,
        )
        self.expected = list(expected) if expected else []
        self.got = got

        if self.expected and not self.error_message.hint:
            if len(self.expected) == 1:
                self.error_message.hint = f"Expected {self.expected[0]}"
            else:
                self.error_message.hint = f"Expected one of: {', '.join(self.expected)}"


class UnexpectedTokenError(SyntaxError):
    """Unexpected token encountered during parsing."""

    def __init__(
        self,
        got: str,
        expected: Optional[Sequence[str]] = None,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        expected_msg = ""
        if expected:
            if len(expected) == 1:
                expected_msg = f", expected {expected[0]}"
            else:
                expected_msg = f", expected one of: {', '.join(expected)}"

        super().__init__(
            message=f"Unexpected token {got!r}{expected_msg}",
            code=MinilangErrorCodes.UNEXPECTED_TOKEN,
            span=span,
            expected=expected,
            got=got,
            **kwargs,
        )


class UnexpectedEOFError(SyntaxError):
    """The token stream ended where more input was required."""

    def __init__(
        self,
        expected: Optional[Sequence[str]] = None,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        msg = "Unexpected end of input"
        if expected:
            msg += f", expected {expected[0]}" if len(expected) == 1 else f", expected one of: {', '.join(expected)}"

        super().__init__(
            message=msg,
            code=MinilangErrorCodes.UNEXPECTED_EOF,
            span=span or SourceSpan.end_of_input(),
            expected=expected,
            got="end of input",
            **kwargs,
        )


class InvalidStatementError(SyntaxError):
    """A statement cannot start with the current token."""

    def __init__(
        self,
        got: str,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message=f"Invalid statement starting with {got!r}",
            code=MinilangErrorCodes.INVALID_STATEMENT,
            span=span,
            expected=["LET", "PRINT", "IF", "WHILE", "IDENTIFIER"],
            got=got,
            **kwargs,
        )


# ───────────────────────────────────────────────────────────────────────────────
# SEMANTIC ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class SemanticError(MinilangError):
    """Error during semantic analysis (raised only in fail-fast mode)."""

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message=message,
            code=code or MinilangErrorCodes.TYPE_MISMATCH,
            span=span,
            **kwargs,
        )


class UndeclaredVariableError(SemanticError):
    """Reference to a variable that was never bound."""

    def __init__(
        self,
        name: str,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message=f"Undeclared variable '{name}'",
            code=MinilangErrorCodes.UNDECLARED_VARIABLE,
            span=span,
            **kwargs,
        )
        self.name = name


class TypeMismatchError(SemanticError):
    """Operand types do not fit the operator."""

    def __init__(
        self,
        operator: str,
        left_type: str,
        right_type: str,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message=(
                f"Type mismatch for operator '{operator}': "
                f"'{left_type}' and '{right_type}'"
            ),
            code=MinilangErrorCodes.TYPE_MISMATCH,
            span=span,
            **kwargs,
        )
        self.operator = operator
        self.left_type = left_type
        self.right_type = right_type


class ConditionTypeError(SemanticError):
    """An ``if``/``while`` condition is not boolean."""

    def __init__(
        self,
        construct: str,
        actual_type: str,
        span: Optional[SourceSpan] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message=(
                f"Condition of '{construct}' must be 'boolean', "
                f"got '{actual_type}'"
            ),
            code=MinilangErrorCodes.CONDITION_TYPE,
            span=span,
            **kwargs,
        )
        self.construct = construct
        self.actual_type = actual_type


__all__ = [
    "ErrorSeverity",
    "ErrorPhase",
    "ErrorCategory",
    "ErrorCode",
    "MinilangErrorCodes",
    "SourceSpan",
    "ErrorNote",
    "ErrorMessage",
    "MinilangError",
    "LexicalError",
    "LexError",
    "SyntaxError",
    "UnexpectedTokenError",
    "UnexpectedEOFError",
    "InvalidStatementError",
    "SemanticError",
    "UndeclaredVariableError",
    "TypeMismatchError",
    "ConditionTypeError",
]
