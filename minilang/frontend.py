"""minilang/frontend.py – the whole pipeline in one call.

    source text → tokenize → parse → analyze

Lexical and syntax errors propagate to the caller unchanged; semantic
problems come back inside :class:`CheckResult` (or are raised when the
configuration asks for fail-fast analysis).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from minilang import ast_nodes as A
from minilang.config import FrontendConfig
from minilang.errors import MinilangError
from minilang.lexer import tokenize
from minilang.parser import parse
from minilang.semantic import SemanticResult, analyze

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckResult:
    program: A.Program
    semantic: SemanticResult

    @property
    def valid(self) -> bool:
        return self.semantic.valid


def check_source(source: str, config: Optional[FrontendConfig] = None) -> CheckResult:
    """Tokenize, parse and analyze *source*.

    Raises:
        LexError: unrecognized character.
        SyntaxError: grammar violation.
        SemanticError: first semantic problem, only with ``fail_fast``.
    """
    config = config or FrontendConfig()
    for warning in config.validate():
        logger.warning("Configuration: %s", warning)

    try:
        tokens = tokenize(source, config.filename)
        program = parse(tokens, config.filename)
        semantic = analyze(program, config.analyzer_config())
    except MinilangError as exc:
        exc.with_source(source)
        logger.debug("%s failed: %s", config.filename, exc.message)
        raise

    logger.info(
        "%s: %d statements, %d diagnostics",
        config.filename, len(program.statements), semantic.error_count,
    )
    return CheckResult(program=program, semantic=semantic)


__all__ = ["CheckResult", "check_source"]
