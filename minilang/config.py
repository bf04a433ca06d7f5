"""Configuration objects for the MiniLang front end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class AnalyzerConfig:
    """Tuning knobs for the semantic analyzer."""

    # Raise the first diagnostic as a SemanticError instead of collecting.
    fail_fast: bool = False


@dataclass(frozen=True)
class FrontendConfig:
    """Settings for a whole tokenize → parse → analyze run."""

    filename: str = "<input>"
    fail_fast: bool = False

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if not self.filename:
            warnings.append("filename should not be empty; diagnostics will carry no file")
        return warnings

    def analyzer_config(self) -> AnalyzerConfig:
        return AnalyzerConfig(fail_fast=self.fail_fast)


__all__ = ["AnalyzerConfig", "FrontendConfig"]
