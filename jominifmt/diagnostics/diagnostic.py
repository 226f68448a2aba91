"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

from jominifmt.text import TextRange

Severity = Literal["error", "warning"]
Stage = Literal["lexer", "parser", "format"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Problem found while lexing, parsing or formatting one script.

    Only `error` diagnostics stop the formatter from rewriting a file.
    """

    code: str
    message: str
    range: TextRange
    severity: Severity = "error"
    hint: str | None = None
    stage: Stage | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"
