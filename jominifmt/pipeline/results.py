"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from jominifmt.diagnostics import FORMAT_SKIPPED_PARSE_ERRORS, Diagnostic
from jominifmt.pipeline.result import JominiParseResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Formatted text of one script plus everything reported while producing it.

    When `skipped` is true, `formatted_text` is the untouched source.
    """

    parse: JominiParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool

    @property
    def skipped(self) -> bool:
        return any(diagnostic.code == FORMAT_SKIPPED_PARSE_ERRORS.code for diagnostic in self.diagnostics)
