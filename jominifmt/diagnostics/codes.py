"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final

from jominifmt.diagnostics.diagnostic import Severity, Stage


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    stage: Stage
    severity: Severity = "error"
    hint: str | None = None


LEXER_UNTERMINATED_STRING: Final = DiagnosticSpec(
    "LEXER_UNTERMINATED_STRING",
    "Unterminated string literal.",
    "lexer",
    hint="Close the string with a double quote or enable multiline strings.",
)

PARSER_EXPECTED_VALUE: Final = DiagnosticSpec("PARSER_EXPECTED_VALUE", "Expected a value", "parser")
PARSER_EXPECTED_TOKEN: Final = DiagnosticSpec("PARSER_EXPECTED_TOKEN", "Expected token", "parser")
PARSER_UNEXPECTED_TOKEN: Final = DiagnosticSpec(
    "PARSER_UNEXPECTED_TOKEN",
    "Unexpected token",
    "parser",
    hint="The text up to the next line break is kept as written.",
)

# Tolerated only in permissive mode, where older game files rely on them.
PARSER_LEGACY_EXTRA_RBRACE: Final = DiagnosticSpec(
    "PARSER_LEGACY_EXTRA_RBRACE",
    "Ignoring extra closing brace in permissive mode",
    "parser",
    severity="warning",
)
PARSER_LEGACY_MISSING_RBRACE: Final = DiagnosticSpec(
    "PARSER_LEGACY_MISSING_RBRACE",
    "Missing closing brace tolerated in permissive mode",
    "parser",
    severity="warning",
)

FORMAT_SKIPPED_PARSE_ERRORS: Final = DiagnosticSpec(
    "FORMAT_SKIPPED_PARSE_ERRORS",
    "File was left unformatted because it has parse errors.",
    "format",
    severity="warning",
    hint="Fix the reported parse errors or enable `format-with-errors`.",
)
