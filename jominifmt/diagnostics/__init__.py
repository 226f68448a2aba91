"""Diagnostics."""

from jominifmt.diagnostics.codes import (
    FORMAT_SKIPPED_PARSE_ERRORS,
    LEXER_UNTERMINATED_STRING,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_LEGACY_EXTRA_RBRACE,
    PARSER_LEGACY_MISSING_RBRACE,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from jominifmt.diagnostics.diagnostic import Diagnostic, Severity, Stage
from jominifmt.diagnostics.report import (
    collect_diagnostics,
    diagnostic_from_spec,
    has_errors,
    sort_diagnostics,
)

__all__ = [
    "FORMAT_SKIPPED_PARSE_ERRORS",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_VALUE",
    "PARSER_LEGACY_EXTRA_RBRACE",
    "PARSER_LEGACY_MISSING_RBRACE",
    "PARSER_UNEXPECTED_TOKEN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "Stage",
    "collect_diagnostics",
    "diagnostic_from_spec",
    "has_errors",
    "sort_diagnostics",
]
