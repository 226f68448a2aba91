"""Parser modes and configuration options."""

from dataclasses import dataclass, replace
from enum import StrEnum


class ParseMode(StrEnum):
    """How forgiving the parser is towards malformed game scripts.

    `strict` reports every deviation as an error, so the formatter leaves such
    files alone. `permissive` accepts the quirks shipped in vanilla files
    (stray or missing closing braces, `;` terminators) as warnings.
    """

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    mode: ParseMode = ParseMode.STRICT
    allow_legacy_extra_rbrace: bool = False
    allow_legacy_missing_rbrace: bool = False
    allow_semicolon_terminator: bool = False
    # Localisation-style strings may span lines; the lexer closes them at the next quote.
    allow_multiline_strings: bool = True

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        options = ParserOptions(mode=mode)
        if mode is ParseMode.STRICT:
            return options
        return replace(
            options,
            allow_legacy_extra_rbrace=True,
            allow_legacy_missing_rbrace=True,
            allow_semicolon_terminator=True,
        )
