"""Syntax kinds shared by the parser, the CST and the block builder."""

from enum import IntEnum

from jominifmt.lexer import OPERATOR_TOKEN_KINDS, TokenKind


class JominiSyntaxKind(IntEnum):
    """Token kinds (same values as `TokenKind`) followed by node kinds from 1000 up."""

    TOMBSTONE = 0
    EOF = 1

    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12
    SKIPPED = 13

    IDENTIFIER = 20
    STRING = 21
    INT = 22
    FLOAT = 23

    EQUAL = 30
    EQUAL_EQUAL = 31
    NOT_EQUAL = 32
    LESS_THAN_OR_EQUAL = 33
    GREATER_THAN_OR_EQUAL = 34
    LESS_THAN = 35
    GREATER_THAN = 36
    QUESTION_EQUAL = 37

    COLON = 40
    SEMICOLON = 41
    COMMA = 42
    DOT = 43
    SLASH = 44
    BACKSLASH = 45
    AT = 46
    PLUS = 50
    MINUS = 51
    STAR = 52
    PERCENT = 53
    CARET = 54
    PIPE = 55
    AMP = 56
    QUESTION = 57
    BANG = 58

    LBRACE = 60
    RBRACE = 61
    LBRACKET = 62
    RBRACKET = 63
    LPAREN = 64
    RPAREN = 65

    # Whole-file wrapper, never a formatting block of its own.
    ROOT = 1000
    ERROR = 1001
    SOURCE_FILE = 1002
    STATEMENT_LIST = 1003
    KEY_VALUE = 1004
    BLOCK = 1005
    SCALAR = 1006
    # `color = rgb { 1 2 3 }`: a tag glued to the block it labels.
    TAGGED_BLOCK_VALUE = 1007

    # Placeholder for a host-template region whose text belongs to this language.
    OUTER_LANGUAGE_ELEMENT = 1100

    @property
    def is_whitespace(self) -> bool:
        return self in (JominiSyntaxKind.WHITESPACE, JominiSyntaxKind.NEWLINE)

    @property
    def is_operator(self) -> bool:
        return self in OPERATOR_KINDS

    @staticmethod
    def from_token_kind(kind: TokenKind) -> "JominiSyntaxKind":
        try:
            return JominiSyntaxKind(kind.value)
        except ValueError:
            raise ValueError(f"Unsupported TokenKind mapping: {kind!r}") from None


OPERATOR_KINDS: frozenset[JominiSyntaxKind] = frozenset(
    JominiSyntaxKind.from_token_kind(kind) for kind in OPERATOR_TOKEN_KINDS
)
