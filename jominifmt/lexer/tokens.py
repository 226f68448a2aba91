"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from jominifmt.text import TextRange


class TokenKind(IntEnum):
    """Lexical vocabulary of Jomini scripts.

    Values are grouped by decade (trivia, literals, operators, punctuation,
    brackets) and reused verbatim by `JominiSyntaxKind`.
    """

    EOF = 1

    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12
    # Characters with no meaning of their own (`$`, `~`, ...). Significant, so
    # `$PARAM$` stays glued to its neighbours inside one scalar.
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

    @property
    def is_trivia(self) -> bool:
        return TokenKind.WHITESPACE <= self <= TokenKind.COMMENT

    @property
    def is_operator(self) -> bool:
        """Key/value separators: `=`, comparisons and `?=`."""
        return TokenKind.EQUAL <= self <= TokenKind.QUESTION_EQUAL


OPERATOR_TOKEN_KINDS: frozenset[TokenKind] = frozenset(kind for kind in TokenKind if kind.is_operator)


class TokenFlags(IntFlag):
    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0
    WAS_QUOTED = 1 << 1
    HAS_ESCAPE = 1 << 2


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)


@dataclass(frozen=True, slots=True)
class Trivia:
    """Trivia the TokenSource skipped on the parser's behalf.

    `trailing` marks trivia on the same line as the preceding significant
    token; the first newline ends the trailing run. The tree sink uses it to
    keep end-of-line comments with the statement they follow.
    """

    kind: TokenKind
    range: TextRange
    trailing: bool
