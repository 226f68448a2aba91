"""Lexer."""

from typing import Final

from jominifmt.diagnostics import Diagnostic, diagnostic_from_spec
from jominifmt.diagnostics.codes import LEXER_UNTERMINATED_STRING
from jominifmt.lexer.tokens import Token, TokenFlags, TokenKind
from jominifmt.text import TextRange, TextSize, slice_text_range

TWO_CHAR_OPERATORS: Final[dict[str, TokenKind]] = {
    "==": TokenKind.EQUAL_EQUAL,
    "!=": TokenKind.NOT_EQUAL,
    "<=": TokenKind.LESS_THAN_OR_EQUAL,
    ">=": TokenKind.GREATER_THAN_OR_EQUAL,
    "?=": TokenKind.QUESTION_EQUAL,
}

SINGLE_CHAR_TOKENS: Final[dict[str, TokenKind]] = {
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS_THAN,
    ">": TokenKind.GREATER_THAN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "%": TokenKind.PERCENT,
    "^": TokenKind.CARET,
    "|": TokenKind.PIPE,
    "&": TokenKind.AMP,
    "?": TokenKind.QUESTION,
    "!": TokenKind.BANG,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "/": TokenKind.SLASH,
    "\\": TokenKind.BACKSLASH,
    "@": TokenKind.AT,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Lexer:
    """Lossless lexer that emits trivia and non-trivia tokens.

    Concatenating the text of every emitted token reproduces the source.
    """

    def __init__(self, source: str, *, allow_multiline_strings: bool = False) -> None:
        self._source = source
        self._position = 0
        self._after_newline = False
        self._allow_multiline_strings = allow_multiline_strings
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def next_token(self) -> Token:
        start = self._position
        if self.is_eof:
            return Token(TokenKind.EOF, TextRange.empty(TextSize.from_int(start)))

        flags = TokenFlags.NONE
        kind = self._lex_token()
        if kind == TokenKind.STRING:
            flags |= self._string_flags(start)
        if self._after_newline:
            flags |= TokenFlags.PRECEDING_LINE_BREAK

        if kind == TokenKind.NEWLINE:
            self._after_newline = True
        elif not kind.is_trivia:
            self._after_newline = False

        return Token(kind, TextRange.from_offsets(start, self._position), flags)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in "\r\n":
            self._consume_newline()
            return TokenKind.NEWLINE

        if ch in " \t":
            self._consume_while(lambda c: c in " \t")
            return TokenKind.WHITESPACE

        if ch == "#":
            self._consume_while(lambda c: c not in "\r\n")
            return TokenKind.COMMENT

        if ch == '"':
            return self._lex_string()

        if ch.isdigit():
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            self._consume_while(lambda c: c.isalnum() or c == "_")
            return TokenKind.IDENTIFIER

        two_char = self._source[self._position : self._position + 2]
        if two_char in TWO_CHAR_OPERATORS:
            self._position += 2
            return TWO_CHAR_OPERATORS[two_char]

        self._position += 1
        return SINGLE_CHAR_TOKENS.get(ch, TokenKind.SKIPPED)

    def _lex_string(self) -> TokenKind:
        start = self._position
        self._position += 1
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._position += 1
                closed = True
                break
            if ch == "\\":
                self._position = min(self._position + 2, len(self._source))
                continue
            if ch in "\r\n" and not self._allow_multiline_strings:
                break
            self._position += 1

        if not closed:
            self._diagnostics.append(
                diagnostic_from_spec(LEXER_UNTERMINATED_STRING, TextRange.from_offsets(start, self._position))
            )

        return TokenKind.STRING

    def _string_flags(self, start: int) -> TokenFlags:
        flags = TokenFlags.WAS_QUOTED
        if "\\" in self._source[start : self._position]:
            flags |= TokenFlags.HAS_ESCAPE
        return flags

    def _lex_number(self) -> TokenKind:
        saw_dot = False
        while not self.is_eof:
            ch = self._current_char()
            if ch.isdigit():
                self._position += 1
                continue
            if ch == "." and not saw_dot and self._peek_char().isdigit():
                saw_dot = True
                self._position += 1
                continue
            break
        return TokenKind.FLOAT if saw_dot else TokenKind.INT

    def _consume_newline(self) -> None:
        if self._source.startswith("\r\n", self._position):
            self._position += 2
        else:
            self._position += 1

    def _consume_while(self, predicate) -> None:
        while not self.is_eof and predicate(self._current_char()):
            self._position += 1

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def dump_tokens(tokens: list[Token], source: str) -> None:
    """Print token list with kind, range, flags, and text for debugging."""
    for i, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{i:03d} {tok.kind.name:<18} range={tok.range.as_tuple()} flags={tok.flags} text={text!r}")
