"""Lexer."""

from jominifmt.lexer.lexer import Lexer, dump_tokens, token_text
from jominifmt.lexer.tokens import OPERATOR_TOKEN_KINDS, Token, TokenFlags, TokenKind, Trivia

__all__ = [
    "OPERATOR_TOKEN_KINDS",
    "Lexer",
    "Token",
    "TokenFlags",
    "TokenKind",
    "Trivia",
    "dump_tokens",
    "token_text",
]
