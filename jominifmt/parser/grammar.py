"""Jomini grammar routines that emit CST events."""

from jominifmt.diagnostics import (
    Diagnostic,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_LEGACY_EXTRA_RBRACE,
    PARSER_LEGACY_MISSING_RBRACE,
    PARSER_UNEXPECTED_TOKEN,
    diagnostic_from_spec,
)
from jominifmt.lexer import OPERATOR_TOKEN_KINDS, TokenKind
from jominifmt.parser.parser import CompletedMarker, Parser
from jominifmt.syntax import JominiSyntaxKind

_NOT_SCALAR_START: frozenset[TokenKind] = frozenset(
    {TokenKind.EOF, TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.SEMICOLON, *OPERATOR_TOKEN_KINDS}
)


def parse_source_file(parser: Parser) -> None:
    root = parser.start()
    parse_statement_list(parser, stop_at=frozenset({TokenKind.EOF}))
    root.complete(parser, JominiSyntaxKind.SOURCE_FILE)


def parse_statement_list(parser: Parser, stop_at: frozenset[TokenKind]) -> CompletedMarker:
    marker = parser.start()
    last_position = None

    while not parser.at(TokenKind.EOF) and not parser.at_set(stop_at):
        if last_position == parser.position:
            raise RuntimeError(f"Parser stopped making progress at {parser.current.name} {parser.current_range}")
        last_position = parser.position

        if parser.at(TokenKind.SEMICOLON) and parser.options.allow_semicolon_terminator:
            parser.bump()
            continue

        if parse_statement(parser):
            continue

        parser.error(
            diagnostic_from_spec(
                PARSER_UNEXPECTED_TOKEN,
                parser.current_range,
                f"Unexpected token {parser.current.name}",
            )
        )
        _recover(parser, stop_at)

    return marker.complete(parser, JominiSyntaxKind.STATEMENT_LIST)


def parse_statement(parser: Parser) -> bool:
    if parser.at(TokenKind.RBRACE):
        if not parser.options.allow_legacy_extra_rbrace:
            return False
        parser.error(diagnostic_from_spec(PARSER_LEGACY_EXTRA_RBRACE, parser.current_range))
        error = parser.start()
        parser.bump()
        error.complete(parser, JominiSyntaxKind.ERROR)
        return True

    if parser.at(TokenKind.LBRACE):
        parse_block(parser)
        return True

    key_or_value = parse_scalar(parser)
    if key_or_value is None:
        return False

    if parser.at_set(OPERATOR_TOKEN_KINDS):
        marker = key_or_value.precede(parser)
        parser.bump()
        if parser.at(TokenKind.EOF) or parser.at(TokenKind.RBRACE):
            parser.error(diagnostic_from_spec(PARSER_EXPECTED_VALUE, parser.current_range))
        else:
            parse_value(parser)
        marker.complete(parser, JominiSyntaxKind.KEY_VALUE)
        return True

    if parser.at(TokenKind.LBRACE):
        marker = key_or_value.precede(parser)
        parse_block(parser)
        marker.complete(parser, JominiSyntaxKind.KEY_VALUE)

    return True


def parse_value(parser: Parser) -> bool:
    if parser.at(TokenKind.LBRACE):
        parse_block(parser)
        return True

    scalar = parse_scalar(parser)
    if scalar is None:
        parser.error(diagnostic_from_spec(PARSER_EXPECTED_VALUE, parser.current_range))
        return False

    if parser.at(TokenKind.LBRACE):
        tagged = scalar.precede(parser)
        parse_block(parser)
        tagged.complete(parser, JominiSyntaxKind.TAGGED_BLOCK_VALUE)

    return True


def parse_block(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    if not parser.at(TokenKind.LBRACE):
        parser.error(_expected_token(parser, TokenKind.LBRACE))
        return marker.complete(parser, JominiSyntaxKind.BLOCK)

    parser.bump()
    parse_statement_list(parser, stop_at=frozenset({TokenKind.RBRACE, TokenKind.EOF}))

    if parser.at(TokenKind.RBRACE):
        parser.bump()
    elif parser.at(TokenKind.EOF) and parser.options.allow_legacy_missing_rbrace:
        parser.error(diagnostic_from_spec(PARSER_LEGACY_MISSING_RBRACE, parser.current_range))
    else:
        parser.error(_expected_token(parser, TokenKind.RBRACE))

    return marker.complete(parser, JominiSyntaxKind.BLOCK)


def parse_scalar(parser: Parser) -> CompletedMarker | None:
    """Parse one scalar; adjacent tokens without trivia between them join it."""
    if parser.current in _NOT_SCALAR_START:
        return None

    marker = parser.start()
    first_kind = parser.current
    parser.bump()

    if first_kind == TokenKind.STRING:
        return marker.complete(parser, JominiSyntaxKind.SCALAR)

    while parser.current not in _NOT_SCALAR_START and not parser.has_preceding_trivia:
        parser.bump()

    return marker.complete(parser, JominiSyntaxKind.SCALAR)


def _recover(parser: Parser, stop_at: frozenset[TokenKind]) -> None:
    """Consume tokens into an ERROR node until a safe point is reached."""
    recovery_set = stop_at | {TokenKind.LBRACE}
    marker = parser.start()
    parser.bump()
    while not parser.at(TokenKind.EOF) and not parser.at_set(recovery_set) and not parser.has_preceding_line_break:
        parser.bump()
    marker.complete(parser, JominiSyntaxKind.ERROR)


def _expected_token(parser: Parser, kind: TokenKind) -> Diagnostic:
    return diagnostic_from_spec(PARSER_EXPECTED_TOKEN, parser.current_range, f"Expected token {kind.name}")
