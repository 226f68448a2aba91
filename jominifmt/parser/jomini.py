"""Parse entrypoints for Jomini script text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jominifmt.diagnostics import collect_diagnostics
from jominifmt.lexer import Lexer
from jominifmt.parser.event import process_events
from jominifmt.parser.grammar import parse_source_file
from jominifmt.parser.options import ParseMode, ParserOptions
from jominifmt.parser.parser import Parser, TokenSource
from jominifmt.parser.tree_sink import LosslessTreeSink, ParsedGreenTree

if TYPE_CHECKING:
    from jominifmt.pipeline import JominiParseResult

logger = logging.getLogger(__name__)


def _resolve_options(options: ParserOptions | None, mode: ParseMode | None) -> ParserOptions:
    if options is not None and mode is not None:
        raise ValueError("Pass either options or mode, not both")
    if options is not None:
        return options
    return ParserOptions() if mode is None else ParserOptions.for_mode(mode)


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedGreenTree:
    """Parse `text` into a lossless green tree; concatenated token texts equal `text`."""
    resolved = _resolve_options(options, mode)

    source = TokenSource(Lexer(text, allow_multiline_strings=resolved.allow_multiline_strings))
    parser = Parser(source, options=resolved)
    parse_source_file(parser)

    events, parser_diagnostics = parser.finish()
    trivia, lexer_diagnostics = source.finish()
    sink = LosslessTreeSink(text=text, trivia=trivia)
    process_events(sink, events, collect_diagnostics(lexer_diagnostics, parser_diagnostics))
    tree = sink.finish()

    logger.debug(
        "parsed %d chars in %s mode: %d events, %d diagnostics",
        len(text),
        resolved.mode,
        len(events),
        len(tree.diagnostics),
    )
    return tree


def parse_result(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    path: str | None = None,
) -> JominiParseResult:
    """Parse once and wrap the tree so formatting passes can share it."""
    from jominifmt.pipeline import JominiParseResult

    resolved = _resolve_options(options, mode)
    return JominiParseResult(
        source_text=text,
        parsed=parse(text, options=resolved),
        options=resolved,
        path=path,
    )
