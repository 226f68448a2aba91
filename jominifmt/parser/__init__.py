"""Parser infrastructure (token source + event-based parser + tree sink)."""

from jominifmt.parser.event import (
    Event,
    FinishEvent,
    StartEvent,
    TokenEvent,
    process_events,
)
from jominifmt.parser.grammar import parse_source_file, parse_statement_list
from jominifmt.parser.jomini import parse, parse_result
from jominifmt.parser.options import ParseMode, ParserOptions
from jominifmt.parser.parser import CompletedMarker, Marker, Parser, TokenSource
from jominifmt.parser.tree_sink import DOCUMENTED_KINDS, LosslessTreeSink, ParsedGreenTree

__all__ = [
    "DOCUMENTED_KINDS",
    "CompletedMarker",
    "Event",
    "FinishEvent",
    "LosslessTreeSink",
    "Marker",
    "ParseMode",
    "ParsedGreenTree",
    "Parser",
    "ParserOptions",
    "StartEvent",
    "TokenEvent",
    "TokenSource",
    "parse",
    "parse_result",
    "parse_source_file",
    "parse_statement_list",
    "process_events",
]
