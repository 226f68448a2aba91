"""Event-based parser core: token source, parser and markers."""

from __future__ import annotations

from dataclasses import dataclass

from jominifmt.diagnostics import Diagnostic
from jominifmt.lexer import Lexer, Token, TokenKind, Trivia
from jominifmt.parser.event import Event, FinishEvent, StartEvent, TokenEvent
from jominifmt.parser.options import ParserOptions
from jominifmt.syntax import JominiSyntaxKind
from jominifmt.text import TextRange, TextSize


class TokenSource:
    """Bridge between lexer and parser that hides trivia but records it.

    Trivia on the same line as the previous significant token is marked as
    trailing; a newline ends the trailing run.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._text = lexer.source
        self._tokens = lexer.lex()
        self._lexer_diagnostics = lexer.diagnostics
        self._index = -1
        self._trivia: list[Trivia] = []
        self._current: Token = self._tokens[-1]
        self._preceding_line_break = False
        self._preceding_trivia = False
        self._advance(first_token=True)

    @property
    def text(self) -> str:
        return self._text

    @property
    def current(self) -> TokenKind:
        return self._current.kind

    @property
    def current_range(self) -> TextRange:
        return self._current.range

    @property
    def position(self) -> TextSize:
        return self._current.range.start

    @property
    def has_preceding_line_break(self) -> bool:
        return self._preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._preceding_trivia

    def bump(self) -> None:
        if self._current.kind != TokenKind.EOF:
            self._advance(first_token=False)

    def finish(self) -> tuple[list[Trivia], list[Diagnostic]]:
        return self._trivia, list(self._lexer_diagnostics)

    def _advance(self, *, first_token: bool) -> None:
        trailing = not first_token
        self._preceding_line_break = False
        self._preceding_trivia = False

        while True:
            self._index += 1
            token = self._tokens[self._index]
            if not token.kind.is_trivia:
                self._current = token
                if token.has_preceding_line_break():
                    self._preceding_line_break = True
                return

            self._preceding_trivia = True
            if token.kind == TokenKind.NEWLINE:
                trailing = False
                self._preceding_line_break = True
            self._trivia.append(Trivia(token.kind, token.range, trailing))


@dataclass(slots=True)
class Marker:
    pos: int
    start: TextSize
    old_start: int
    child_idx: int | None = None

    def complete(self, parser: Parser, kind: JominiSyntaxKind) -> CompletedMarker:
        event = parser.events[self.pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("Marker must point to a StartEvent")
        parser.events[self.pos] = StartEvent(kind=kind, forward_parent=event.forward_parent)

        finish_pos = len(parser.events)
        parser.events.append(FinishEvent())
        return CompletedMarker(
            start_pos=self.pos,
            finish_pos=finish_pos,
            offset=self.start,
            old_start=self.old_start,
        )


@dataclass(frozen=True, slots=True)
class CompletedMarker:
    start_pos: int
    finish_pos: int
    offset: TextSize
    old_start: int

    def range(self, parser: Parser) -> TextRange:
        end = self.offset
        for event in reversed(parser.events[self.old_start : self.finish_pos]):
            if isinstance(event, TokenEvent):
                end = event.end
                break
        return TextRange.from_offsets(self.offset.value, end.value)

    def text(self, parser: Parser) -> str:
        rng = self.range(parser)
        return parser.source.text[rng.start.value : rng.end.value]

    def precede(self, parser: Parser) -> Marker:
        """Start a new node that will wrap this completed one."""
        new_marker = parser.start()
        event = parser.events[self.start_pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("CompletedMarker points to non-start event")

        distance = new_marker.pos - self.start_pos
        if distance <= 0:
            raise RuntimeError("Invalid precede distance")
        parser.events[self.start_pos] = StartEvent(kind=event.kind, forward_parent=distance)

        new_marker.child_idx = self.start_pos
        new_marker.start = self.offset
        new_marker.old_start = min(new_marker.old_start, self.old_start)
        return new_marker


class Parser:
    """Event-based parser."""

    def __init__(self, source: TokenSource, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or ParserOptions()
        self._events: list[Event] = []
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def position(self) -> TextSize:
        return self._source.position

    @property
    def has_preceding_line_break(self) -> bool:
        return self._source.has_preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._source.has_preceding_trivia

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def start(self) -> Marker:
        pos = len(self._events)
        self._events.append(StartEvent.tombstone())
        return Marker(pos=pos, start=self.position, old_start=pos)

    def bump(self) -> None:
        if self.current == TokenKind.EOF:
            return
        self._events.append(
            TokenEvent(
                kind=JominiSyntaxKind.from_token_kind(self.current),
                end=self.current_range.end,
            )
        )
        self._source.bump()

    def error(self, diagnostic: Diagnostic) -> None:
        if self._diagnostics:
            previous = self._diagnostics[-1]
            if previous.range.start == diagnostic.range.start:
                return
        self._diagnostics.append(diagnostic)

    def finish(self) -> tuple[list[Event], list[Diagnostic]]:
        return self._events, self._diagnostics
