"""Tree sink that turns parser events + recorded trivia into a green CST.

Trivia become real child tokens. They are flushed when the next significant
token arrives, into the innermost node that is open at that point, so a node
never starts or ends with whitespace. The one exception is a leading comment
run directly above a documented construct, which is moved inside it.
"""

from dataclasses import dataclass

from jominifmt.cst import GreenNode, TreeBuilder
from jominifmt.diagnostics import Diagnostic
from jominifmt.lexer import TokenKind, Trivia
from jominifmt.syntax import JominiSyntaxKind
from jominifmt.text import TextSize

DOCUMENTED_KINDS: frozenset[JominiSyntaxKind] = frozenset({JominiSyntaxKind.KEY_VALUE})


@dataclass(frozen=True, slots=True)
class ParsedGreenTree:
    root: GreenNode
    diagnostics: list[Diagnostic]


class LosslessTreeSink:
    """Converts parser events + trivia into a lossless green CST."""

    def __init__(
        self,
        text: str,
        trivia: list[Trivia],
        builder: TreeBuilder | None = None,
        *,
        documented_kinds: frozenset[JominiSyntaxKind] = DOCUMENTED_KINDS,
    ) -> None:
        self._text = text
        self._trivia = trivia
        self._text_pos = 0
        self._trivia_pos = 0
        self._parents_count = 0
        self._pending: list[JominiSyntaxKind] = []
        self._errors: list[Diagnostic] = []
        self._builder = builder if builder is not None else TreeBuilder()
        self._documented_kinds = documented_kinds
        self._needs_eof = True

    def token(self, kind: JominiSyntaxKind, end: TextSize) -> None:
        self._do_token(kind, end.value)

    def start_node(self, kind: JominiSyntaxKind) -> None:
        # Opening is deferred until the node's first token so leading trivia
        # can be placed outside it.
        self._pending.append(kind)
        self._parents_count += 1

    def finish_node(self) -> None:
        self._parents_count -= 1
        if self._parents_count < 0:
            raise RuntimeError("finish_node called more often than start_node")

        if self._parents_count == 0 and self._needs_eof:
            self._do_token(JominiSyntaxKind.EOF, len(self._text))

        self._open_pending(len(self._pending))
        self._builder.finish_node()

    def errors(self, errors: list[Diagnostic]) -> None:
        self._errors = list(errors)

    def finish(self) -> ParsedGreenTree:
        return ParsedGreenTree(root=self._builder.finish(), diagnostics=self._errors)

    def _do_token(self, kind: JominiSyntaxKind, token_end: int) -> None:
        if kind == JominiSyntaxKind.EOF:
            self._needs_eof = False

        pieces = self._eat_trivia(token_end)
        documented_at = self._documented_pending_index()
        split = len(pieces) if documented_at is None else _leading_comment_start(pieces)

        if self._builder.depth == 0 and self._pending and split > 0:
            self._open_pending(1)
            if documented_at is not None:
                documented_at -= 1

        self._emit_trivia(pieces[:split])
        if documented_at is not None:
            self._open_pending(documented_at + 1)
        self._emit_trivia(pieces[split:])
        self._open_pending(len(self._pending))

        token_start = self._text_pos
        self._text_pos = max(token_end, token_start)
        self._builder.token(kind, self._text[token_start:self._text_pos])

    def _eat_trivia(self, token_end: int) -> list[Trivia]:
        pieces: list[Trivia] = []
        while self._trivia_pos < len(self._trivia):
            trivia = self._trivia[self._trivia_pos]
            if trivia.range.start.value != self._text_pos:
                break
            if trivia.range.end.value > token_end:
                break
            pieces.append(trivia)
            self._text_pos = trivia.range.end.value
            self._trivia_pos += 1
        return pieces

    def _emit_trivia(self, pieces: list[Trivia]) -> None:
        for piece in pieces:
            start, end = piece.range.as_tuple()
            self._builder.token(JominiSyntaxKind.from_token_kind(piece.kind), self._text[start:end])

    def _open_pending(self, count: int) -> None:
        for kind in self._pending[:count]:
            self._builder.start_node(kind)
        del self._pending[:count]

    def _documented_pending_index(self) -> int | None:
        for index, kind in enumerate(self._pending):
            if kind in self._documented_kinds:
                return index
        return None


def _leading_comment_start(pieces: list[Trivia]) -> int:
    """Index where the comment run bound to the following token starts.

    Comments qualify when each sits on its own line and exactly one line
    break separates it from what follows. Returns `len(pieces)` when none do.
    """
    split = len(pieces)
    line_breaks = 0
    for index in range(len(pieces) - 1, -1, -1):
        piece = pieces[index]
        if piece.kind == TokenKind.WHITESPACE:
            continue
        if piece.kind == TokenKind.NEWLINE:
            line_breaks += 1
            if line_breaks > 1:
                break
            continue
        if piece.kind == TokenKind.COMMENT and not piece.trailing and line_breaks == 1:
            split = index
            line_breaks = 0
            continue
        break
    return split
