"""Lays a block tree out as text.

The walk visits leaves in order; the whitespace before each leaf comes from
the spacing its lowest common ancestor returns for the two sibling subtrees
the leaves fall in. Indentation is the count of NORMAL indents on the path
from the root. Blocks sharing an alignment handle are padded to a common
column.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import logging

from jominifmt.format.alignment import Alignment
from jominifmt.format.block import Block, FormatBlock, LeafBlock
from jominifmt.format.indent import Indent
from jominifmt.format.registry import FormatLanguage
from jominifmt.format.settings import FormatSettings
from jominifmt.format.spacing import Spacing, Spacings
from jominifmt.text import count_line_breaks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Piece:
    leaf: LeafBlock
    spacing: Spacing
    level: int
    alignments: tuple[Alignment, ...]
    line_feeds: int = 0
    spaces: int = 0
    padding: int = 0


class BlockRenderer:
    def __init__(self, settings: FormatSettings, language: FormatLanguage, source_text: str) -> None:
        self._settings = settings
        self._language = language
        self._source = source_text
        self._newline = "\r\n" if "\r\n" in source_text else "\n"

    def render(self, root: Block) -> str:
        pieces = list(self._walk(root, Spacings.NONE, 0, ()))
        self._resolve_whitespace(pieces)
        self._align(pieces)
        return self._emit(pieces)

    def _walk(
        self,
        block: Block,
        spacing: Spacing,
        level: int,
        opening: tuple[Alignment, ...],
    ) -> Iterator[_Piece]:
        if block.indent == Indent.NORMAL:
            level += 1
        if block.alignment is not None:
            opening = (*opening, block.alignment)

        if isinstance(block, LeafBlock):
            yield _Piece(leaf=block, spacing=spacing, level=level, alignments=opening)
            return

        previous: Block | None = None
        for child in block.sub_blocks:
            if previous is None:
                yield from self._walk(child, spacing, level, opening)
            else:
                yield from self._walk(child, block.get_spacing(previous, child), level, ())
            previous = child

    def _resolve_whitespace(self, pieces: list[_Piece]) -> None:
        keep_blank_lines = self._settings.keep_blank_lines
        line_comments = self._language.line_comment_kinds
        previous: _Piece | None = None
        for piece in pieces:
            if previous is None:
                previous = piece
                continue

            gap_start = previous.leaf.text_range.end.value
            gap_end = piece.leaf.text_range.start.value
            original = count_line_breaks(self._source[gap_start:gap_end]) if gap_end > gap_start else 0

            piece.line_feeds = piece.spacing.line_feeds(original, keep_blank_lines)
            piece.spaces = piece.spacing.spaces
            if piece.line_feeds == 0 and previous.leaf.kind in line_comments:
                piece.line_feeds = 1
            previous = piece

    def _align(self, pieces: list[_Piece]) -> None:
        groups: dict[Alignment, dict[int, int]] = {}
        line = 0
        for index, piece in enumerate(pieces):
            line += piece.line_feeds
            # A block starting its line takes the line's indentation instead.
            if index > 0 and piece.line_feeds == 0:
                for alignment in piece.alignments:
                    groups.setdefault(alignment, {}).setdefault(line, index)
            line += count_line_breaks(piece.leaf.text)

        members_by_group = [list(by_line.values()) for by_line in groups.values() if len(by_line) > 1]
        if not members_by_group:
            return

        # One member per line in each group, so padding a member never moves another of its group.
        for _ in range(len(members_by_group) + 1):
            changed = False
            for members in members_by_group:
                columns = self._columns(pieces)
                target = max(columns[index] for index in members)
                for index in members:
                    if columns[index] < target:
                        pieces[index].padding += target - columns[index]
                        changed = True
            if not changed:
                return
        logger.debug("alignment did not settle for %d groups", len(members_by_group))

    def _columns(self, pieces: list[_Piece]) -> list[int]:
        columns: list[int] = []
        column = 0
        for index, piece in enumerate(pieces):
            if index == 0:
                column = 0
            elif piece.line_feeds > 0:
                column = piece.level * self._settings.indent_columns
            else:
                column += piece.spaces + piece.padding
            columns.append(column)

            text = piece.leaf.text
            last_break = max(text.rfind("\n"), text.rfind("\r"))
            if last_break >= 0:
                column = self._width(text[last_break + 1 :])
            else:
                column += self._width(text)
        return columns

    def _width(self, text: str) -> int:
        width = 0
        tab_width = self._settings.tab_width
        for char in text:
            if char == "\t":
                width += tab_width - width % tab_width
            else:
                width += 1
        return width

    def _emit(self, pieces: list[_Piece]) -> str:
        indent_unit = self._settings.indent_unit
        parts: list[str] = []
        for index, piece in enumerate(pieces):
            if index > 0:
                if piece.line_feeds > 0:
                    parts.append(self._newline * piece.line_feeds)
                    parts.append(indent_unit * piece.level)
                else:
                    parts.append(" " * (piece.spaces + piece.padding))
            parts.append(piece.leaf.text)

        text = "".join(parts)
        if self._settings.insert_final_newline and text:
            text += self._newline
        return text


def render_block_tree(root: FormatBlock, settings: FormatSettings, language: FormatLanguage) -> str:
    return BlockRenderer(settings, language, root.source_text).render(root)
