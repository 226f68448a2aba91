from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Offset into script text, counted in Python string indices."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    @staticmethod
    def from_int(value: int) -> "TextSize":
        return TextSize(value)

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open span [start, end) of script text.

    Blocks, tokens and diagnostics all carry one. Formatting never moves a
    range: it only rewrites the gaps between them.
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        return TextRange(offset.value, offset.value)

    @staticmethod
    def from_offsets(start: int, end: int) -> "TextRange":
        return TextRange(start, end)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def is_empty(self) -> bool:
        return self._start == self._end

    def as_tuple(self) -> tuple[int, int]:
        return (self._start, self._end)

    def contains_range(self, other: "TextRange") -> bool:
        return self._start <= other._start and other._end <= self._end

    def ordering(self, other: "TextRange") -> Literal[-1, 0, 1]:
        """-1 when this range ends before `other`, 1 when it starts after, 0 on overlap."""
        if self._end <= other._start:
            return -1
        if other._end <= self._start:
            return 1
        return 0

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    return source[range.start.value : range.end.value]


def count_line_breaks(text: str) -> int:
    """Count line breaks, treating `\\r\\n` as one break and a lone `\\r` as one."""
    return text.count("\n") + text.count("\r") - text.count("\r\n")


def line_column(source: str, offset: TextSize) -> tuple[int, int]:
    """One-based line and column of `offset`, for editor-friendly diagnostics."""
    before = source[: offset.value]
    line = count_line_breaks(before) + 1
    line_start = max(before.rfind("\n"), before.rfind("\r")) + 1
    return line, offset.value - line_start + 1
