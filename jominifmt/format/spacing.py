"""Spacing directives and the priority resolver between adjacent blocks.

A directive answers one question for a pair of sibling blocks: how many
spaces or line feeds go between them. Line feed counts can depend on the
source (`keep_line_breaks`), bounded by `keep_blank_lines`.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from jominifmt.text import count_line_breaks

if TYPE_CHECKING:
    from jominifmt.format.block import Block, FormatBlock


@dataclass(frozen=True, slots=True)
class Spacing:
    """Whitespace between two adjacent blocks.

    `max_line_feeds=None` means the limit comes from `keep_blank_lines`.
    """

    name: str
    spaces: int
    min_line_feeds: int
    max_line_feeds: int | None
    keep_line_breaks: bool

    def line_feeds(self, original: int, keep_blank_lines: int) -> int:
        """Line feeds to emit when the source had `original` of them."""
        if not self.keep_line_breaks:
            return self.min_line_feeds
        limit = self.max_line_feeds if self.max_line_feeds is not None else keep_blank_lines + 1
        return max(self.min_line_feeds, min(original, limit))

    def __repr__(self) -> str:
        return f"Spacing.{self.name}"


class Spacings:
    """The fixed set of directives blocks may return."""

    NONE: Final[Spacing] = Spacing("NONE", 0, 0, 0, False)
    ONE_SPACE: Final[Spacing] = Spacing("ONE_SPACE", 1, 0, 0, False)
    BASIC: Final[Spacing] = Spacing("BASIC", 1, 0, 0, False)
    BASIC_KEEP_BREAKS: Final[Spacing] = Spacing("BASIC_KEEP_BREAKS", 1, 0, None, True)
    ONE_LINE: Final[Spacing] = Spacing("ONE_LINE", 0, 1, 1, False)
    ONE_LINE_KEEP_BREAKS: Final[Spacing] = Spacing("ONE_LINE_KEEP_BREAKS", 0, 0, 1, True)
    BREAK: Final[Spacing] = Spacing("BREAK", 0, 1, None, True)
    EMPTY_LINE: Final[Spacing] = Spacing("EMPTY_LINE", 0, 2, 2, False)


class CustomSpacing:
    """Exact (left kind, right kind) overrides for one construct."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[tuple[Hashable, Hashable], Spacing] | None = None) -> None:
        self._rules: Mapping[tuple[Hashable, Hashable], Spacing] = MappingProxyType(dict(rules or {}))

    def spacing_between(self, left: Hashable, right: Hashable) -> Spacing | None:
        return self._rules.get((left, right))

    def __len__(self) -> int:
        return len(self._rules)

    @staticmethod
    def builder() -> CustomSpacingBuilder:
        return CustomSpacingBuilder()


class CustomSpacingBuilder:
    def __init__(self) -> None:
        self._rules: dict[tuple[Hashable, Hashable], Spacing] = {}

    def between(
        self,
        left: Hashable | Iterable[Hashable],
        right: Hashable | Iterable[Hashable],
        spacing: Spacing,
    ) -> CustomSpacingBuilder:
        """Register `spacing` for every pair drawn from `left` x `right`."""
        for left_kind in _as_kinds(left):
            for right_kind in _as_kinds(right):
                self._rules[(left_kind, right_kind)] = spacing
        return self

    def build(self) -> CustomSpacing:
        return CustomSpacing(self._rules)


def lines_between(left: Block, right: Block, text: str) -> int:
    """Line breaks in the source gap between two sibling blocks."""
    start = left.text_range.end.value
    end = right.text_range.start.value
    if end <= start:
        return 0
    return count_line_breaks(text[start:end])


def resolve_spacing(parent: FormatBlock, left: Block | None, right: Block) -> Spacing:
    """Pick the directive between `left` and `right`, children of `parent`.

    First matching rule wins:
    1. nothing on the left: NONE
    2. either side part of a leading comment group: ONE_LINE
    3. a custom pair override
    4. parent not multi-line: ONE_LINE after a line comment, else BASIC
    5. opening marker then closing marker: ONE_LINE_KEEP_BREAKS
    6. one side a marker: ONE_LINE
    7. left not line-breaking: ONE_LINE after a line comment, else BASIC
    8. the pair holds together: ONE_LINE
    9. otherwise BREAK
    """
    if left is None:
        return Spacings.NONE

    if left.comment_group_part or right.comment_group_part:
        return Spacings.ONE_LINE

    left_kind = left.kind
    right_kind = right.kind
    config = parent.config
    language = parent.language

    if config.custom_spacing is not None:
        custom = config.custom_spacing.spacing_between(left_kind, right_kind)
        if custom is not None:
            return custom

    classifier = parent.classifier
    after_line_comment = left_kind in language.line_comment_kinds

    if not classifier.multiline:
        return Spacings.ONE_LINE if after_line_comment else Spacings.BASIC

    left_break = classifier.is_left_break(left_kind)
    right_break = classifier.is_right_break(right_kind)
    if left_break and right_break:
        return Spacings.ONE_LINE_KEEP_BREAKS
    if left_break or right_break:
        return Spacings.ONE_LINE

    if not classifier.is_line_breaking(left_kind):
        return Spacings.ONE_LINE if after_line_comment else Spacings.BASIC

    if classifier.holds_together(left_kind, right_kind, lines_between(left, right, parent.source_text)):
        return Spacings.ONE_LINE

    return Spacings.BREAK


def _as_kinds(value: Hashable | Iterable[Hashable]) -> tuple[Hashable, ...]:
    if isinstance(value, (frozenset, set, tuple, list)):
        return tuple(value)
    return (value,)


__all__ = [
    "CustomSpacing",
    "CustomSpacingBuilder",
    "Spacing",
    "Spacings",
    "lines_between",
    "resolve_spacing",
]
