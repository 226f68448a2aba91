"""Per-construct predicates over child element kinds."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jominifmt.format.registry import BlockConfig, FormatLanguage


@dataclass(frozen=True, slots=True)
class TokenClassifier:
    """Kind predicates for the children of one construct.

    Pure: the same inputs always give the same answers.
    """

    line_breaking: frozenset[Hashable]
    indented_children: frozenset[Hashable]
    hold_together_groups: tuple[frozenset[Hashable], ...]
    multiline: bool = False
    left_break: Hashable | None = None
    right_break: Hashable | None = None

    @staticmethod
    def for_block(config: BlockConfig, language: FormatLanguage, multiline: bool) -> TokenClassifier:
        groups = config.hold_together_groups
        if groups is None:
            groups = (language.comment_kinds,) if language.comment_kinds else ()
        return TokenClassifier(
            line_breaking=config.line_breaking,
            indented_children=config.indented_children,
            hold_together_groups=groups,
            multiline=multiline,
            left_break=config.left_break,
            right_break=config.right_break,
        )

    def is_line_breaking(self, kind: Hashable) -> bool:
        """True when a line break should normally follow `kind`."""
        return kind in self.line_breaking

    def is_left_break(self, kind: Hashable) -> bool:
        return self.left_break is not None and kind == self.left_break

    def is_right_break(self, kind: Hashable) -> bool:
        return self.right_break is not None and kind == self.right_break

    def is_indented_child(self, kind: Hashable) -> bool:
        return kind in self.indented_children

    def holds_together(self, first: Hashable, second: Hashable, lines_between: int) -> bool:
        """Whether two adjacent children stay on consecutive lines.

        A blank line between them always separates them.
        """
        if lines_between > 1:
            return False
        if first == second:
            return True
        return any(first in group and second in group for group in self.hold_together_groups)
