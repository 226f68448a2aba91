"""Indent descriptors and child attributes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from jominifmt.format.alignment import Alignment


class Indent(StrEnum):
    """Offset of a block's first line relative to its parent."""

    NONE = "none"
    NORMAL = "normal"


@dataclass(frozen=True, slots=True)
class ChildAttributes:
    """Indent/alignment a newly inserted child should adopt.

    `None` fields mean "not decided here".
    """

    indent: Indent | None
    alignment: Alignment | None

    @property
    def is_delegated(self) -> bool:
        return self is DELEGATE_TO_NEXT_CHILD


DELEGATE_TO_NEXT_CHILD: Final[ChildAttributes] = ChildAttributes(indent=None, alignment=None)
"""Defer the decision to whatever the next sibling specifies."""
