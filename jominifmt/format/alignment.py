"""Alignment handles and the per-build registry that issues them."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from types import MappingProxyType
from typing import Final


class Alignment:
    """Opaque vertical-alignment group handle.

    Blocks sharing one handle start at the same column. Handles compare by
    identity only.
    """

    __slots__ = ("key", "epoch", "serial")

    def __init__(self, key: Hashable, epoch: int, serial: int = 0) -> None:
        self.key = key
        self.epoch = epoch
        # Issue order within the owning registry; only used for display.
        self.serial = serial

    def __repr__(self) -> str:
        return f"Alignment({self.key!r}, epoch={self.epoch}, serial={self.serial})"


EMPTY_ALIGNMENTS: Final[Mapping[Hashable, Alignment]] = MappingProxyType({})


class AlignmentRegistry:
    """Issues handles per key within an epoch.

    One registry lives for one `build_children` call; it is never shared
    between unrelated subtrees.
    """

    def __init__(self) -> None:
        self._epoch = 0
        self._issued = 0
        self._handles: dict[Hashable, Alignment] = {}

    @property
    def epoch(self) -> int:
        return self._epoch

    def activate(self, keys: Iterable[Hashable]) -> Mapping[Hashable, Alignment]:
        """Return handles for `keys`, reusing those issued earlier in this epoch."""
        active: dict[Hashable, Alignment] = {}
        for key in keys:
            handle = self._handles.get(key)
            if handle is None:
                handle = Alignment(key, self._epoch, self._issued)
                self._issued += 1
                self._handles[key] = handle
            active[key] = handle
        if not active:
            return EMPTY_ALIGNMENTS
        return MappingProxyType(active)

    def reset(self) -> None:
        """Retire every issued handle and start a new epoch."""
        self._epoch += 1
        self._handles = {}
