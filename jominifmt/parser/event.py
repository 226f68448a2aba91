"""Parser events.

The grammar never builds nodes directly. It appends events, and `process_events`
replays them into a sink once parsing is done, so a finished key can still be
wrapped into a KEY_VALUE after its operator is seen.
"""

from dataclasses import dataclass
from typing import Protocol

from jominifmt.diagnostics import Diagnostic
from jominifmt.syntax import JominiSyntaxKind
from jominifmt.text import TextSize


@dataclass(frozen=True, slots=True)
class StartEvent:
    kind: JominiSyntaxKind
    # Distance to the start event of the node that wraps this one (set by `precede`).
    forward_parent: int | None = None

    @staticmethod
    def tombstone() -> "StartEvent":
        return _TOMBSTONE


_TOMBSTONE = StartEvent(JominiSyntaxKind.TOMBSTONE)


@dataclass(frozen=True, slots=True)
class FinishEvent:
    pass


@dataclass(frozen=True, slots=True)
class TokenEvent:
    kind: JominiSyntaxKind
    end: TextSize


Event = StartEvent | FinishEvent | TokenEvent


class TreeSink(Protocol):
    def token(self, kind: JominiSyntaxKind, end: TextSize) -> None: ...

    def start_node(self, kind: JominiSyntaxKind) -> None: ...

    def finish_node(self) -> None: ...

    def errors(self, errors: list[Diagnostic]) -> None: ...


def process_events(sink: TreeSink, events: list[Event], errors: list[Diagnostic]) -> None:
    sink.errors(errors)
    pending = list(events)

    for index, event in enumerate(pending):
        match event:
            case FinishEvent():
                sink.finish_node()
            case TokenEvent(kind=kind, end=end):
                sink.token(kind, end)
            case StartEvent(kind=JominiSyntaxKind.TOMBSTONE):
                pass
            case StartEvent():
                for kind in reversed(_claim_parents(pending, index, event)):
                    sink.start_node(kind)


def _claim_parents(events: list[Event], index: int, start: StartEvent) -> list[JominiSyntaxKind]:
    """Kinds from the node at `index` out to its outermost `precede` wrapper.

    Wrappers are tombstoned in place so the main loop skips them later.
    """
    kinds = [start.kind]
    offset = start.forward_parent
    while offset is not None:
        index += offset
        if index >= len(events):
            raise RuntimeError("Invalid forward_parent offset in parser events")
        parent = events[index]
        if not isinstance(parent, StartEvent):
            raise RuntimeError("forward_parent must point to StartEvent")
        events[index] = _TOMBSTONE
        if parent.kind != JominiSyntaxKind.TOMBSTONE:
            kinds.append(parent.kind)
        offset = parent.forward_parent
    return kinds
