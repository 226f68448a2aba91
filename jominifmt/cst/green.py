"""Immutable green tree.

Green elements know their kind and text but not their position, so one tree can
be placed anywhere inside a host file. Whitespace and comments are ordinary
tokens here; the block builder decides which of them matter.
"""

from dataclasses import dataclass, field

from jominifmt.syntax import JominiSyntaxKind


@dataclass(frozen=True, slots=True)
class GreenToken:
    kind: JominiSyntaxKind
    text: str

    @property
    def width(self) -> int:
        return len(self.text)


@dataclass(frozen=True, slots=True)
class GreenNode:
    kind: JominiSyntaxKind
    children: tuple["GreenElement", ...]
    width: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", sum(child.width for child in self.children))

    @property
    def text(self) -> str:
        return "".join(child.text for child in self.children)


type GreenElement = GreenNode | GreenToken


class TreeBuilder:
    """Collects sink calls into green nodes. Top-level leftovers end up under ROOT."""

    def __init__(self) -> None:
        self._open: list[tuple[JominiSyntaxKind, list[GreenElement]]] = []
        self._top: list[GreenElement] = []

    @property
    def depth(self) -> int:
        return len(self._open)

    def start_node(self, kind: JominiSyntaxKind) -> None:
        self._open.append((kind, []))

    def token(self, kind: JominiSyntaxKind, text: str) -> None:
        self._append(GreenToken(kind, text))

    def finish_node(self) -> None:
        if not self._open:
            raise RuntimeError("finish_node called with no open node")
        kind, children = self._open.pop()
        self._append(GreenNode(kind, tuple(children)))

    def finish(self) -> GreenNode:
        if self._open:
            raise RuntimeError("Cannot finish tree: unclosed nodes remain on stack")
        match self._top:
            case [GreenNode(kind=JominiSyntaxKind.ROOT) as root]:
                return root
        return GreenNode(JominiSyntaxKind.ROOT, tuple(self._top))

    def _append(self, element: GreenElement) -> None:
        (self._open[-1][1] if self._open else self._top).append(element)
