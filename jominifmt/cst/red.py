"""Positioned (red) view over a green tree.

Red elements add absolute offsets, parent links and the owning `SourceFile`,
which is all the block builder needs to compare ranges across trees.
"""

from __future__ import annotations

from jominifmt.cst.green import GreenNode
from jominifmt.syntax import JominiSyntaxKind
from jominifmt.text import TextRange

JOMINI_LANGUAGE = "jomini"


class SourceFile:
    """Owner of one source text and the syntax roots built over it.

    A template host file can carry several trees over the same text, one per
    language; `root_for` gives the formatter access to the tree of the
    language it formats when it meets a placeholder in another tree.
    """

    __slots__ = ("text", "path", "_roots")

    def __init__(self, text: str, *, path: str | None = None) -> None:
        self.text = text
        self.path = path
        self._roots: dict[str, SyntaxNode] = {}

    def attach_root(self, language: str, root: SyntaxNode) -> None:
        self._roots[language] = root

    def root_for(self, language: str) -> SyntaxNode | None:
        return self._roots.get(language)

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self._roots)


class _RedElement:
    __slots__ = ("kind", "parent", "index_in_parent", "file", "start", "end")

    def __init__(
        self,
        kind: JominiSyntaxKind,
        parent: SyntaxNode | None,
        index_in_parent: int,
        file: SourceFile,
        start: int,
        end: int,
    ) -> None:
        self.kind = kind
        self.parent = parent
        self.index_in_parent = index_in_parent
        self.file = file
        self.start = start
        self.end = end

    @property
    def text_range(self) -> TextRange:
        return TextRange.from_offsets(self.start, self.end)

    def next_sibling(self) -> SyntaxElement | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = self.index_in_parent + 1
        return siblings[index] if index < len(siblings) else None

    def prev_sibling(self) -> SyntaxElement | None:
        if self.parent is None or self.index_in_parent == 0:
            return None
        return self.parent.children[self.index_in_parent - 1]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name}, {self.start}..{self.end})"


class SyntaxToken(_RedElement):
    __slots__ = ("text",)

    def __init__(
        self,
        kind: JominiSyntaxKind,
        text: str,
        parent: SyntaxNode,
        index_in_parent: int,
        file: SourceFile,
        start: int,
    ) -> None:
        super().__init__(kind, parent, index_in_parent, file, start, start + len(text))
        self.text = text

    @property
    def children(self) -> tuple[SyntaxElement, ...]:
        return ()


class SyntaxNode(_RedElement):
    __slots__ = ("children",)

    def __init__(
        self,
        kind: JominiSyntaxKind,
        parent: SyntaxNode | None,
        index_in_parent: int,
        file: SourceFile,
        start: int,
    ) -> None:
        super().__init__(kind, parent, index_in_parent, file, start, start)
        self.children: tuple[SyntaxElement, ...] = ()

    @property
    def text(self) -> str:
        return self.file.text[self.start : self.end]

    def child_nodes(self) -> tuple[SyntaxNode, ...]:
        return tuple(child for child in self.children if isinstance(child, SyntaxNode))

    def descendants_tokens(self) -> tuple[SyntaxToken, ...]:
        tokens: list[SyntaxToken] = []
        stack: list[SyntaxElement] = [self]
        while stack:
            current = stack.pop()
            if isinstance(current, SyntaxToken):
                tokens.append(current)
            else:
                stack.extend(reversed(current.children))
        return tuple(tokens)


type SyntaxElement = SyntaxNode | SyntaxToken


def from_green(
    root: GreenNode,
    source: str = "",
    *,
    file: SourceFile | None = None,
    language: str = JOMINI_LANGUAGE,
    start: int = 0,
) -> SyntaxNode:
    """Build a red tree over `root` and register it on its owning file.

    `start` offsets the tree inside the file, for trees built over a slice of a
    larger host text.
    """
    owner = file if file is not None else SourceFile(source)
    if start + root.width > len(owner.text):
        raise ValueError("Green tree extends past the end of its source file")
    red_root = _build_node(root, None, 0, owner, start)
    owner.attach_root(language, red_root)
    return red_root


def _build_node(
    green: GreenNode,
    parent: SyntaxNode | None,
    index_in_parent: int,
    file: SourceFile,
    start: int,
) -> SyntaxNode:
    node = SyntaxNode(green.kind, parent, index_in_parent, file, start)
    offset = start
    children: list[SyntaxElement] = []
    for index, child in enumerate(green.children):
        if isinstance(child, GreenNode):
            element: SyntaxElement = _build_node(child, node, index, file, offset)
        else:
            element = SyntaxToken(child.kind, child.text, node, index, file, offset)
        children.append(element)
        offset = element.end
    node.children = tuple(children)
    node.end = offset
    return node


__all__ = [
    "JOMINI_LANGUAGE",
    "SourceFile",
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "from_green",
]
