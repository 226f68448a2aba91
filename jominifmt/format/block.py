"""Formatting blocks: the layout tree mirrored from the syntax tree."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

from jominifmt.format.alignment import EMPTY_ALIGNMENTS, Alignment
from jominifmt.format.classifier import TokenClassifier
from jominifmt.format.indent import DELEGATE_TO_NEXT_CHILD, ChildAttributes, Indent
from jominifmt.format.spacing import Spacing, resolve_spacing
from jominifmt.text import TextRange

if TYPE_CHECKING:
    from jominifmt.cst import SyntaxElement, SyntaxNode
    from jominifmt.format.builder import BlockTreeBuilder
    from jominifmt.format.registry import BlockConfig, FormatLanguage


class FormatBlock:
    """Composite block over one syntax node.

    Children are built on first access and memoized by the owning builder.
    """

    __slots__ = (
        "node",
        "config",
        "language",
        "indent",
        "alignment",
        "known_alignments",
        "comment_group_part",
        "classifier",
        "_builder",
    )

    def __init__(
        self,
        node: SyntaxNode,
        *,
        config: BlockConfig,
        language: FormatLanguage,
        builder: BlockTreeBuilder,
        indent: Indent = Indent.NONE,
        alignment: Alignment | None = None,
        known_alignments: Mapping[Hashable, Alignment] = EMPTY_ALIGNMENTS,
        comment_group_part: bool = False,
    ) -> None:
        self.node = node
        self.config = config
        self.language = language
        self.indent = indent
        self.alignment = alignment
        self.known_alignments = known_alignments
        self.comment_group_part = comment_group_part
        self.classifier = TokenClassifier.for_block(config, language, config.is_multiline(node.text))
        self._builder = builder

    @property
    def kind(self) -> Hashable:
        return self.node.kind

    @property
    def text_range(self) -> TextRange:
        return self.node.text_range

    @property
    def source_text(self) -> str:
        return self.node.file.text

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def is_incomplete(self) -> bool:
        return False

    @property
    def sub_blocks(self) -> tuple[Block, ...]:
        return self._builder.children_of(self)

    def get_spacing(self, left: Block | None, right: Block) -> Spacing:
        return resolve_spacing(self, left, right)

    def child_attributes(self, new_child_index: int) -> ChildAttributes:
        """Indent/alignment for a child inserted at `new_child_index`."""
        if new_child_index == 0:
            return ChildAttributes(indent=self.indent, alignment=None)
        return DELEGATE_TO_NEXT_CHILD

    def as_verbatim(self) -> VerbatimBlock:
        """Same position and attributes, but the node text is emitted untouched."""
        return VerbatimBlock(
            self.node,
            self.node.text,
            indent=self.indent,
            alignment=self.alignment,
            comment_group_part=self.comment_group_part,
        )

    def __repr__(self) -> str:
        return f"FormatBlock({_kind_name(self.kind)}, {self.text_range.start.value}..{self.text_range.end.value})"


class LeafBlock:
    """Block with no children, printed as its text."""

    __slots__ = ("element", "text", "indent", "alignment", "comment_group_part")

    verbatim = False

    def __init__(
        self,
        element: SyntaxElement,
        text: str,
        *,
        indent: Indent = Indent.NONE,
        alignment: Alignment | None = None,
        comment_group_part: bool = False,
    ) -> None:
        self.element = element
        self.text = text
        self.indent = indent
        self.alignment = alignment
        self.comment_group_part = comment_group_part

    @property
    def node(self) -> SyntaxElement:
        return self.element

    @property
    def kind(self) -> Hashable:
        return self.element.kind

    @property
    def text_range(self) -> TextRange:
        return self.element.text_range

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def is_incomplete(self) -> bool:
        return False

    @property
    def sub_blocks(self) -> tuple[Block, ...]:
        return ()

    def get_spacing(self, left: Block | None, right: Block) -> Spacing | None:
        return None

    def child_attributes(self, new_child_index: int) -> ChildAttributes:
        return ChildAttributes(indent=Indent.NONE, alignment=None)

    def as_verbatim(self) -> LeafBlock:
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({_kind_name(self.kind)}, {self.text!r})"


class VerbatimBlock(LeafBlock):
    """Leaf standing for a whole subtree whose source text is kept as is."""

    __slots__ = ()

    verbatim = True


type Block = FormatBlock | LeafBlock


def _kind_name(kind: Hashable) -> str:
    return getattr(kind, "name", str(kind))


def dump_block_tree(root: Block) -> str:
    """Indented outline of `root`, with the spacing chosen between each pair of siblings."""
    lines: list[str] = []

    def walk(block: Block, depth: int) -> None:
        pad = "  " * depth
        alignment = f" align={block.alignment!r}" if block.alignment is not None else ""
        group = " comment-group" if block.comment_group_part else ""
        lines.append(f"{pad}{block!r} indent={block.indent.value}{alignment}{group}")
        previous: Block | None = None
        for child in block.sub_blocks:
            if previous is not None:
                lines.append(f"{pad}  ~ {block.get_spacing(previous, child)!r}")
            walk(child, depth + 1)
            previous = child

    walk(root, 0)
    return "\n".join(lines)
