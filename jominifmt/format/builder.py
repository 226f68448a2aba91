"""Builds the block tree over a red syntax tree.

Each composite block computes its children once: whitespace and zero-length
elements are dropped, comments leading a documented construct form a
comment group, and alignment handles are issued per epoch so a line-breaking
boundary that does not hold together starts a new alignment run.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
import logging

from jominifmt.cst import SyntaxElement, SyntaxNode, SyntaxToken
from jominifmt.format.alignment import EMPTY_ALIGNMENTS, Alignment, AlignmentRegistry
from jominifmt.format.block import Block, FormatBlock, LeafBlock, VerbatimBlock
from jominifmt.format.indent import Indent
from jominifmt.format.registry import FormatLanguage
from jominifmt.text import count_line_breaks

logger = logging.getLogger(__name__)


class BlockTreeBuilder:
    """Owns block creation and the per-block child cache for one build."""

    def __init__(self, language: FormatLanguage) -> None:
        self.language = language
        # One entry per block instance, so a node built twice with other alignments gets its own children.
        self._children: dict[FormatBlock, tuple[Block, ...]] = {}

    def root_block(self, root: SyntaxNode) -> FormatBlock:
        block = self.generate(root)
        if not isinstance(block, FormatBlock):
            raise ValueError(f"Root kind {root.kind!r} is configured verbatim")
        return block

    def generate(
        self,
        element: SyntaxElement,
        *,
        indent: Indent = Indent.NONE,
        alignment: Alignment | None = None,
        known_alignments: Mapping[Hashable, Alignment] = EMPTY_ALIGNMENTS,
        comment_group_part: bool = False,
    ) -> Block:
        """Create the block for one element using its kind's configuration."""
        if isinstance(element, SyntaxToken):
            return LeafBlock(
                element,
                element.text,
                indent=indent,
                alignment=alignment,
                comment_group_part=comment_group_part,
            )

        config = self.language.registry.config_for(element.kind)
        if config.verbatim:
            return VerbatimBlock(
                element,
                element.text,
                indent=indent,
                alignment=alignment,
                comment_group_part=comment_group_part,
            )

        return FormatBlock(
            element,
            config=config,
            language=self.language,
            builder=self,
            indent=indent,
            alignment=alignment,
            known_alignments=known_alignments,
            comment_group_part=comment_group_part,
        )

    def children_of(self, block: FormatBlock) -> tuple[Block, ...]:
        cached = self._children.get(block)
        if cached is None:
            cached = tuple(self._build_children(block))
            self._children[block] = cached
        return cached

    def meaningful_children(self, node: SyntaxNode) -> list[SyntaxElement]:
        """Children that produce blocks, in source order."""
        if node.kind in self.language.outer_element_kinds:
            candidates = embedded_children(node, self.language.id)
        else:
            candidates = node.children

        whitespace = self.language.whitespace_kinds
        return [
            child for child in candidates if not child.text_range.is_empty() and child.kind not in whitespace
        ]

    def _build_children(self, block: FormatBlock) -> list[Block]:
        config = block.config
        classifier = block.classifier
        comment_kinds = self.language.comment_kinds
        text = block.source_text

        registry = AlignmentRegistry()
        alignments = registry.activate(config.alignment_keys)

        blocks: list[Block] = []
        previous: SyntaxElement | None = None
        in_comment_group = config.documented

        for child in self.meaningful_children(block.node):
            if child.kind not in comment_kinds:
                in_comment_group = False

            if in_comment_group:
                indent = config.comment_group_indent
                alignment = (
                    block.known_alignments.get(config.comment_group_alignment)
                    if config.comment_group_alignment is not None
                    else None
                )
            else:
                indent = self._child_indent(block, child, previous)
                alignment = self._child_alignment(block, child, previous)

            if previous is not None and classifier.is_line_breaking(previous.kind):
                gap = count_line_breaks(text[previous.end : child.start]) if child.start > previous.end else 0
                if not classifier.holds_together(previous.kind, child.kind, gap):
                    registry.reset()
                    alignments = registry.activate(config.alignment_keys)
                    logger.debug(
                        "alignment epoch %d in %r before %r",
                        registry.epoch,
                        block,
                        child,
                    )

            child_block = self.generate(
                child,
                indent=indent,
                alignment=alignment,
                known_alignments=alignments,
                comment_group_part=in_comment_group,
            )
            if config.customize is not None:
                child_block = config.customize(block, child_block, child)

            blocks.append(child_block)
            previous = child

        return blocks

    def _child_indent(self, block: FormatBlock, child: SyntaxElement, previous: SyntaxElement | None) -> Indent:
        hook = block.config.child_indent
        if hook is not None:
            return hook(block, child, previous)
        return Indent.NORMAL if block.classifier.is_indented_child(child.kind) else Indent.NONE

    def _child_alignment(
        self,
        block: FormatBlock,
        child: SyntaxElement,
        previous: SyntaxElement | None,
    ) -> Alignment | None:
        hook = block.config.child_alignment
        if hook is not None:
            return hook(block, child, previous, block.known_alignments)
        key = block.config.aligned_children.get(child.kind)
        if key is None:
            return None
        return block.known_alignments.get(key)


def embedded_children(placeholder: SyntaxNode, language: str) -> tuple[SyntaxElement, ...]:
    """Elements of `language`'s tree fully inside the placeholder's range.

    Walks the language root depth first; a contained element is taken whole,
    anything else is searched further. Empty when the file has no tree for
    `language`.
    """
    root = placeholder.file.root_for(language)
    if root is None:
        return ()

    target = placeholder.text_range
    found: list[SyntaxElement] = []
    stack: list[SyntaxElement] = [root]
    while stack:
        current = stack.pop()
        current_range = current.text_range
        if target.contains_range(current_range):
            found.append(current)
            continue
        if current_range.ordering(target) != 0:
            continue
        stack.extend(reversed(current.children))
    return tuple(found)


def build_block_tree(root: SyntaxNode, language: FormatLanguage) -> FormatBlock:
    return BlockTreeBuilder(language).root_block(root)
