"""Block configuration for Jomini game script."""

from __future__ import annotations

from functools import cache
from types import MappingProxyType

from jominifmt.cst import JOMINI_LANGUAGE, SyntaxElement, SyntaxNode
from jominifmt.format.block import Block, FormatBlock
from jominifmt.format.builder import build_block_tree
from jominifmt.format.registry import BlockConfig, BlockRegistry, FormatLanguage, MultilineMode
from jominifmt.format.settings import FormatSettings
from jominifmt.format.spacing import CustomSpacing, Spacings
from jominifmt.syntax import OPERATOR_KINDS
from jominifmt.syntax import JominiSyntaxKind as K

ASSIGNMENT_ALIGNMENT = "assignment"

STATEMENT_KINDS: frozenset[K] = frozenset({K.KEY_VALUE, K.SCALAR, K.BLOCK, K.ERROR})

COMMENT_KINDS: frozenset[K] = frozenset({K.COMMENT})


def _verbatim_errors(parent: FormatBlock, block: Block, element: SyntaxElement) -> Block:
    """Error recovery nodes keep their source text untouched."""
    if element.kind == K.ERROR:
        return block.as_verbatim()
    return block


def _statement_list_config(settings: FormatSettings) -> BlockConfig:
    spacing = (
        CustomSpacing.builder()
        # Trailing comments stay on their statement's line.
        .between(STATEMENT_KINDS, K.COMMENT, Spacings.BASIC_KEEP_BREAKS)
        .between(K.SCALAR, STATEMENT_KINDS, Spacings.BASIC_KEEP_BREAKS)
        .between(STATEMENT_KINDS | {K.SEMICOLON}, K.ERROR, Spacings.BASIC_KEEP_BREAKS)
        .between(K.ERROR, STATEMENT_KINDS | {K.SEMICOLON}, Spacings.BASIC_KEEP_BREAKS)
        .between(STATEMENT_KINDS, K.SEMICOLON, Spacings.NONE)
        .build()
    )
    return BlockConfig(
        multiline_mode=MultilineMode.WHEN_SOURCE_MULTILINE,
        line_breaking=frozenset({K.KEY_VALUE, K.BLOCK, K.COMMENT, K.SEMICOLON}),
        hold_together_groups=(COMMENT_KINDS, frozenset({K.KEY_VALUE, K.COMMENT})),
        custom_spacing=spacing,
        alignment_keys=(ASSIGNMENT_ALIGNMENT,) if settings.align_assignments else (),
        customize=_verbatim_errors,
    )


def _block_config() -> BlockConfig:
    spacing = (
        CustomSpacing.builder()
        .between(K.LBRACE, K.RBRACE, Spacings.ONE_LINE_KEEP_BREAKS)
        .between(K.LBRACE, K.COMMENT, Spacings.BASIC_KEEP_BREAKS)
        .between(K.STATEMENT_LIST, K.COMMENT, Spacings.BASIC_KEEP_BREAKS)
        .build()
    )
    return BlockConfig(
        multiline_mode=MultilineMode.WHEN_SOURCE_MULTILINE,
        left_break=K.LBRACE,
        right_break=K.RBRACE,
        line_breaking=frozenset({K.STATEMENT_LIST, K.COMMENT}),
        indented_children=frozenset({K.STATEMENT_LIST, K.COMMENT}),
        custom_spacing=spacing,
    )


def _source_file_config() -> BlockConfig:
    spacing = CustomSpacing.builder().between(K.STATEMENT_LIST, K.COMMENT, Spacings.BASIC_KEEP_BREAKS).build()
    return BlockConfig(
        multiline_mode=MultilineMode.WHEN_SOURCE_MULTILINE,
        line_breaking=frozenset({K.STATEMENT_LIST, K.COMMENT}),
        custom_spacing=spacing,
    )


def _key_value_config() -> BlockConfig:
    return BlockConfig(
        documented=True,
        aligned_children=MappingProxyType({kind: ASSIGNMENT_ALIGNMENT for kind in OPERATOR_KINDS}),
    )


def jomini_registry(settings: FormatSettings) -> BlockRegistry:
    registry = BlockRegistry()
    registry.register(K.SOURCE_FILE, _source_file_config())
    registry.register(K.STATEMENT_LIST, _statement_list_config(settings))
    registry.register(K.BLOCK, _block_config())
    registry.register(K.KEY_VALUE, _key_value_config())
    registry.register(K.TAGGED_BLOCK_VALUE, BlockConfig())
    # `1444.11.11` lexes as several tokens but prints as one.
    registry.register(K.SCALAR, BlockConfig(verbatim=True))
    return registry.freeze()


@cache
def jomini_language(settings: FormatSettings = FormatSettings()) -> FormatLanguage:
    return FormatLanguage(
        id=JOMINI_LANGUAGE,
        registry=jomini_registry(settings),
        comment_kinds=COMMENT_KINDS,
        line_comment_kinds=COMMENT_KINDS,
        whitespace_kinds=frozenset({K.WHITESPACE, K.NEWLINE}),
        outer_element_kinds=frozenset({K.OUTER_LANGUAGE_ELEMENT}),
    )


def build_jomini_block_tree(root: SyntaxNode, settings: FormatSettings | None = None) -> FormatBlock:
    resolved = settings if settings is not None else FormatSettings()
    return build_block_tree(root, jomini_language(resolved))
