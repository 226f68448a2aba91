"""Block-tree formatting engine and the Jomini formatter built on it."""

from jominifmt.format.alignment import EMPTY_ALIGNMENTS, Alignment, AlignmentRegistry
from jominifmt.format.block import Block, FormatBlock, LeafBlock, VerbatimBlock, dump_block_tree
from jominifmt.format.builder import BlockTreeBuilder, build_block_tree, embedded_children
from jominifmt.format.classifier import TokenClassifier
from jominifmt.format.indent import DELEGATE_TO_NEXT_CHILD, ChildAttributes, Indent
from jominifmt.format.jomini import build_jomini_block_tree, jomini_language, jomini_registry
from jominifmt.format.registry import BlockConfig, BlockRegistry, FormatLanguage, MultilineMode
from jominifmt.format.render import BlockRenderer, render_block_tree
from jominifmt.format.runner import run_format
from jominifmt.format.settings import FormatSettings, IndentStyle, load_format_settings
from jominifmt.format.spacing import CustomSpacing, Spacing, Spacings, resolve_spacing

__all__ = [
    "DELEGATE_TO_NEXT_CHILD",
    "EMPTY_ALIGNMENTS",
    "Alignment",
    "AlignmentRegistry",
    "Block",
    "BlockConfig",
    "BlockRegistry",
    "BlockRenderer",
    "BlockTreeBuilder",
    "ChildAttributes",
    "CustomSpacing",
    "FormatBlock",
    "FormatLanguage",
    "FormatSettings",
    "Indent",
    "IndentStyle",
    "LeafBlock",
    "MultilineMode",
    "Spacing",
    "Spacings",
    "TokenClassifier",
    "VerbatimBlock",
    "build_block_tree",
    "build_jomini_block_tree",
    "dump_block_tree",
    "embedded_children",
    "jomini_language",
    "jomini_registry",
    "load_format_settings",
    "render_block_tree",
    "resolve_spacing",
    "run_format",
]
