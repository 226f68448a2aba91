"""Construct configuration and the kind -> configuration registry."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from jominifmt.format.indent import Indent
from jominifmt.text import count_line_breaks

if TYPE_CHECKING:
    from jominifmt.cst import SyntaxElement
    from jominifmt.format.alignment import Alignment
    from jominifmt.format.block import Block, FormatBlock
    from jominifmt.format.spacing import CustomSpacing

type ChildIndentHook = Callable[[FormatBlock, SyntaxElement, SyntaxElement | None], Indent]
type ChildAlignmentHook = Callable[
    [FormatBlock, SyntaxElement, SyntaxElement | None, Mapping[Hashable, Alignment]],
    Alignment | None,
]
type CustomizeHook = Callable[[FormatBlock, Block, SyntaxElement], Block]


class MultilineMode(StrEnum):
    """When a construct's children are laid out on several lines."""

    NEVER = "never"
    ALWAYS = "always"
    WHEN_SOURCE_MULTILINE = "when_source_multiline"


@dataclass(frozen=True, slots=True)
class BlockConfig:
    """Everything that specializes the generic block for one node kind.

    `hold_together_groups=None` falls back to the language's comment kinds.
    The three hooks, when set, replace the default child indent rule, the
    default child alignment rule and the identity customization.
    """

    multiline_mode: MultilineMode = MultilineMode.NEVER
    left_break: Hashable | None = None
    right_break: Hashable | None = None
    line_breaking: frozenset[Hashable] = frozenset()
    indented_children: frozenset[Hashable] = frozenset()
    hold_together_groups: tuple[frozenset[Hashable], ...] | None = None
    custom_spacing: CustomSpacing | None = None
    alignment_keys: tuple[Hashable, ...] = ()
    aligned_children: Mapping[Hashable, Hashable] = field(default_factory=lambda: MappingProxyType({}))
    documented: bool = False
    comment_group_indent: Indent = Indent.NONE
    comment_group_alignment: Hashable | None = None
    verbatim: bool = False
    child_indent: ChildIndentHook | None = None
    child_alignment: ChildAlignmentHook | None = None
    customize: CustomizeHook | None = None

    def is_multiline(self, source_text: str) -> bool:
        if self.multiline_mode == MultilineMode.ALWAYS:
            return True
        if self.multiline_mode == MultilineMode.NEVER:
            return False
        return count_line_breaks(source_text) > 0


DEFAULT_BLOCK_CONFIG = BlockConfig()


class BlockRegistry:
    """Maps node kinds to their construct configuration.

    Filled once at startup, then frozen; unknown kinds get the default.
    """

    __slots__ = ("_configs", "_default", "_frozen")

    def __init__(
        self,
        configs: Mapping[Hashable, BlockConfig] | None = None,
        *,
        default: BlockConfig = DEFAULT_BLOCK_CONFIG,
    ) -> None:
        self._configs: dict[Hashable, BlockConfig] = dict(configs or {})
        self._default = default
        self._frozen = False

    def register(self, kind: Hashable, config: BlockConfig) -> BlockRegistry:
        if self._frozen:
            raise RuntimeError("BlockRegistry is frozen")
        self._configs[kind] = config
        return self

    def freeze(self) -> BlockRegistry:
        self._frozen = True
        return self

    @property
    def default(self) -> BlockConfig:
        return self._default

    def config_for(self, kind: Hashable) -> BlockConfig:
        return self._configs.get(kind, self._default)

    def __contains__(self, kind: object) -> bool:
        return kind in self._configs


@dataclass(frozen=True, slots=True)
class FormatLanguage:
    """Language-level facts the engine needs besides per-kind configuration."""

    id: str
    registry: BlockRegistry
    comment_kinds: frozenset[Hashable] = frozenset()
    line_comment_kinds: frozenset[Hashable] = frozenset()
    whitespace_kinds: frozenset[Hashable] = frozenset()
    outer_element_kinds: frozenset[Hashable] = frozenset()
