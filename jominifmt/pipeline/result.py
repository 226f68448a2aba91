"""Parse carrier shared by the format runner, CLI and scripts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jominifmt.cst import SourceFile, from_green
from jominifmt.diagnostics import has_errors
from jominifmt.parser.options import ParserOptions
from jominifmt.parser.tree_sink import ParsedGreenTree

if TYPE_CHECKING:
    from jominifmt.cst import GreenNode, SyntaxNode
    from jominifmt.diagnostics import Diagnostic
    from jominifmt.format.block import FormatBlock
    from jominifmt.format.settings import FormatSettings


@dataclass(slots=True)
class ParseResultBase:
    """Shared parse carrier for parse-once/consume-many workflows."""

    source_text: str
    parsed: ParsedGreenTree

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    def green_root(self) -> GreenNode:
        return self.parsed.root


@dataclass(slots=True)
class JominiParseResult(ParseResultBase):
    """Jomini parse result with lazily built syntax and block trees."""

    options: ParserOptions
    path: str | None = None
    _syntax_root: SyntaxNode | None = field(default=None, init=False, repr=False)
    _block_roots: dict[FormatSettings, FormatBlock] = field(default_factory=dict, init=False, repr=False)

    def source_file(self) -> SourceFile:
        return self.syntax_root().file

    def syntax_root(self) -> SyntaxNode:
        if self._syntax_root is None:
            owner = SourceFile(self.source_text, path=self.path)
            self._syntax_root = from_green(self.parsed.root, self.source_text, file=owner)
        return self._syntax_root

    def block_root(self, settings: FormatSettings | None = None) -> FormatBlock:
        """Formatting block tree over this parse, one per distinct settings value."""
        from jominifmt.format.jomini import build_jomini_block_tree
        from jominifmt.format.settings import FormatSettings

        resolved = settings if settings is not None else FormatSettings()
        block = self._block_roots.get(resolved)
        if block is None:
            block = build_jomini_block_tree(self.syntax_root(), resolved)
            self._block_roots[resolved] = block
        return block
