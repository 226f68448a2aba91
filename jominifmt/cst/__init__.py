"""Green/red CST structures."""

from jominifmt.cst.green import GreenElement, GreenNode, GreenToken, TreeBuilder
from jominifmt.cst.red import (
    JOMINI_LANGUAGE,
    SourceFile,
    SyntaxElement,
    SyntaxNode,
    SyntaxToken,
    from_green,
)

__all__ = [
    "JOMINI_LANGUAGE",
    "GreenElement",
    "GreenNode",
    "GreenToken",
    "SourceFile",
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "TreeBuilder",
    "from_green",
]
