"""Syntax kinds."""

from jominifmt.syntax.kind import OPERATOR_KINDS, JominiSyntaxKind

__all__ = ["OPERATOR_KINDS", "JominiSyntaxKind"]
