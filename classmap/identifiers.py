"""Constant-reference resolution into qualified names."""

from __future__ import annotations

from classmap.syntax import (
    ConstantAtom,
    ConstantPath,
    SyntaxNode,
    TopLevelConstantPath,
    VariableOrConstRef,
)

SEPARATOR = "::"


def identifier_segments(node: SyntaxNode | None) -> list[str]:
    """Flatten a constant-reference subtree into its name segments.

    Root scoping (``::Foo``) is ignored. Any shape that is not a constant
    reference yields an empty list.

    Args:
        node: The subtree to resolve, or None.

    Returns:
        Name segments, outermost first.
    """
    if isinstance(node, ConstantAtom):
        return [node.name]
    if isinstance(node, TopLevelConstantPath):
        return identifier_segments(node.ref)
    if isinstance(node, VariableOrConstRef):
        return identifier_segments(node.inner)
    if isinstance(node, ConstantPath):
        return identifier_segments(node.left) + identifier_segments(node.right)
    return []


def qualified_name(node: SyntaxNode | None, separator: str = SEPARATOR) -> str:
    """Join a subtree's segments, e.g. ``Outer::Base``; empty if none."""
    return separator.join(identifier_segments(node))
