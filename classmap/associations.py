"""Mixin and association detection on namespace body statements."""

from __future__ import annotations

from classmap.identifiers import identifier_segments, qualified_name
from classmap.inflection import association_class_name
from classmap.models import ReferenceKind
from classmap.syntax import (
    Command,
    LabelLiteral,
    OptionMap,
    StringLiteral,
    SyntaxNode,
)

CLASS_NAME_KEY = "class_name"

_ASSOCIATION_KINDS: dict[str, ReferenceKind] = {
    "belongs_to": ReferenceKind.BELONGS_TO,
    "has_many": ReferenceKind.HAS_MANY,
}


def resolve_statement(statement: SyntaxNode) -> tuple[ReferenceKind, str] | None:
    """Interpret a direct body statement as an include or association.

    Args:
        statement: One statement from a namespace body.

    Returns:
        ``(kind, target)`` for a recognized declaration, or None.
    """
    if not isinstance(statement, Command):
        return None
    if statement.name == "include":
        return _resolve_include(statement)
    if statement.name in _ASSOCIATION_KINDS:
        return _resolve_association(statement)
    return None


def _resolve_include(command: Command) -> tuple[ReferenceKind, str] | None:
    """Match ``include Some::Module`` with exactly one constant argument."""
    positional = command.arguments.positional
    if len(positional) != 1 or not identifier_segments(positional[0]):
        return None
    return ReferenceKind.INCLUDES, qualified_name(positional[0])


def _resolve_association(command: Command) -> tuple[ReferenceKind, str] | None:
    """Match ``belongs_to :name`` / ``has_many :names``, honoring ``class_name``."""
    positional = command.arguments.positional
    if not positional or not isinstance(positional[0], LabelLiteral):
        return None

    kind = _ASSOCIATION_KINDS[command.name]
    target = association_class_name(
        positional[0].text, singular=kind == ReferenceKind.HAS_MANY
    )
    if len(positional) > 1 and isinstance(positional[1], OptionMap):
        override = explicit_class_name(positional[1])
        if override is not None:
            target = override
    return kind, target


def explicit_class_name(options: OptionMap) -> str | None:
    """Return the first string value whose key text contains ``class_name``.

    Keys are compared by substring, so ``"my_class_name"`` also matches.
    """
    for key, value in options.entries:
        if not isinstance(key, (LabelLiteral, StringLiteral)):
            continue
        if CLASS_NAME_KEY in key.text and isinstance(value, StringLiteral):
            return value.text
    return None
