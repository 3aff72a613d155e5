"""Namespace walking: turns syntax trees into namespaces and references."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from classmap.associations import resolve_statement
from classmap.identifiers import SEPARATOR, qualified_name
from classmap.models import (
    AnalysisResult,
    Namespace,
    NamespaceKind,
    Reference,
    ReferenceKind,
)
from classmap.syntax import Body, ClassDef, ModuleDef, SyntaxNode

logger = logging.getLogger(__name__)


def build_analysis(trees: Iterable[tuple[str, Body]]) -> AnalysisResult:
    """Walk every ``(file, tree)`` pair, in order, into one fresh result.

    Args:
        trees: Parsed files as ``(file identifier, root body)`` pairs.

    Returns:
        The populated AnalysisResult.
    """
    result = AnalysisResult()
    for file, tree in trees:
        analyze_tree(result, tree.statements, file=file)
    return result


def analyze_tree(
    result: AnalysisResult,
    statements: Sequence[SyntaxNode],
    *,
    file: str,
    enclosing: int | None = None,
) -> None:
    """Record every class and module defined directly in ``statements``.

    Definitions nested deeper inside other statements (conditionals, method
    bodies, blocks) are not visited.

    Args:
        result: The sink to append to.
        statements: A statement sequence (file root or definition body).
        file: Identifier of the file being walked.
        enclosing: Position in ``result.namespaces`` of the namespace whose
            body this is, or None at file level.
    """
    for statement in statements:
        if isinstance(statement, (ClassDef, ModuleDef)):
            _analyze_namespace(result, statement, file=file, enclosing=enclosing)


def _analyze_namespace(
    result: AnalysisResult,
    definition: ClassDef | ModuleDef,
    *,
    file: str,
    enclosing: int | None,
) -> None:
    name = qualified_name(definition.identifier)
    parent = result.namespaces[enclosing] if enclosing is not None else None
    # Qualified by the immediate parent's local name only.
    identifier = f"{parent.name}{SEPARATOR}{name}" if parent else name

    if isinstance(definition, ClassDef):
        kind = NamespaceKind.CLASS
        declared_parent = qualified_name(definition.superclass)
    else:
        kind = NamespaceKind.MODULE
        declared_parent = ""

    namespace = Namespace(
        kind=kind,
        name=name,
        identifier=identifier,
        file=file,
        declared_parent=declared_parent,
        enclosing=enclosing,
    )
    position = result.add_namespace(namespace)
    logger.debug("%s: %s %s", file, kind.value, namespace)

    if definition.body is not None:
        statements = definition.body.statements
        analyze_tree(result, statements, file=file, enclosing=position)
        _scan_declarations(result, namespace, statements)

    if parent is not None:
        _add_reference(result, identifier, parent.identifier, ReferenceKind.NESTED_IN)


def _scan_declarations(
    result: AnalysisResult,
    namespace: Namespace,
    statements: Sequence[SyntaxNode],
) -> None:
    """Record includes and associations declared directly in a body."""
    for statement in statements:
        resolved = resolve_statement(statement)
        if resolved is None:
            continue
        kind, target = resolved
        _add_reference(result, namespace.identifier, target, kind)


def _add_reference(
    result: AnalysisResult, source: str, target: str, kind: ReferenceKind
) -> None:
    reference = Reference(source=source, target=target, kind=kind)
    result.add_reference(reference)
    logger.debug("%s", reference)
