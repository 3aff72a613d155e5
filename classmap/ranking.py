"""Top-N namespace selection."""

from __future__ import annotations

from dataclasses import replace

from classmap.models import AnalysisResult


def select_namespaces(
    result: AnalysisResult,
    ranks: dict[str, float],
    *,
    max_namespaces: int | None = None,
) -> AnalysisResult:
    """Keep the highest-ranked namespaces and the references among them.

    Ties keep source order. Every record sharing a selected identifier is
    kept, so a reopened class stays complete.

    Args:
        result: The full AnalysisResult.
        ranks: Identifier ranks from ``rank_namespaces``.
        max_namespaces: Maximum number of distinct identifiers to keep.
            None means all.

    Returns:
        A new AnalysisResult; ``result`` is left untouched.
    """
    identifiers = list(dict.fromkeys(ns.identifier for ns in result.namespaces))
    if max_namespaces is None or max_namespaces >= len(identifiers):
        return result

    ordered = sorted(identifiers, key=lambda i: ranks.get(i, 0.0), reverse=True)
    selected = set(ordered[:max_namespaces])

    kept = [
        (position, ns)
        for position, ns in enumerate(result.namespaces)
        if ns.identifier in selected
    ]
    renumbered = {old: new for new, (old, _) in enumerate(kept)}
    # Enclosing positions are renumbered; a dropped parent becomes None.
    namespaces = [
        replace(ns, enclosing=renumbered.get(ns.enclosing))
        if ns.enclosing is not None
        else ns
        for _, ns in kept
    ]
    references = [
        r for r in result.references if r.source in selected and r.target in selected
    ]
    return AnalysisResult(namespaces=namespaces, references=references)
