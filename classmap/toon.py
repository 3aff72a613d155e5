"""TOON (Token-Oriented Object Notation) encoder."""

from __future__ import annotations

import re

from classmap.models import AnalysisResult

_NEEDS_QUOTING = re.compile(r'[,:"\\{}\[\]]')
_LOOKS_NUMERIC = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?$")
_KEYWORDS = frozenset({"true", "false", "null"})


def encode(
    result: AnalysisResult,
    *,
    repo_name: str,
    ranks: dict[str, float] | None = None,
) -> str:
    """Encode an AnalysisResult into TOON format.

    Args:
        result: The analysis to encode.
        repo_name: Name shown in the ``repo`` header.
        ranks: Optional identifier ranks; zero when missing.

    Returns:
        TOON-formatted string (no trailing newline).
    """
    ranks = ranks or {}
    parts: list[str] = []

    parts.append(f"repo: {_encode_value(repo_name)}")

    namespace_rows = [
        [
            ns.identifier,
            ns.kind.value,
            ns.declared_parent,
            ns.file,
            f"{ranks.get(ns.identifier, 0.0):.4f}",
        ]
        for ns in result.namespaces
    ]
    parts.append(
        _format_tabular(
            "namespaces",
            ["identifier", "kind", "parent", "file", "rank"],
            namespace_rows,
        )
    )

    reference_rows = [
        [r.source, r.target, r.kind.value] for r in result.references
    ]
    parts.append(
        _format_tabular("references", ["from", "to", "kind"], reference_rows)
    )

    return "\n".join(parts)


def _format_tabular(
    name: str,
    columns: list[str],
    rows: list[list[str]],
) -> str:
    """Format a tabular array in TOON notation.

    Args:
        name: The array field name.
        columns: Column header names.
        rows: List of row data (each row is list of strings).

    Returns:
        TOON tabular array string.
    """
    header = f"{name}[{len(rows)}]{{{','.join(columns)}}}:"
    lines = [header]
    for row in rows:
        encoded = [_encode_value(cell) for cell in row]
        lines.append(f"  {','.join(encoded)}")
    return "\n".join(lines)


def _encode_value(value: str) -> str:
    """Encode a single value, quoting if necessary per TOON rules.

    Qualified names contain ``:`` and are therefore always quoted.
    """
    if not value:
        return '""'

    if value != value.strip():
        return _quote(value)

    if any(c in value for c in "\n\r\t"):
        return _quote(value)

    if value.lower() in _KEYWORDS:
        return _quote(value)

    if _LOOKS_NUMERIC.match(value):
        return value

    if _NEEDS_QUOTING.search(value):
        return _quote(value)

    if value.startswith("-"):
        return _quote(value)

    return value


def _quote(value: str) -> str:
    """Double-quote a string with TOON escape rules."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f'"{escaped}"'
