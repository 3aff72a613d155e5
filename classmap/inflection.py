"""Word inflection for association target names."""

from __future__ import annotations


def inflect(word: str, to_singular: bool) -> str:
    """Singularize ``word`` when ``to_singular`` is set.

    Only the first matching rule applies: ``ies`` becomes ``y``, ``sses``
    loses its ``es``, and otherwise a trailing ``s`` is dropped.
    """
    if not to_singular:
        return word
    if word.endswith("ies"):
        return word[: -len("ies")] + "y"
    if word.endswith("sses"):
        return word[: -len("es")]
    if word.endswith("s"):
        return word[:-1]
    return word


def association_class_name(label: str, singular: bool) -> str:
    """Derive the default class name for an association label.

    Example: ``blog_posts`` with ``singular=True`` gives ``BlogPost``.

    Args:
        label: The association name as written, e.g. ``blog_posts``.
        singular: Whether to singularize the last word.

    Returns:
        The camel-cased class name.
    """
    segments = label.split("_")
    segments[-1] = inflect(segments[-1], singular)
    return "".join(_capitalize_first(s) for s in segments)


def _capitalize_first(segment: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return segment[:1].upper() + segment[1:]
