"""Core data structures for classmap."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class NamespaceKind(enum.Enum):
    """Whether a namespace was declared with ``class`` or ``module``."""

    CLASS = "class"
    MODULE = "module"


class ReferenceKind(enum.Enum):
    """The relationship a reference edge represents."""

    SUBCLASS_OF = "subclass_of"
    NESTED_IN = "nested_in"
    INCLUDES = "includes"
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"


@dataclass(frozen=True)
class Namespace:
    """A recorded class or module definition site.

    ``name`` is the locally declared name and ``identifier`` its qualified
    form. ``enclosing`` is the position of the owning namespace within
    ``AnalysisResult.namespaces``, or None at file level.
    """

    kind: NamespaceKind
    name: str
    identifier: str
    file: str
    declared_parent: str = ""
    enclosing: int | None = None

    @property
    def is_subclass(self) -> bool:
        return bool(self.declared_parent)

    def __str__(self) -> str:
        if self.declared_parent:
            return f"{self.identifier} < {self.declared_parent}"
        return self.identifier


@dataclass(frozen=True)
class Reference:
    """A directed, typed edge between two identifier strings."""

    source: str
    target: str
    kind: ReferenceKind

    def __str__(self) -> str:
        return f"{self.source} → {self.target} [{self.kind.value}]"


@dataclass
class AnalysisResult:
    """Append-only collection of namespaces and references from one run."""

    namespaces: list[Namespace] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)

    def add_namespace(self, namespace: Namespace) -> int:
        """Record a namespace, emitting its subclass edge if it has a parent.

        Returns:
            The namespace's position, usable as another namespace's
            ``enclosing`` value.
        """
        self.namespaces.append(namespace)
        if namespace.is_subclass:
            self.add_reference(
                Reference(
                    source=namespace.identifier,
                    target=namespace.declared_parent,
                    kind=ReferenceKind.SUBCLASS_OF,
                )
            )
        return len(self.namespaces) - 1

    def add_reference(self, reference: Reference) -> None:
        self.references.append(reference)

    def enclosing_of(self, namespace: Namespace) -> Namespace | None:
        """Return the namespace that lexically encloses ``namespace``."""
        if namespace.enclosing is None:
            return None
        return self.namespaces[namespace.enclosing]

    def references_of(self, kind: ReferenceKind) -> list[Reference]:
        return [r for r in self.references if r.kind == kind]

    def summary(self) -> list[str]:
        """Render every reference as ``from → to [kind]``, in order."""
        return [str(r) for r in self.references]
