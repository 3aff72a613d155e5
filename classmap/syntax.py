"""Closed syntax-node variant consumed by the analyzer.

Every node is a frozen dataclass holding tuples, so converted trees are
hashable, comparable and can be pickled across process boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ConstantAtom:
    """A single constant name, e.g. ``Foo``."""

    name: str


@dataclass(frozen=True)
class ConstantPath:
    """A scoped constant, e.g. ``Outer::Inner``."""

    left: SyntaxNode
    right: SyntaxNode


@dataclass(frozen=True)
class TopLevelConstantPath:
    """A root-scoped constant, e.g. ``::Foo``."""

    ref: SyntaxNode


@dataclass(frozen=True)
class VariableOrConstRef:
    """A constant used in expression position."""

    inner: SyntaxNode


@dataclass(frozen=True)
class Body:
    """An ordered statement sequence (file root or definition body)."""

    statements: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True)
class ClassDef:
    """A ``class`` definition."""

    identifier: SyntaxNode
    superclass: SyntaxNode | None = None
    body: Body | None = None


@dataclass(frozen=True)
class ModuleDef:
    """A ``module`` definition."""

    identifier: SyntaxNode
    body: Body | None = None


@dataclass(frozen=True)
class LabelLiteral:
    """A bare-identifier token such as ``:posts`` or the key in ``class_name:``."""

    text: str


@dataclass(frozen=True)
class StringLiteral:
    """A quoted string without interpolation."""

    text: str


@dataclass(frozen=True)
class OptionMap:
    """Keyword-style options, in source order."""

    entries: tuple[tuple[SyntaxNode, SyntaxNode], ...] = ()


@dataclass(frozen=True)
class ArgumentList:
    """Call arguments: positional values plus an optional block."""

    positional: tuple[SyntaxNode, ...] = ()
    block: SyntaxNode | None = None


@dataclass(frozen=True)
class Command:
    """A receiver-less method call, e.g. ``has_many :posts``."""

    name: str
    arguments: ArgumentList = field(default_factory=ArgumentList)


@dataclass(frozen=True)
class Opaque:
    """Any construct the analyzer does not interpret.

    ``kind`` records the parser's own node type for debugging.
    """

    kind: str


SyntaxNode = Union[
    ConstantAtom,
    ConstantPath,
    TopLevelConstantPath,
    VariableOrConstRef,
    ClassDef,
    ModuleDef,
    Body,
    Command,
    ArgumentList,
    LabelLiteral,
    StringLiteral,
    OptionMap,
    Opaque,
]
