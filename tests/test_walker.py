"""Tests for the namespace walker."""

from __future__ import annotations

from classmap.models import NamespaceKind, ReferenceKind
from classmap.syntax import (
    ArgumentList,
    Body,
    ClassDef,
    Command,
    ConstantAtom,
    ConstantPath,
    LabelLiteral,
    ModuleDef,
    Opaque,
    OptionMap,
    StringLiteral,
    TopLevelConstantPath,
    VariableOrConstRef,
)
from classmap.walker import build_analysis


def _const(name: str) -> VariableOrConstRef:
    return VariableOrConstRef(ConstantAtom(name))


def _class(name: str, *statements, superclass=None) -> ClassDef:
    return ClassDef(
        identifier=ConstantAtom(name),
        superclass=superclass,
        body=Body(tuple(statements)) if statements else None,
    )


def _module(name: str, *statements) -> ModuleDef:
    return ModuleDef(
        identifier=ConstantAtom(name),
        body=Body(tuple(statements)) if statements else None,
    )


def _command(name: str, *positional) -> Command:
    return Command(name=name, arguments=ArgumentList(tuple(positional)))


def _analyze(*statements, file: str = "foo.rb"):
    return build_analysis([(file, Body(tuple(statements)))])


class TestNamespaces:
    """Namespace records produced by the walker."""

    def test_simple_class_has_no_references(self) -> None:
        result = _analyze(_class("Foo"))
        assert result.references == []
        assert len(result.namespaces) == 1
        namespace = result.namespaces[0]
        assert namespace.kind == NamespaceKind.CLASS
        assert namespace.identifier == "Foo"
        assert namespace.declared_parent == ""
        assert namespace.enclosing is None
        assert namespace.file == "foo.rb"

    def test_module_has_no_references(self) -> None:
        result = _analyze(_module("Foo"))
        assert result.references == []
        assert len(result.namespaces) == 1
        assert result.namespaces[0].kind == NamespaceKind.MODULE
        assert result.namespaces[0].declared_parent == ""

    def test_qualified_definition_name(self) -> None:
        definition = ClassDef(
            identifier=ConstantPath(_const("Admin"), ConstantAtom("User"))
        )
        result = _analyze(definition)
        assert result.namespaces[0].identifier == "Admin::User"

    def test_nested_class_is_qualified_and_linked(self) -> None:
        result = _analyze(_class("Foo", _class("Bar")))
        outer, inner = result.namespaces
        assert inner.identifier == "Foo::Bar"
        assert inner.name == "Bar"
        assert inner.declared_parent == ""
        assert result.enclosing_of(inner) is outer
        assert result.enclosing_of(outer) is None

    def test_deep_nesting_uses_immediate_parent_name_only(self) -> None:
        result = _analyze(_module("A", _module("B", _class("C"))))
        identifiers = [ns.identifier for ns in result.namespaces]
        assert identifiers == ["A", "A::B", "B::C"]
        assert result.summary() == [
            "B::C → A::B [nested_in]",
            "A::B → A [nested_in]",
        ]

    def test_definitions_inside_other_statements_are_skipped(self) -> None:
        result = _analyze(Opaque("if"), _class("Foo", Opaque("method")))
        assert [ns.identifier for ns in result.namespaces] == ["Foo"]

    def test_reopened_class_is_recorded_twice(self) -> None:
        result = build_analysis(
            [
                ("a.rb", Body((_class("Foo"),))),
                ("b.rb", Body((_class("Foo"),))),
            ]
        )
        assert [ns.identifier for ns in result.namespaces] == ["Foo", "Foo"]
        assert [ns.file for ns in result.namespaces] == ["a.rb", "b.rb"]


class TestReferences:
    """Reference edges produced by the walker."""

    def test_inheritance(self) -> None:
        result = _analyze(_class("Foo", superclass=_const("Bar")))
        assert result.namespaces[0].declared_parent == "Bar"
        assert result.summary() == ["Foo → Bar [subclass_of]"]

    def test_qualified_superclass(self) -> None:
        superclass = TopLevelConstantPath(
            ConstantPath(_const("Outer"), ConstantAtom("Base"))
        )
        result = _analyze(_class("Foo", superclass=superclass))
        assert result.references[0].target == "Outer::Base"

    def test_nested_subclass_uses_qualified_source(self) -> None:
        result = _analyze(_module("Admin", _class("User", superclass=_const("Base"))))
        assert result.summary() == [
            "Admin::User → Base [subclass_of]",
            "Admin::User → Admin [nested_in]",
        ]

    def test_includes_in_source_order(self) -> None:
        result = _analyze(
            _class("Foo", _command("include", _const("Bar")), _command("include", _const("Baz")))
        )
        assert result.summary() == [
            "Foo → Bar [includes]",
            "Foo → Baz [includes]",
        ]

    def test_associations(self) -> None:
        result = _analyze(
            _class(
                "FooModel",
                _command("belongs_to", LabelLiteral("bar")),
                _command("has_many", LabelLiteral("posts")),
                _command(
                    "belongs_to",
                    LabelLiteral("client"),
                    OptionMap(
                        (
                            (LabelLiteral("class_name"), StringLiteral("Person")),
                            (LabelLiteral("flang"), Opaque("identifier")),
                        )
                    ),
                ),
                superclass=_const("ApplicationRecord"),
            )
        )
        assert result.summary() == [
            "FooModel → ApplicationRecord [subclass_of]",
            "FooModel → Bar [belongs_to]",
            "FooModel → Post [has_many]",
            "FooModel → Person [belongs_to]",
        ]

    def test_edge_order_nested_before_parent_declarations(self) -> None:
        result = _analyze(
            _module(
                "Outer",
                _command("include", _const("Mixin")),
                _class("Inner", _command("include", _const("Other"))),
            )
        )
        assert result.summary() == [
            "Outer::Inner → Other [includes]",
            "Outer::Inner → Outer [nested_in]",
            "Outer → Mixin [includes]",
        ]

    def test_nested_in_follows_nested_body(self) -> None:
        result = _analyze(
            _class("A", _class("B", _class("C"), _command("include", _const("M"))))
        )
        assert result.summary() == [
            "B::C → A::B [nested_in]",
            "A::B → M [includes]",
            "A::B → A [nested_in]",
        ]

    def test_top_level_commands_are_ignored(self) -> None:
        result = _analyze(_command("include", _const("Foo")), _class("Bar"))
        assert result.references == []

    def test_unrecognized_statements_produce_nothing(self) -> None:
        result = _analyze(
            _class(
                "Foo",
                Opaque("method"),
                _command("validates", LabelLiteral("name")),
                _command("include"),
                Opaque("if_modifier"),
            )
        )
        assert result.references == []


class TestBuildAnalysis:
    """Tests for build_analysis."""

    def test_is_repeatable(self) -> None:
        trees = [
            ("a.rb", Body((_class("Foo", _class("Bar"), superclass=_const("Base")),))),
            ("b.rb", Body((_module("Baz", _command("include", _const("Foo"))),))),
        ]
        first = build_analysis(trees)
        second = build_analysis(trees)
        assert first.namespaces == second.namespaces
        assert first.references == second.references

    def test_files_processed_in_order(self) -> None:
        result = build_analysis(
            [
                ("b.rb", Body((_class("B"),))),
                ("a.rb", Body((_class("A"),))),
            ]
        )
        assert [ns.identifier for ns in result.namespaces] == ["B", "A"]

    def test_empty_input(self) -> None:
        result = build_analysis([])
        assert result.namespaces == []
        assert result.references == []

    def test_subclass_reference_kind(self) -> None:
        result = _analyze(_class("Foo", superclass=_const("Bar")))
        assert result.references_of(ReferenceKind.SUBCLASS_OF)[0].source == "Foo"
