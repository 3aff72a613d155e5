"""Tree-sitter parsing and conversion into the analyzer's syntax nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from tree_sitter import Node

from classmap.exceptions import RubySyntaxError
from classmap.languages import TreeSitterLanguage
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
    SyntaxNode,
    TopLevelConstantPath,
    VariableOrConstRef,
)

logger = logging.getLogger(__name__)

# Older grammars name a receiver-less call ``method_call``.
_CALL_TYPES = frozenset({"call", "method_call"})
_STRING_PARTS = frozenset({"string_content", "escape_sequence"})


def parse_file(file_path: Path, language: TreeSitterLanguage) -> Body:
    """Parse a source file into a syntax tree.

    Args:
        file_path: Absolute path to the source file.
        language: The tree-sitter language configuration.

    Returns:
        The file's root Body.

    Raises:
        FileNotFoundError: If file_path does not exist.
        RubySyntaxError: If the file contains syntax errors.
    """
    return parse_source(file_path.read_bytes(), language, file=str(file_path))


def parse_source(
    source: bytes, language: TreeSitterLanguage, *, file: str = "<source>"
) -> Body:
    """Parse source bytes into a syntax tree.

    Raises:
        RubySyntaxError: If the tree contains ERROR or MISSING nodes.
    """
    if not source:
        return Body()

    tree = language.get_parser().parse(source)
    root = tree.root_node
    if root.has_error:
        line = _first_error_line(root)
        logger.debug("%s: rejected, syntax error near line %d", file, line)
        raise RubySyntaxError(file, line)
    return _convert_body(root.named_children)


def _first_error_line(root: Node) -> int:
    """Return the 1-indexed line of the first ERROR or MISSING node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return root.start_point[0] + 1


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _convert_body(nodes: Iterable[Node]) -> Body:
    return Body(tuple(_convert_statement(n) for n in nodes if n.type != "comment"))


def _convert_statement(node: Node) -> SyntaxNode:
    if node.type == "class":
        return _convert_class(node)
    if node.type == "module":
        return _convert_module(node)
    if node.type in _CALL_TYPES:
        return _convert_call(node)
    return Opaque(node.type)


def _convert_class(node: Node) -> ClassDef:
    name = node.child_by_field_name("name")
    superclass = node.child_by_field_name("superclass")
    parent: SyntaxNode | None = None
    if superclass is not None and superclass.named_children:
        parent = _convert_value(superclass.named_children[0])
    return ClassDef(
        identifier=_convert_definition_name(name),
        superclass=parent,
        body=_definition_body(node, name, superclass),
    )


def _convert_module(node: Node) -> ModuleDef:
    name = node.child_by_field_name("name")
    return ModuleDef(
        identifier=_convert_definition_name(name),
        body=_definition_body(node, name),
    )


def _definition_body(node: Node, *headers: Node | None) -> Body | None:
    """Return the body of a class or module, or None when it is empty.

    Grammars before ``body_statement`` was introduced place statements
    directly under the definition node, after its header fields.
    """
    body = node.child_by_field_name("body")
    if body is not None:
        return _convert_body(body.named_children)
    statements = [
        c
        for c in node.named_children
        if c.type != "comment" and not any(c == h for h in headers if h is not None)
    ]
    if not statements:
        return None
    return _convert_body(statements)


def _convert_definition_name(node: Node | None) -> SyntaxNode:
    if node is None:
        return Opaque("missing")
    return _convert_constant(node, expression=False)


def _convert_constant(node: Node, *, expression: bool) -> SyntaxNode:
    """Convert ``Foo``, ``A::B`` or ``::Foo``.

    Constants in expression position are wrapped in VariableOrConstRef;
    the rightmost segment of a path never is.
    """
    if node.type == "constant":
        atom = ConstantAtom(_text(node))
        return VariableOrConstRef(atom) if expression else atom
    if node.type == "scope_resolution":
        name = node.child_by_field_name("name")
        right = (
            _convert_constant(name, expression=False)
            if name is not None
            else Opaque("missing")
        )
        scope = node.child_by_field_name("scope")
        if scope is None:
            return TopLevelConstantPath(right)
        return ConstantPath(_convert_value(scope), right)
    return Opaque(node.type)


def _convert_call(node: Node) -> SyntaxNode:
    if node.child_by_field_name("receiver") is not None:
        return Opaque(node.type)
    method = node.child_by_field_name("method")
    if method is None or method.type != "identifier":
        return Opaque(node.type)

    arguments = node.child_by_field_name("arguments")
    block = node.child_by_field_name("block")
    return Command(
        name=_text(method),
        arguments=ArgumentList(
            positional=_convert_arguments(arguments) if arguments else (),
            block=Opaque(block.type) if block is not None else None,
        ),
    )


def _convert_arguments(node: Node) -> tuple[SyntaxNode, ...]:
    """Convert an argument_list, folding consecutive bare pairs into one OptionMap."""
    positional: list[SyntaxNode] = []
    pending: list[tuple[SyntaxNode, SyntaxNode]] = []
    for child in node.named_children:
        if child.type == "comment":
            continue
        if child.type == "pair":
            pending.append(_convert_pair(child))
            continue
        if pending:
            positional.append(OptionMap(tuple(pending)))
            pending = []
        positional.append(_convert_value(child))
    if pending:
        positional.append(OptionMap(tuple(pending)))
    return tuple(positional)


def _convert_pair(node: Node) -> tuple[SyntaxNode, SyntaxNode]:
    key = node.child_by_field_name("key")
    value = node.child_by_field_name("value")
    return (
        _convert_value(key) if key is not None else Opaque("missing"),
        _convert_value(value) if value is not None else Opaque("missing"),
    )


def _convert_value(node: Node) -> SyntaxNode:
    if node.type in ("constant", "scope_resolution"):
        return _convert_constant(node, expression=True)
    if node.type == "simple_symbol":
        return LabelLiteral(_text(node).removeprefix(":"))
    if node.type == "hash_key_symbol":
        return LabelLiteral(_text(node))
    if node.type == "delimited_symbol":
        text = _plain_string_text(node)
        return LabelLiteral(text) if text is not None else Opaque(node.type)
    if node.type == "string":
        text = _plain_string_text(node)
        return StringLiteral(text) if text is not None else Opaque(node.type)
    if node.type == "hash":
        return OptionMap(
            tuple(_convert_pair(c) for c in node.named_children if c.type == "pair")
        )
    return Opaque(node.type)


def _plain_string_text(node: Node) -> str | None:
    """Return the literal content of a string, or None if it interpolates."""
    parts: list[str] = []
    for child in node.named_children:
        if child.type not in _STRING_PARTS:
            return None
        parts.append(_text(child))
    return "".join(parts)
