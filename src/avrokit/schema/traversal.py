# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Read-only walks over a schema graph.

Only owning edges (leaves) are followed. A SymbolicNode is yielded like any
other node but its target is never entered, so recursive schemas terminate.
"""

from collections.abc import Iterator

from ..api.errors import ContractViolation, DuplicateNameError, UnresolvedSymbolError
from ..core.log import get_logger, log_context
from .builders import Schema
from .node import Node, RecordNode, SymbolicNode

__all__ = ["back_edges", "named_types", "validate", "walk"]

_log = get_logger("schema.traversal")


def _as_node(schema: Schema | Node) -> Node:
    if isinstance(schema, Schema):
        return schema.root
    if isinstance(schema, Node):
        return schema
    raise ContractViolation(f"expected a Schema or Node, got {type(schema).__name__}")


def walk(schema: Schema | Node) -> Iterator[Node]:
    """Depth-first pre-order over owning edges; a shared node is yielded once."""
    seen: set[int] = set()
    stack: list[Node] = [_as_node(schema)]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node
        # reversed so that leaf 0 is visited first
        stack.extend(reversed(tuple(node.iter_leaves())))


def back_edges(schema: Schema | Node) -> list[SymbolicNode]:
    """
    Symbolic nodes that close a cycle: their target reaches them again
    through owning edges. Unresolved symbols are ignored here (see validate).
    """
    out: list[SymbolicNode] = []
    for node in walk(schema):
        if not isinstance(node, SymbolicNode) or not node.is_set():
            continue
        if any(n is node for n in walk(node.link())):
            out.append(node)
    return out


def named_types(schema: Schema | Node) -> dict[str, Node]:
    """Full name -> defining node, for every record/enum/fixed owned by the graph."""
    out: dict[str, Node] = {}
    for node in walk(schema):
        if node.type.is_named:
            out.setdefault(node.name.fullname, node)
    return out


def validate(schema: Schema | Node) -> dict[str, Node]:
    """
    Check graph-wide rules that no single builder call can see:
    - every symbolic node is linked, to a node of the same full name that is
      defined inside this graph;
    - no two distinct named nodes share a full name;
    - record metadata sequences are parallel.

    Returns the named-type registry (full name -> defining node).
    """
    root = _as_node(schema)
    registry: dict[str, Node] = {}
    symbols: list[SymbolicNode] = []

    with log_context(schema=str(root.name) if root.name else root.type.value):
        for node in walk(root):
            if isinstance(node, SymbolicNode):
                symbols.append(node)
                continue
            if isinstance(node, RecordNode):
                n = node.names()
                if not (n == node.leaves() == len(node.field_attributes) == len(node.field_defaults)):
                    raise ContractViolation(f"record {node.name}: field metadata is out of step")
            if node.type.is_named:
                key = node.name.fullname
                if key in registry:
                    raise DuplicateNameError(f"type {key} is defined more than once")
                registry[key] = node

        for sym in symbols:
            target = sym.link()
            if target.name != sym.name:
                raise UnresolvedSymbolError(f"symbol {sym.name} links to {target.name or target.type.value}")
            if registry.get(sym.name.fullname) is not target:
                raise UnresolvedSymbolError(f"symbol {sym.name} links to a node outside this schema")

        _log.debug("schema validated", event="schema.validate.ok", named=len(registry), symbols=len(symbols))
    return registry
