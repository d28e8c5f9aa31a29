# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Graph -> JSON-compatible schema document.

The output follows the usual textual schema shape: primitives are bare type
strings, unions are lists, and a named type is spelled out at its first
occurrence and referenced by name afterwards. Namespaces are inherited the
usual way: a named type states its namespace only when it differs from the
enclosing one ("" for the null namespace), and a reference is written as the
short name when it shares the enclosing namespace, as the full name otherwise.
"""

import json
from typing import Any

from ..api.errors import ContractViolation
from .builders import Schema
from .name import Name
from .node import Node, SymbolicNode
from .types import SchemaType

__all__ = ["to_dict", "to_json"]


def to_dict(schema: Schema | Node) -> Any:
    node = schema.root if isinstance(schema, Schema) else schema
    return _render(node, set(), None)


def to_json(schema: Schema | Node, *, indent: int | None = None) -> str:
    return json.dumps(to_dict(schema), ensure_ascii=False, indent=indent)


def _reference(name: Name, enclosing: str | None) -> str:
    # a bare short name resolves against the enclosing namespace
    return name.name if name.namespace == enclosing else name.fullname


def _named_header(node: Node, kind: str, enclosing: str | None) -> dict[str, Any]:
    out: dict[str, Any] = {"type": kind, "name": node.name.name}
    if node.name.namespace != enclosing:
        out["namespace"] = node.name.namespace or ""
    return out


def _render(node: Node, seen: set[str], enclosing: str | None) -> Any:
    t = node.type
    if t.is_primitive:
        return t.value
    if isinstance(node, SymbolicNode):
        return _reference(node.name, enclosing)

    if t.is_named:
        full = node.name.fullname
        if full in seen:
            return _reference(node.name, enclosing)
        seen.add(full)

    if t is SchemaType.RECORD:
        out = _named_header(node, "record", enclosing)
        if node.doc():
            out["doc"] = node.doc()
        inner = node.name.namespace
        fields: list[dict[str, Any]] = []
        for i in range(node.leaves()):
            field: dict[str, Any] = {"name": node.name_at(i), "type": _render(node.leaf_at(i), seen, inner)}
            default = node.default_at(i)
            if default.is_set:
                field["default"] = default.value
            field.update(node.custom_attributes_at(i))
            fields.append(field)
        out["fields"] = fields
        return out
    if t is SchemaType.ENUM:
        out = _named_header(node, "enum", enclosing)
        out["symbols"] = list(node.symbols())
        return out
    if t is SchemaType.FIXED:
        out = _named_header(node, "fixed", enclosing)
        out["size"] = node.fixed_size()
        return out
    if t is SchemaType.ARRAY:
        return {"type": "array", "items": _render(node.leaf_at(0), seen, enclosing)}
    if t is SchemaType.MAP:
        return {"type": "map", "values": _render(node.leaf_at(0), seen, enclosing)}
    if t is SchemaType.UNION:
        return [_render(leaf, seen, enclosing) for leaf in node.iter_leaves()]
    raise ContractViolation(f"cannot render {t.value} node")
