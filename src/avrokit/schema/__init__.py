# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Public exports for the schema object model.

Build graphs with the *Schema builders, inspect them through Node, and hand
the result of `publish()` to codecs and resolvers.
"""

from .attributes import RESERVED_FIELD_KEYS, CustomAttributes
from .builders import (
    ArraySchema,
    BoolSchema,
    BytesSchema,
    DoubleSchema,
    EnumSchema,
    FixedSchema,
    FloatSchema,
    IntSchema,
    LongSchema,
    MapSchema,
    NullSchema,
    PrimitiveSchema,
    RecordSchema,
    Schema,
    StringSchema,
    SymbolicSchema,
    UnionSchema,
)
from .defaults import NO_DEFAULT, DefaultValue
from .name import Name
from .node import ArrayNode, EnumNode, FixedNode, MapNode, Node, PrimitiveNode, RecordNode, SymbolicNode, UnionNode
from .printer import to_dict, to_json
from .traversal import back_edges, named_types, validate, walk
from .types import SchemaType

__all__ = [
    "NO_DEFAULT",
    "RESERVED_FIELD_KEYS",
    "ArrayNode",
    "ArraySchema",
    "BoolSchema",
    "BytesSchema",
    "CustomAttributes",
    "DefaultValue",
    "DoubleSchema",
    "EnumNode",
    "EnumSchema",
    "FixedNode",
    "FixedSchema",
    "FloatSchema",
    "IntSchema",
    "LongSchema",
    "MapNode",
    "MapSchema",
    "Name",
    "Node",
    "NullSchema",
    "PrimitiveNode",
    "PrimitiveSchema",
    "RecordNode",
    "RecordSchema",
    "Schema",
    "SchemaType",
    "StringSchema",
    "SymbolicNode",
    "SymbolicSchema",
    "UnionNode",
    "UnionSchema",
    "back_edges",
    "named_types",
    "to_dict",
    "to_json",
    "validate",
    "walk",
]
