# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from enum import Enum

__all__ = ["NAMED_TYPES", "PRIMITIVE_TYPES", "SchemaType"]


class SchemaType(str, Enum):
    """
    Kind tag carried by every node of a schema graph.

    The string values are the type names used in the textual schema form, so
    `SchemaType("record")` works for collaborators that read JSON.
    """

    NULL = "null"
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"

    RECORD = "record"
    ENUM = "enum"
    ARRAY = "array"
    MAP = "map"
    UNION = "union"
    FIXED = "fixed"
    SYMBOLIC = "symbolic"

    @property
    def is_primitive(self) -> bool:
        return self in PRIMITIVE_TYPES

    @property
    def is_named(self) -> bool:
        return self in NAMED_TYPES


PRIMITIVE_TYPES: frozenset[SchemaType] = frozenset(
    {
        SchemaType.NULL,
        SchemaType.BOOLEAN,
        SchemaType.INT,
        SchemaType.LONG,
        SchemaType.FLOAT,
        SchemaType.DOUBLE,
        SchemaType.STRING,
        SchemaType.BYTES,
    }
)

# symbolic carries a name too, but only as a reference to one of these
NAMED_TYPES: frozenset[SchemaType] = frozenset({SchemaType.RECORD, SchemaType.ENUM, SchemaType.FIXED})
