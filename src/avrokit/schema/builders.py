# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Schema handles and builders.

A Schema is a cheap handle on one root Node. Copying a handle, or attaching the
same handle under several parents, shares the node instead of duplicating the
subtree.

Builders create a fresh node of their kind and expose append-only mutators.
Every mutator either fully succeeds or raises before touching the node:
RecordSchema.add_field registers the field name first, and only then appends
the leaf, the attributes and the default.

Construction is single-threaded per graph. `publish()` freezes the graph and
returns a plain Schema that is safe to share for concurrent reads.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from ..api.errors import (
    ContractViolation,
    DuplicateBranchError,
    DuplicateNameError,
    InvalidFixedSizeError,
    InvalidNameError,
    InvalidUnionError,
)
from ..core.config import SchemaConfig, get_default_config
from ..core.log import get_logger
from .attributes import RESERVED_FIELD_KEYS, CustomAttributes
from .defaults import NO_DEFAULT, DefaultValue
from .name import Name
from .node import ArrayNode, EnumNode, FixedNode, MapNode, Node, PrimitiveNode, RecordNode, SymbolicNode, UnionNode
from .types import SchemaType

__all__ = [
    "ArraySchema",
    "BoolSchema",
    "BytesSchema",
    "DoubleSchema",
    "EnumSchema",
    "FixedSchema",
    "FloatSchema",
    "IntSchema",
    "LongSchema",
    "MapSchema",
    "NullSchema",
    "PrimitiveSchema",
    "RecordSchema",
    "Schema",
    "StringSchema",
    "SymbolicSchema",
    "UnionSchema",
]

_log = get_logger("schema.builders")


def _resolve_name(value: str | Name, cfg: SchemaConfig) -> Name:
    name = Name.coerce(value)
    if cfg.strict_names:
        name.check()
    return name


def _check_identifier(what: str, value: str, cfg: SchemaConfig) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidNameError(f"{what} must be a non-empty string")
    if cfg.strict_names and "." in value:
        raise InvalidNameError(f"{what} {value!r} must not be qualified")
    if cfg.strict_names:
        Name(value).check()


def _check_attribute_keys(field: str, attrs: CustomAttributes, node: Node) -> None:
    for key in attrs:
        if key in RESERVED_FIELD_KEYS:
            _log.debug(
                "reserved attribute rejected",
                event="schema.record.attribute_rejected",
                schema=str(node.name),
                field=field,
                key=key,
            )
            raise DuplicateNameError(f"field {field!r}: attribute {key!r} clashes with a field property")


def _root_of(schema: Schema, what: str) -> Node:
    if not isinstance(schema, Schema):
        raise ContractViolation(f"{what} must be a Schema, got {type(schema).__name__}")
    return schema.root


def _link_target(link: Node | Schema | None) -> Node | None:
    return link.root if isinstance(link, Schema) else link


# -------------------------------
# Handle
# -------------------------------


class Schema:
    """Handle on the root node of a schema graph."""

    def __init__(self, node: Node) -> None:
        if not isinstance(node, Node):
            raise ContractViolation(f"Schema wraps a Node, got {type(node).__name__}")
        self._node = node

    @property
    def root(self) -> Node:
        return self._node

    @property
    def type(self) -> SchemaType:
        return self._node.type

    def publish(self) -> Schema:
        """Freeze the graph reachable from the root and return a read-only handle."""
        self._node.freeze()
        return Schema(self._node)

    # handles are values; the graph behind them is always shared
    def __copy__(self) -> Schema:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone

    def __deepcopy__(self, memo: dict) -> Schema:
        return self.__copy__()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node!r})"


# -------------------------------
# Primitives
# -------------------------------


class PrimitiveSchema(Schema):
    """Schema of a flat primitive kind. Subclasses pin the kind; the base accepts it as an argument."""

    _type: ClassVar[SchemaType | None] = None

    def __init__(self, type_: SchemaType | str | None = None) -> None:
        kind = SchemaType(type_) if type_ is not None else self._type
        if kind is None:
            raise ContractViolation("PrimitiveSchema needs a primitive type")
        super().__init__(PrimitiveNode(kind))


class NullSchema(PrimitiveSchema):
    _type = SchemaType.NULL


class BoolSchema(PrimitiveSchema):
    _type = SchemaType.BOOLEAN


class IntSchema(PrimitiveSchema):
    _type = SchemaType.INT


class LongSchema(PrimitiveSchema):
    _type = SchemaType.LONG


class FloatSchema(PrimitiveSchema):
    _type = SchemaType.FLOAT


class DoubleSchema(PrimitiveSchema):
    _type = SchemaType.DOUBLE


class StringSchema(PrimitiveSchema):
    _type = SchemaType.STRING


class BytesSchema(PrimitiveSchema):
    _type = SchemaType.BYTES


# -------------------------------
# Record / Enum
# -------------------------------


class RecordSchema(Schema):
    def __init__(self, name: str | Name, *, config: SchemaConfig | None = None) -> None:
        self._config = config or get_default_config()
        qualified = _resolve_name(name, self._config)
        super().__init__(RecordNode())
        self._node.set_name(qualified)

    def add_field(
        self,
        name: str,
        field_schema: Schema,
        attributes: CustomAttributes | Mapping[str, str] | None = None,
        default: Any = NO_DEFAULT,
    ) -> None:
        """
        Append a field. Without `default` the field has no default; pass
        `default=None` for a null default.
        """
        # everything that can fail on bad input runs before the node is touched
        _check_identifier("field name", name, self._config)
        leaf = _root_of(field_schema, "field schema")
        # the record owns its own copy, so publish() can freeze it
        attrs = CustomAttributes(attributes)
        _check_attribute_keys(name, attrs, self._node)
        value = DefaultValue.coerce(default)

        try:
            self._node.add_name(name)
        except DuplicateNameError:
            _log.debug(
                "duplicate field rejected",
                event="schema.record.field_rejected",
                schema=str(self._node.name),
                field=name,
            )
            raise
        self._node.add_leaf(leaf)
        self._node.add_custom_attributes_for_field(attrs)
        self._node.add_default_for_field(value)

    def get_doc(self) -> str:
        return self._node.doc()

    def set_doc(self, doc: str) -> None:
        self._node.set_doc(doc)


class EnumSchema(Schema):
    def __init__(self, name: str | Name, *, config: SchemaConfig | None = None) -> None:
        self._config = config or get_default_config()
        qualified = _resolve_name(name, self._config)
        super().__init__(EnumNode())
        self._node.set_name(qualified)

    def add_symbol(self, symbol: str) -> None:
        _check_identifier("enum symbol", symbol, self._config)
        try:
            self._node.add_name(symbol)
        except DuplicateNameError:
            _log.debug(
                "duplicate symbol rejected",
                event="schema.enum.symbol_rejected",
                schema=str(self._node.name),
                symbol=symbol,
            )
            raise


# -------------------------------
# Array / Map
# -------------------------------


class ArraySchema(Schema):
    """
    Array of `items`. Given another ArraySchema, the new node wraps that
    array's root (an array of arrays over the same shared node), never a copy.
    """

    def __init__(self, items: Schema) -> None:
        leaf = _root_of(items, "array items")
        super().__init__(ArrayNode())
        self._node.add_leaf(leaf)


class MapSchema(Schema):
    """Map from (implicit) string keys to `values`."""

    def __init__(self, values: Schema) -> None:
        leaf = _root_of(values, "map values")
        super().__init__(MapNode())
        self._node.add_leaf(leaf)


# -------------------------------
# Union
# -------------------------------


class UnionSchema(Schema):
    def __init__(self) -> None:
        super().__init__(UnionNode())

    def add_type(self, branch: Schema) -> None:
        """
        Append a branch. Unions never nest, and two record branches may not
        share a full name. Other branches are appended as given, duplicates
        included; order is the discriminant order.
        """
        leaf = _root_of(branch, "union branch")

        if leaf.type is SchemaType.UNION:
            _log.debug("nested union rejected", event="schema.union.nested_rejected", branches=self._node.leaves())
            raise InvalidUnionError("cannot add unions to unions")

        if leaf.type is SchemaType.RECORD:
            for existing in self._node.iter_leaves():
                if existing.type is SchemaType.RECORD and existing.name == leaf.name:
                    _log.debug(
                        "duplicate record branch rejected",
                        event="schema.union.branch_rejected",
                        schema=str(leaf.name),
                    )
                    raise DuplicateBranchError(f"union already holds record {leaf.name}")

        self._node.add_leaf(leaf)


# -------------------------------
# Fixed / Symbolic
# -------------------------------


class FixedSchema(Schema):
    def __init__(self, size: int, name: str | Name, *, config: SchemaConfig | None = None) -> None:
        self._config = config or get_default_config()
        qualified = _resolve_name(name, self._config)
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidFixedSizeError(f"fixed {qualified}: size must be an int, got {type(size).__name__}")
        self._check_size(size, qualified)
        super().__init__(FixedNode())
        self._node.set_fixed_size(size)
        self._node.set_name(qualified)

    def _check_size(self, size: int, name: Name) -> None:
        cfg = self._config
        if cfg.strict_fixed_size:
            if size < 0:
                raise InvalidFixedSizeError(f"fixed {name}: size must be >= 0, got {size}")
            if cfg.max_fixed_size is not None and size > cfg.max_fixed_size:
                raise InvalidFixedSizeError(f"fixed {name}: size {size} exceeds max_fixed_size={cfg.max_fixed_size}")
        elif size < 0:
            _log.warning("negative fixed size accepted", event="schema.fixed.negative_size", schema=str(name), size=size)


class SymbolicSchema(Schema):
    """
    Reference to the node named `name`, used inside that node's own definition
    to express recursion. `link` is held weakly: keep a handle on the target.
    Without `link` the reference stays unresolved until `set_link` is called.
    """

    def __init__(
        self, name: str | Name, link: Node | Schema | None = None, *, config: SchemaConfig | None = None
    ) -> None:
        qualified = _resolve_name(name, config or get_default_config())
        super().__init__(SymbolicNode(qualified, _link_target(link)))

    def set_link(self, link: Node | Schema) -> None:
        self._node.set_link(_link_target(link))

    def is_set(self) -> bool:
        return self._node.is_set()

    def link(self) -> Node:
        return self._node.link()
