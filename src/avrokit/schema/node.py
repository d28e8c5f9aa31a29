# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Schema graph nodes.

One Node subclass per schema kind. Node is the only place that mutates schema
structure; builders (see builders.py) call these mutators in a fixed order and
add the cross-node rules (no nested unions, no duplicate record branches).

Ownership:
- leaves are ordinary (owning) references; a node may be a leaf of many parents;
- a SymbolicNode points at its target through a weakref, so the edge closing a
  recursive definition never keeps the cycle alive.

Calling a mutator that the node kind does not support raises ContractViolation.
Once frozen (see `freeze`), every mutator raises FrozenSchemaError.
"""

import weakref
from collections.abc import Iterator
from typing import ClassVar, NoReturn

from ..api.errors import ContractViolation, DuplicateNameError, FrozenSchemaError, UnresolvedSymbolError
from .attributes import CustomAttributes
from .defaults import DefaultValue
from .name import Name
from .types import SchemaType

__all__ = [
    "ArrayNode",
    "EnumNode",
    "FixedNode",
    "MapNode",
    "Node",
    "PrimitiveNode",
    "RecordNode",
    "SymbolicNode",
    "UnionNode",
]


class Node:
    """
    Base node. Subclasses declare their capabilities through the class
    attributes below; the generic accessors and mutators honour them.
    """

    # does the kind carry a Name
    _named: ClassVar[bool] = False
    # max number of leaves: 0 = none, 1 = exactly one child, None = unbounded
    _max_leaves: ClassVar[int | None] = 0
    # does the kind keep a list of unique names (field names / symbols)
    _has_names: ClassVar[bool] = False

    def __init__(self, type_: SchemaType) -> None:
        self.type = type_
        self._name: Name | None = None
        self._leaves: list[Node] = []
        self._names: list[str] = []
        self._name_index: dict[str, int] = {}
        self._frozen = False

    # ---- read-only surface -------------------------------------------------

    @property
    def name(self) -> Name | None:
        return self._name

    def has_name(self) -> bool:
        return self._name is not None

    def is_named(self) -> bool:
        """True for the kinds that define a type name: record, enum and fixed."""
        return self.type.is_named

    def leaves(self) -> int:
        return len(self._leaves)

    def leaf_at(self, index: int) -> Node:
        if not 0 <= index < len(self._leaves):
            raise IndexError(f"{self.type.value}: leaf index {index} out of range")
        return self._leaves[index]

    def iter_leaves(self) -> Iterator[Node]:
        return iter(tuple(self._leaves))

    def names(self) -> int:
        return len(self._names)

    def name_at(self, index: int) -> str:
        if not 0 <= index < len(self._names):
            raise IndexError(f"{self.type.value}: name index {index} out of range")
        return self._names[index]

    def name_index(self, name: str) -> int | None:
        """Position of a field name / enum symbol, or None."""
        return self._name_index.get(name)

    def doc(self) -> str:
        return ""

    def symbols(self) -> tuple[str, ...]:
        self._unsupported("symbols")

    def fixed_size(self) -> int:
        self._unsupported("fixed_size")

    def custom_attributes_at(self, index: int) -> CustomAttributes:
        self._unsupported("custom_attributes_at")

    def default_at(self, index: int) -> DefaultValue:
        self._unsupported("default_at")

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ---- construction surface ----------------------------------------------

    def set_name(self, name: Name) -> None:
        self._check_mutable()
        if not self._named:
            self._unsupported("set_name")
        if self._name is not None:
            raise ContractViolation(f"{self.type.value} {self._name} is already named")
        self._name = name

    def add_name(self, candidate: str) -> None:
        """
        Register a field name or enum symbol. Must succeed before the matching
        leaf/default is appended, so a duplicate leaves the node untouched.
        """
        self._check_mutable()
        if not self._has_names:
            self._unsupported("add_name")
        if candidate in self._name_index:
            raise DuplicateNameError(f"{self.type.value} {self._name}: duplicate name {candidate!r}")
        self._name_index[candidate] = len(self._names)
        self._names.append(candidate)

    def add_leaf(self, child: Node) -> None:
        self._check_mutable()
        if self._max_leaves == 0:
            self._unsupported("add_leaf")
        if self._max_leaves is not None and len(self._leaves) >= self._max_leaves:
            raise ContractViolation(f"{self.type.value} node already holds {self._max_leaves} leaf")
        if not isinstance(child, Node):
            raise ContractViolation(f"leaf must be a Node, got {type(child).__name__}")
        self._leaves.append(child)

    def add_custom_attributes_for_field(self, attrs: CustomAttributes) -> None:
        self._unsupported("add_custom_attributes_for_field")

    def add_default_for_field(self, value: DefaultValue) -> None:
        self._unsupported("add_default_for_field")

    def set_fixed_size(self, size: int) -> None:
        self._unsupported("set_fixed_size")

    def set_doc(self, doc: str) -> None:
        self._unsupported("set_doc")

    def freeze(self) -> None:
        """Make this node and everything it owns immutable. Symbolic targets are not followed."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if node._frozen:
                continue
            node._frozen = True
            node._freeze_metadata()
            stack.extend(node._leaves)

    # ---- internals ---------------------------------------------------------

    def _freeze_metadata(self) -> None:
        pass

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenSchemaError(f"{self.type.value} node is frozen and cannot be modified")

    def _unsupported(self, op: str) -> NoReturn:
        raise ContractViolation(f"{op}() is not supported by {self.type.value} nodes")

    def __repr__(self) -> str:
        label = f" {self._name}" if self._name is not None else ""
        return f"<{type(self).__name__} {self.type.value}{label} leaves={len(self._leaves)}>"


class PrimitiveNode(Node):
    """null/boolean/int/long/float/double/string/bytes: no name, no children."""

    def __init__(self, type_: SchemaType) -> None:
        if not type_.is_primitive:
            raise ContractViolation(f"{type_.value} is not a primitive type")
        super().__init__(type_)


class RecordNode(Node):
    """
    Named record. Field names, leaves, attributes and defaults are parallel
    sequences; RecordSchema.add_field appends to all four in that order.
    """

    _named = True
    _max_leaves = None
    _has_names = True

    def __init__(self) -> None:
        super().__init__(SchemaType.RECORD)
        self._field_attributes: list[CustomAttributes] = []
        self._field_defaults: list[DefaultValue] = []
        self._doc = ""

    def doc(self) -> str:
        return self._doc

    def set_doc(self, doc: str) -> None:
        self._check_mutable()
        self._doc = doc or ""

    @property
    def field_attributes(self) -> tuple[CustomAttributes, ...]:
        return tuple(self._field_attributes)

    @property
    def field_defaults(self) -> tuple[DefaultValue, ...]:
        return tuple(self._field_defaults)

    def custom_attributes_at(self, index: int) -> CustomAttributes:
        return self._field_attributes[index]

    def default_at(self, index: int) -> DefaultValue:
        return self._field_defaults[index]

    def add_custom_attributes_for_field(self, attrs: CustomAttributes) -> None:
        self._check_mutable()
        self._field_attributes.append(attrs)

    def add_default_for_field(self, value: DefaultValue) -> None:
        self._check_mutable()
        self._field_defaults.append(value)

    def _freeze_metadata(self) -> None:
        for attrs in self._field_attributes:
            attrs.freeze()


class EnumNode(Node):
    _named = True
    _has_names = True

    def __init__(self) -> None:
        super().__init__(SchemaType.ENUM)

    def symbols(self) -> tuple[str, ...]:
        return tuple(self._names)


class ArrayNode(Node):
    _max_leaves = 1

    def __init__(self) -> None:
        super().__init__(SchemaType.ARRAY)


class MapNode(Node):
    """Map keys are always strings and have no node of their own."""

    _max_leaves = 1

    def __init__(self) -> None:
        super().__init__(SchemaType.MAP)


class UnionNode(Node):
    """Branch order is the discriminant order; it is never changed here."""

    _max_leaves = None

    def __init__(self) -> None:
        super().__init__(SchemaType.UNION)


class FixedNode(Node):
    _named = True

    def __init__(self) -> None:
        super().__init__(SchemaType.FIXED)
        self._size: int | None = None

    def fixed_size(self) -> int:
        if self._size is None:
            raise ContractViolation("fixed size has not been set")
        return self._size

    def set_fixed_size(self, size: int) -> None:
        self._check_mutable()
        if self._size is not None:
            raise ContractViolation(f"fixed {self._name} already has size {self._size}")
        if isinstance(size, bool) or not isinstance(size, int):
            raise ContractViolation(f"fixed size must be an int, got {type(size).__name__}")
        self._size = size


class SymbolicNode(Node):
    """
    Named reference to a node defined elsewhere in the graph, used to close a
    recursive definition. The target is held weakly.
    """

    _named = True

    def __init__(self, name: Name, link: Node | None = None) -> None:
        super().__init__(SchemaType.SYMBOLIC)
        self._name = name
        self._link: weakref.ref[Node] | None = None
        if link is not None:
            self.set_link(link)

    def is_set(self) -> bool:
        return self._link is not None and self._link() is not None

    def link(self) -> Node:
        """Return the target node; UnresolvedSymbolError when unset or collected."""
        target = self._link() if self._link is not None else None
        if target is None:
            raise UnresolvedSymbolError(f"could not follow symbol {self._name}")
        return target

    def set_link(self, node: Node) -> None:
        """One-shot late binding, for collaborators that meet the reference before the definition."""
        self._check_mutable()
        if self._link is not None:
            raise ContractViolation(f"symbol {self._name} is already linked")
        if not isinstance(node, Node) or isinstance(node, SymbolicNode):
            raise ContractViolation(f"symbol {self._name} must link to a concrete node")
        self._link = weakref.ref(node)
