"""
Graph walks and whole-graph validation: pre-order over owning edges,
shared nodes visited once, symbolic links checked against the registry.
"""

from __future__ import annotations

import pytest

from avrokit.api.errors import ContractViolation, DuplicateNameError, UnresolvedSymbolError
from avrokit.schema import (
    ArraySchema,
    EnumSchema,
    FixedSchema,
    IntSchema,
    MapSchema,
    RecordSchema,
    SchemaType,
    StringSchema,
    SymbolicSchema,
    UnionSchema,
    named_types,
    validate,
    walk,
)
from tests.helpers import address_schema, person_schema, tree_schema

pytestmark = [pytest.mark.unit, pytest.mark.schema]


def test_walk_is_preorder_over_fields():
    p = person_schema()
    assert [n.type for n in walk(p)] == [SchemaType.RECORD, SchemaType.STRING, SchemaType.INT]


def test_walk_visits_a_shared_node_once():
    addr = address_schema()
    customer = RecordSchema("Customer")
    customer.add_field("billing", addr)
    customer.add_field("shipping", addr)
    nodes = list(walk(customer))
    assert sum(1 for n in nodes if n is addr.root) == 1
    # Customer, Address, street, zip
    assert len(nodes) == 4


def test_walk_accepts_a_bare_node_and_rejects_other_values():
    p = person_schema()
    assert next(walk(p.root)) is p.root
    with pytest.raises(ContractViolation):
        list(walk("Person"))  # type: ignore[arg-type]


def test_named_types_collects_records_enums_and_fixed():
    env = RecordSchema("com.example.Envelope")
    env.add_field("kind", EnumSchema("com.example.Kind"))
    env.add_field("digest", FixedSchema(16, "com.example.MD5"))
    env.add_field("tags", MapSchema(StringSchema()))
    env.add_field("sender", address_schema())

    names = named_types(env)
    assert sorted(names) == [
        "com.example.Address",
        "com.example.Envelope",
        "com.example.Kind",
        "com.example.MD5",
    ]
    assert names["com.example.Envelope"] is env.root


def test_validate_returns_the_registry(caplog):
    tree = tree_schema()
    caplog.set_level("DEBUG")
    registry = validate(tree)
    assert registry == {"Tree": tree.root}
    rec = next(r for r in caplog.records if getattr(r, "event", "") == "schema.validate.ok")
    assert rec.named == 1
    assert rec.symbols == 1


def test_validate_accepts_a_reused_named_node():
    addr = address_schema()
    customer = RecordSchema("Customer")
    customer.add_field("billing", addr)
    customer.add_field("shipping", ArraySchema(addr))
    assert set(validate(customer)) == {"Customer", "com.example.Address"}


def test_validate_rejects_two_definitions_of_one_name():
    outer = RecordSchema("Outer")
    outer.add_field("a", address_schema())
    outer.add_field("b", address_schema())
    with pytest.raises(DuplicateNameError):
        validate(outer)


def test_named_kinds_share_one_namespace():
    outer = RecordSchema("Outer")
    outer.add_field("a", EnumSchema("Thing"))
    outer.add_field("b", FixedSchema(4, "Thing"))
    with pytest.raises(DuplicateNameError):
        validate(outer)


def test_validate_rejects_unlinked_symbol():
    rec = RecordSchema("Node")
    rec.add_field("next", SymbolicSchema("Node"))
    with pytest.raises(UnresolvedSymbolError):
        validate(rec)


def test_validate_rejects_symbol_whose_name_differs_from_its_target():
    rec = RecordSchema("Node")
    rec.add_field("next", SymbolicSchema("Other", rec))
    with pytest.raises(UnresolvedSymbolError):
        validate(rec)


def test_validate_rejects_symbol_pointing_outside_the_graph():
    elsewhere = RecordSchema("Node")
    rec = RecordSchema("Holder")
    u = UnionSchema()
    u.add_type(IntSchema())
    u.add_type(SymbolicSchema("Node", elsewhere))
    rec.add_field("maybe", u)
    with pytest.raises(UnresolvedSymbolError):
        validate(rec)


def test_validate_on_primitive_root():
    assert validate(IntSchema()) == {}
