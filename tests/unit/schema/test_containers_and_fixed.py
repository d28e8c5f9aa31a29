from __future__ import annotations

import pytest

from avrokit.api.errors import ContractViolation, InvalidFixedSizeError
from avrokit.core.config import SchemaConfig
from avrokit.schema import (
    ArraySchema,
    FixedSchema,
    IntSchema,
    MapSchema,
    Name,
    RecordSchema,
    SchemaType,
    StringSchema,
)

pytestmark = [pytest.mark.unit, pytest.mark.schema]


def test_array_wraps_exactly_one_item():
    items = IntSchema()
    arr = ArraySchema(items)
    assert arr.type is SchemaType.ARRAY
    assert arr.root.leaves() == 1
    assert arr.root.leaf_at(0) is items.root
    assert arr.root.name is None
    with pytest.raises(ContractViolation):
        arr.root.add_leaf(StringSchema().root)
    assert arr.root.leaves() == 1


def test_map_wraps_exactly_one_value():
    values = StringSchema()
    m = MapSchema(values)
    assert m.type is SchemaType.MAP
    assert m.root.leaves() == 1
    assert m.root.leaf_at(0) is values.root


def test_array_of_array_wraps_the_given_array_node():
    inner = ArraySchema(IntSchema())
    outer = ArraySchema(inner)
    assert outer.root is not inner.root
    assert outer.root.leaf_at(0) is inner.root
    assert outer.root.leaf_at(0).leaf_at(0).type is SchemaType.INT


def test_map_of_map_wraps_the_given_map_node():
    inner = MapSchema(IntSchema())
    outer = MapSchema(inner)
    assert outer.root.leaf_at(0) is inner.root


def test_same_item_schema_is_shared_not_copied():
    item = RecordSchema("Item")
    item.add_field("id", IntSchema())
    a = ArraySchema(item)
    b = ArraySchema(item)

    assert a.root is not b.root
    assert a.root.leaf_at(0) is b.root.leaf_at(0)

    # documented later, through the handle of the shared record
    item.set_doc("shared item")
    assert a.root.leaf_at(0).doc() == "shared item"
    assert b.root.leaf_at(0).doc() == "shared item"


def test_same_schema_as_two_record_fields_is_shared():
    ints = ArraySchema(IntSchema())
    r = RecordSchema("Pair")
    r.add_field("left", ints)
    r.add_field("right", ints)
    assert r.root.leaf_at(0) is r.root.leaf_at(1)


def test_fixed_size_and_name():
    f = FixedSchema(16, "com.example.MD5")
    node = f.root
    assert node.type is SchemaType.FIXED
    assert node.fixed_size() == 16
    assert node.name == Name("MD5", "com.example")
    assert node.leaves() == 0


def test_fixed_size_is_set_once():
    f = FixedSchema(4, "F")
    with pytest.raises(ContractViolation):
        f.root.set_fixed_size(8)
    assert f.root.fixed_size() == 4


def test_zero_size_is_valid(strict_config):
    assert FixedSchema(0, "Empty", config=strict_config).root.fixed_size() == 0


def test_negative_size_is_stored_with_a_warning_by_default(caplog):
    caplog.set_level("WARNING")
    f = FixedSchema(-1, "Odd")
    assert f.root.fixed_size() == -1
    rec = next(r for r in caplog.records if getattr(r, "event", "") == "schema.fixed.negative_size")
    assert rec.levelname == "WARNING"
    assert getattr(rec, "size", None) == -1


def test_negative_size_is_rejected_in_strict_mode(strict_config):
    with pytest.raises(InvalidFixedSizeError):
        FixedSchema(-1, "Odd", config=strict_config)


def test_max_fixed_size_applies_in_strict_mode_only():
    strict = SchemaConfig(strict_fixed_size=True, max_fixed_size=8)
    with pytest.raises(InvalidFixedSizeError):
        FixedSchema(9, "Big", config=strict)
    assert FixedSchema(8, "Ok", config=strict).root.fixed_size() == 8
    lax = SchemaConfig(strict_fixed_size=False, max_fixed_size=8)
    assert FixedSchema(9, "Big", config=lax).root.fixed_size() == 9


@pytest.mark.parametrize("bad", [True, 1.5, "16", None])
def test_fixed_size_must_be_an_int(bad):
    with pytest.raises(InvalidFixedSizeError):
        FixedSchema(bad, "F")  # type: ignore[arg-type]
