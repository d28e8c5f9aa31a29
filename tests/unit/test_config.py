from __future__ import annotations

import json

import pytest

from avrokit.api.errors import InvalidFixedSizeError, InvalidNameError
from avrokit.core.config import SchemaConfig, get_default_config, set_default_config
from avrokit.schema import FixedSchema, RecordSchema, StringSchema

pytestmark = [pytest.mark.unit, pytest.mark.config]


def test_defaults():
    cfg = SchemaConfig()
    assert cfg.strict_names is True
    assert cfg.strict_fixed_size is False
    assert cfg.max_fixed_size is None


def test_negative_max_fixed_size_is_refused():
    with pytest.raises(ValueError):
        SchemaConfig(max_fixed_size=-1)


def test_load_without_file_uses_defaults(tmp_path):
    assert SchemaConfig.load(tmp_path / "missing.json") == SchemaConfig()
    assert SchemaConfig.load() == SchemaConfig()


def test_load_from_json_file(tmp_path):
    path = tmp_path / "avrokit.json"
    path.write_text(json.dumps({"strict_fixed_size": True, "max_fixed_size": 64}), encoding="utf-8")
    cfg = SchemaConfig.load(path)
    assert cfg.strict_fixed_size is True
    assert cfg.max_fixed_size == 64
    assert cfg.strict_names is True


def test_json_file_must_be_an_object(tmp_path):
    path = tmp_path / "avrokit.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        SchemaConfig.load(path)


def test_env_beats_file_and_overrides_beat_env(tmp_path, monkeypatch):
    path = tmp_path / "avrokit.json"
    path.write_text(json.dumps({"strict_names": True, "max_fixed_size": 8}), encoding="utf-8")
    monkeypatch.setenv("AVROKIT_STRICT_NAMES", "off")
    monkeypatch.setenv("AVROKIT_MAX_FIXED_SIZE", "16")

    cfg = SchemaConfig.load(path)
    assert cfg.strict_names is False
    assert cfg.max_fixed_size == 16

    cfg = SchemaConfig.load(path, overrides={"max_fixed_size": 32})
    assert cfg.max_fixed_size == 32


def test_bad_boolean_env_is_an_error(monkeypatch):
    monkeypatch.setenv("AVROKIT_STRICT_FIXED_SIZE", "maybe")
    with pytest.raises(ValueError):
        SchemaConfig.load()


def test_default_config_is_cached_until_reset(monkeypatch):
    first = get_default_config()
    assert get_default_config() is first

    monkeypatch.setenv("AVROKIT_STRICT_NAMES", "0")
    assert get_default_config().strict_names is True
    set_default_config(None)
    assert get_default_config().strict_names is False


def test_builders_follow_the_default_config():
    with pytest.raises(InvalidNameError):
        RecordSchema("not valid")

    set_default_config(SchemaConfig(strict_names=False))
    rec = RecordSchema("not valid")
    rec.add_field("also not valid", StringSchema())
    assert rec.root.name_at(0) == "also not valid"


def test_explicit_config_beats_the_default(strict_config, lax_config):
    set_default_config(strict_config)
    assert RecordSchema("not valid", config=lax_config).root.name.fullname == "not valid"
    with pytest.raises(InvalidFixedSizeError):
        FixedSchema(-1, "F")
    assert FixedSchema(-1, "F", config=lax_config).root.fixed_size() == -1
