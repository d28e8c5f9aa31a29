# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Iterator, Mapping

from ..api.errors import DuplicateNameError, FrozenSchemaError

__all__ = ["RESERVED_FIELD_KEYS", "CustomAttributes"]

# keys the field object itself carries when a record is rendered
RESERVED_FIELD_KEYS: frozenset[str] = frozenset({"name", "type", "default"})


class CustomAttributes(Mapping[str, str]):
    """
    Ordered string -> string attributes attached to a record field.

    The schema graph never interprets them; they are stored and handed back to
    collaborators (printers, code generators) unchanged.
    The owning record freezes them when its graph is published.
    """

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self._attrs: dict[str, str] = {}
        self._frozen = False
        for key, value in (items or {}).items():
            self.add_attribute(key, value)

    def add_attribute(self, key: str, value: str) -> None:
        if self._frozen:
            raise FrozenSchemaError(f"attributes are frozen; cannot add {key!r}")
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("custom attribute keys and values must be strings")
        if key in self._attrs:
            raise DuplicateNameError(f"attribute {key!r} already exists and cannot be added")
        self._attrs[key] = value

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def get_attribute(self, key: str) -> str | None:
        return self._attrs.get(key)

    def __getitem__(self, key: str) -> str:
        return self._attrs[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __repr__(self) -> str:
        return f"CustomAttributes({self._attrs!r})"
