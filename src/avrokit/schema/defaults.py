# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Field default values.

A DefaultValue is a type-erased holder: the schema graph records whether a
field has a default and what it is, but never checks the value against the
field's schema. `None` is a legitimate default (the null value), so absence is
spelled with the NO_DEFAULT sentinel instead.
"""

from dataclasses import dataclass
from typing import Any, Final

__all__ = ["NO_DEFAULT", "DefaultValue"]


class _NoDefault:
    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _NoDefault:
        return self

    def __deepcopy__(self, memo: dict) -> _NoDefault:
        return self


NO_DEFAULT: Final = _NoDefault()


@dataclass(frozen=True)
class DefaultValue:
    """Default of one record field; `value is NO_DEFAULT` means the field has none."""

    value: Any = NO_DEFAULT

    @property
    def is_set(self) -> bool:
        return self.value is not NO_DEFAULT

    @classmethod
    def coerce(cls, value: Any) -> DefaultValue:
        if isinstance(value, DefaultValue):
            return value
        return cls(value)
