# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Qualified type names.

A Name is the identity key of record, enum and fixed types and the link target
of symbolic references. Two names are equal iff their full names are equal.
"""

import re
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from ..api.errors import InvalidNameError

__all__ = ["Name"]

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


class Name(BaseModel):
    """
    Namespace + short name.

    `Name("a.b.Rec")` and `Name("Rec", "a.b")` are the same name: a dotted short
    name carries its own namespace and wins over the `namespace` argument.
    An empty namespace is the null namespace.
    """

    name: str
    namespace: str | None = None
    model_config = {"frozen": True, "extra": "forbid"}

    def __init__(self, name: str, namespace: str | None = None) -> None:
        try:
            super().__init__(name=name, namespace=namespace)
        except ValidationError as e:
            raise InvalidNameError(f"invalid name {name!r}: {e.errors()[0]['msg']}") from e

    @model_validator(mode="before")
    @classmethod
    def _split_fullname(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        name = data.get("name")
        if isinstance(name, str) and "." in name:
            ns, _, short = name.rpartition(".")
            return {**data, "name": short, "namespace": ns or None}
        if not data.get("namespace"):
            return {**data, "namespace": None}
        return data

    @field_validator("name")
    @classmethod
    def _nonempty(cls, v: str) -> str:
        if not v:
            raise ValueError("name must be a non-empty string")
        return v

    # ---- accessors ---------------------------------------------------------

    @property
    def fullname(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def __str__(self) -> str:
        return self.fullname

    # ---- helpers -----------------------------------------------------------

    @classmethod
    def coerce(cls, value: str | Name, namespace: str | None = None) -> Name:
        """Accept a Name as-is or build one from a (possibly dotted) string."""
        if isinstance(value, Name):
            return value
        if not isinstance(value, str):
            raise InvalidNameError(f"name must be a string or Name, got {type(value).__name__}")
        return cls(value, namespace)

    def check(self) -> Name:
        """Raise InvalidNameError unless every component is an identifier."""
        if not _IDENT.match(self.name):
            raise InvalidNameError(f"invalid name {self.fullname!r}: {self.name!r} is not an identifier")
        if self.namespace is not None:
            for part in self.namespace.split("."):
                if not _IDENT.match(part):
                    raise InvalidNameError(f"invalid namespace in {self.fullname!r}: {part!r} is not an identifier")
        return self
