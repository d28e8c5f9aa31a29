# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
avrokit public error contracts.

Collaborators (parsers, codecs, resolvers) import errors from here so that
they do not depend on the internal module layout.
"""

from .errors import (
    AvrokitError,
    ContractViolation,
    DuplicateBranchError,
    DuplicateNameError,
    FrozenSchemaError,
    InvalidFixedSizeError,
    InvalidNameError,
    InvalidUnionError,
    SchemaError,
    UnresolvedSymbolError,
)

__all__ = [
    "AvrokitError",
    "ContractViolation",
    "DuplicateBranchError",
    "DuplicateNameError",
    "FrozenSchemaError",
    "InvalidFixedSizeError",
    "InvalidNameError",
    "InvalidUnionError",
    "SchemaError",
    "UnresolvedSymbolError",
]
