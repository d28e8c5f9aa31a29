# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Error taxonomy for the avrokit schema object model.

Two families:
- SchemaError and its subclasses describe a malformed schema definition. They
  are raised synchronously by the builder that detected the problem, leave the
  graph unchanged, and are meant to be caught by callers such as a textual
  parser (which re-raises them with source locations).
- ContractViolation marks a bug in calling code (wrong node kind, one-shot
  setter reused, mutation after publish). It derives from AssertionError on
  purpose and is not part of the SchemaError family.
"""

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


class AvrokitError(Exception):
    """Base class for all avrokit public errors."""

    ...


class SchemaError(AvrokitError, ValueError):
    """
    The schema definition is malformed. Retrying the same call is pointless;
    the caller may retry with corrected input.
    """

    ...


class DuplicateNameError(SchemaError):
    """A record field name, enum symbol or attribute key repeats an existing one."""

    ...


class InvalidUnionError(SchemaError):
    """A union was offered as a branch of another union."""

    ...


class DuplicateBranchError(SchemaError):
    """A union already holds a record branch with the same full name."""

    ...


class InvalidNameError(SchemaError):
    """A type name or namespace is not a valid identifier."""

    ...


class InvalidFixedSizeError(SchemaError):
    """A fixed size is out of range (only raised with strict_fixed_size)."""

    ...


class UnresolvedSymbolError(SchemaError):
    """A symbolic reference has no live target, or points at a differently named node."""

    ...


class ContractViolation(AssertionError):
    """
    Programming error: an operation was invoked on a node that cannot support it.
    Not a data error; do not catch it to recover.
    """

    ...


class FrozenSchemaError(ContractViolation):
    """Mutation attempted on a node that belongs to a published schema."""

    ...
