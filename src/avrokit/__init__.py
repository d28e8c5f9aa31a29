from __future__ import annotations

# Runtime package version, provided by setuptools_scm during build.
try:
    # created at build time by setuptools_scm (see [tool.setuptools_scm].version_file)
    from ._version import __version__
except ImportError:  # pragma: no cover
    # fallback for editable installs / missing file
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _pkg_version

    try:
        __version__ = _pkg_version("avrokit")
    except PackageNotFoundError:
        __version__ = "0.0.0"

from .api.errors import (
    AvrokitError,
    ContractViolation,
    DuplicateBranchError,
    DuplicateNameError,
    InvalidUnionError,
    SchemaError,
)
from .core.config import SchemaConfig
from .schema import (
    ArraySchema,
    EnumSchema,
    FixedSchema,
    MapSchema,
    Name,
    RecordSchema,
    Schema,
    SchemaType,
    SymbolicSchema,
    UnionSchema,
)

__all__ = [
    "ArraySchema",
    "AvrokitError",
    "ContractViolation",
    "DuplicateBranchError",
    "DuplicateNameError",
    "EnumSchema",
    "FixedSchema",
    "InvalidUnionError",
    "MapSchema",
    "Name",
    "RecordSchema",
    "Schema",
    "SchemaConfig",
    "SchemaType",
    "SymbolicSchema",
    "UnionSchema",
    "__version__",
]
