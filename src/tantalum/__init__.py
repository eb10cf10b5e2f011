"""
Tantalum: exact, dimension-aware arithmetic for Python.

Tantalum pairs arbitrary-precision rational magnitudes with units of measurement
and converts between compatible units without ever rounding. This module exposes
a minimal, stable public API. The unit catalog is imported lazily to avoid
import-time side effects and circular imports.
"""

import logging
from importlib import metadata as _metadata
from typing import Any


__author__ = "Tantalum Developers"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("tantalum")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Library logging: callers decide where records go.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from tantalum.core.errors import (  # noqa: E402
    ConversionError,
    IncompatibleUnitsError,
    InexactDivisionError,
    TantalumError,
)
from tantalum.core.quantity import Quantity  # noqa: E402
from tantalum.core.rational import RationalNumber  # noqa: E402
from tantalum.core.scalable_integer import ScalableInteger, Tier  # noqa: E402
from tantalum.core.unit import UNITLESS, AtomicUnit, Compound, Unit  # noqa: E402


def __getattr__(name: str) -> Any:
    """Lazy access to the default unit namespace as ``tantalum.u``."""
    if name == "u":
        from tantalum.units import u
        return u
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "AtomicUnit",
    "Compound",
    "ConversionError",
    "IncompatibleUnitsError",
    "InexactDivisionError",
    "Quantity",
    "RationalNumber",
    "ScalableInteger",
    "TantalumError",
    "Tier",
    "UNITLESS",
    "Unit",
]
