"""
tantalum.units
==============

Catalog units as module attributes::

    from tantalum.units import Meter, Second, Kilo, u

    speed = Kilo * Meter / Second
    u("degree Celsius") is u.Celsius

Nothing is resolved until first access, so importing ``tantalum`` does not
build the catalog.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from tantalum.units.catalog import UnitCatalog


def _default_catalog() -> "UnitCatalog":
    # Import here to avoid import-time side-effects / circular imports.
    from tantalum.units.catalog import DEFAULT_CATALOG
    return DEFAULT_CATALOG


def __getattr__(name: str) -> Any:
    catalog = _default_catalog()
    if name == "u":
        return catalog.as_namespace()
    units = catalog.all()
    if name in units:
        return units[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted([*globals(), "u", *_default_catalog().all()])
