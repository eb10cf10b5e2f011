"""
tantalum.units.catalog
======================

The fixed table of atomic units and the registry that serves it.

Each row of :data:`CATALOG_TABLE` is
``(tag, name, symbol, offset, slope, si_numerator, si_denominator, modifier)``.
``offset`` and ``slope`` are ``(numerator, denominator)`` integer pairs and
satisfy ``value_in_si = (value + offset) * slope``. The SI expression names
other catalog tags and uses only SI base units plus ``Kilo`` (mass is carried
as ``Kilo * Gram``).

Symbols are *not* unique ("m" is both metre and milli, "T" both tesla and
tera), so the catalog is keyed by tag with display names as aliases.
"""

from __future__ import annotations

import threading
import unicodedata
from functools import lru_cache
from typing import ClassVar, Dict, Iterable, Mapping, Tuple

from tantalum.core.rational import RationalNumber
from tantalum.core.unit import AtomicUnit, Compound, Unit

Ratio = Tuple[int, int]
Row = Tuple[str, str, str, Ratio, Ratio, Tuple[str, ...], Tuple[str, ...], bool]

_0: Ratio = (0, 1)
_1: Ratio = (1, 1)

# SI expressions reused below
_KG = ("Kilo", "Gram")
_M3 = ("Meter", "Meter", "Meter")


def _pow10(n: int) -> Ratio:
    return (10 ** n, 1) if n >= 0 else (1, 10 ** -n)


CATALOG_TABLE: Tuple[Row, ...] = (
    # Force
    ("Newton", "newton", "N", _0, _1, _KG + ("Meter",), ("Second", "Second"), False),
    # Energy
    ("Joule", "joule", "J", _0, _1, _KG + ("Meter", "Meter"), ("Second", "Second"), False),
    # Electric resistance
    ("Ohm", "ohm", "Ω", _0, _1, _KG + ("Meter", "Meter"),
     ("Second", "Second", "Second", "Ampere", "Ampere"), False),
    # Frequency
    ("Hertz", "hertz", "Hz", _0, _1, (), ("Second",), False),
    # Voltage
    ("Volt", "volt", "V", _0, _1, _KG + ("Meter", "Meter"),
     ("Second", "Second", "Second", "Ampere"), False),
    # Temperature
    ("Kelvin", "kelvin", "K", _0, _1, ("Kelvin",), (), False),
    ("Celsius", "degree Celsius", "°C", (5463, 20), _1, ("Kelvin",), (), False),
    ("Fahrenheit", "degree Fahrenheit", "°F", (45967, 100), (5, 9), ("Kelvin",), (), False),
    # Area
    ("Hectare", "hectare", "ha", _0, (10000, 1), ("Meter", "Meter"), (), False),
    # Magnetic field strength
    ("Tesla", "tesla", "T", _0, _1, _KG, ("Second", "Second", "Ampere"), False),
    # Information
    ("Bit", "bit", "b", _0, _1, ("Bit",), (), False),
    ("Byte", "byte", "B", _0, (8, 1), ("Bit",), (), False),
    # Electric conductance
    ("Siemens", "siemens", "S", _0, _1, ("Second", "Second", "Second", "Ampere", "Ampere"),
     _KG + ("Meter", "Meter"), False),
    # Power
    ("Watt", "watt", "W", _0, _1, _KG + ("Meter", "Meter"), ("Second", "Second", "Second"), False),
    # Volume
    ("Liter", "liter", "L", _0, (1, 1000), _M3, (), False),
    ("CubicInch", "cubic inch", "in^3", _0, (2048383, 125000000000), _M3, (), False),
    ("CubicFeet", "cubic foot", "ft^3", _0, (55306341, 1953125000), _M3, (), False),
    ("CubicYard", "cubic yard", "yd^3", _0, (1493271207, 1953125000), _M3, (), False),
    ("Pint", "pint", "pt", _0, (473176473, 1000000000000), _M3, (), False),
    ("Quart", "quart", "qt", _0, (473176473, 500000000000), _M3, (), False),
    ("Gallon", "gallon", "gal", _0, (473176473, 125000000000), _M3, (), False),
    # Pressure
    ("Pascal", "pascal", "Pa", _0, _1, _KG, ("Meter", "Second", "Second"), False),
    # Inductance
    ("Henry", "henry", "H", _0, _1, _KG + ("Meter", "Meter"),
     ("Second", "Second", "Ampere", "Ampere"), False),
    # SI decimal prefixes
    ("Quecto", "quecto", "q", _0, _pow10(-30), (), (), True),
    ("Ronto", "ronto", "r", _0, _pow10(-27), (), (), True),
    ("Yocto", "yocto", "y", _0, _pow10(-24), (), (), True),
    ("Zepto", "zepto", "z", _0, _pow10(-21), (), (), True),
    ("Atto", "atto", "a", _0, _pow10(-18), (), (), True),
    ("Femto", "femto", "f", _0, _pow10(-15), (), (), True),
    ("Pico", "pico", "p", _0, _pow10(-12), (), (), True),
    ("Nano", "nano", "n", _0, _pow10(-9), (), (), True),
    ("Micro", "micro", "µ", _0, _pow10(-6), (), (), True),
    ("Milli", "milli", "m", _0, _pow10(-3), (), (), True),
    ("Centi", "centi", "c", _0, _pow10(-2), (), (), True),
    ("Deci", "deci", "d", _0, _pow10(-1), (), (), True),
    ("Hecto", "hecto", "h", _0, _pow10(2), (), (), True),
    ("Kilo", "kilo", "k", _0, _pow10(3), (), (), True),
    ("Mega", "mega", "M", _0, _pow10(6), (), (), True),
    ("Giga", "giga", "G", _0, _pow10(9), (), (), True),
    ("Tera", "tera", "T", _0, _pow10(12), (), (), True),
    ("Peta", "peta", "P", _0, _pow10(15), (), (), True),
    ("Exa", "exa", "E", _0, _pow10(18), (), (), True),
    ("Zetta", "zetta", "Z", _0, _pow10(21), (), (), True),
    ("Yotta", "yotta", "Y", _0, _pow10(24), (), (), True),
    ("Ronna", "ronna", "R", _0, _pow10(27), (), (), True),
    ("Quetta", "quetta", "Q", _0, _pow10(30), (), (), True),
    # Amount of substance
    ("Mole", "mole", "mol", _0, _1, ("Mole",), (), False),
    # Luminous intensity
    ("Candela", "candela", "cd", _0, _1, ("Candela",), (), False),
    # Electric current
    ("Ampere", "ampere", "A", _0, _1, ("Ampere",), (), False),
    # Magnetic flux
    ("Weber", "weber", "Wb", _0, _1, _KG + ("Meter", "Meter"), ("Second", "Second", "Ampere"), False),
    # IEC binary prefixes
    ("Kibi", "kibi", "Ki", _0, (2 ** 10, 1), (), (), True),
    ("Mebi", "mebi", "Mi", _0, (2 ** 20, 1), (), (), True),
    ("Gibi", "gibi", "Gi", _0, (2 ** 30, 1), (), (), True),
    ("Tebi", "tebi", "Ti", _0, (2 ** 40, 1), (), (), True),
    ("Pebi", "pebi", "Pi", _0, (2 ** 50, 1), (), (), True),
    ("Exbi", "exbi", "Ei", _0, (2 ** 60, 1), (), (), True),
    # Length
    ("Meter", "meter", "m", _0, _1, ("Meter",), (), False),
    ("AU", "astronomical unit", "au", _0, (149597870700, 1), ("Meter",), (), False),
    ("Inch", "inch", "in", _0, (127, 5000), ("Meter",), (), False),
    ("Feet", "foot", "ft", _0, (381, 1250), ("Meter",), (), False),
    ("Yard", "yard", "yd", _0, (1143, 1250), ("Meter",), (), False),
    ("Mile", "mile", "mi", _0, (201168, 125), ("Meter",), (), False),
    ("NauticalMile", "nautical mile", "nmi", _0, (1852, 1), ("Meter",), (), False),
    ("LightYear", "light-year", "ly", _0, (9460730472580800, 1), ("Meter",), (), False),
    ("Parsec", "parsec", "pc", _0, (30857000000000000, 1), ("Meter",), (), False),
    # Electric charge
    ("Coulomb", "coulomb", "C", _0, _1, ("Second", "Ampere"), (), False),
    # Mass
    ("Gram", "gram", "g", _0, _1, ("Gram",), (), False),
    ("Tonne", "tonne", "t", _0, (1000000, 1), ("Gram",), (), False),
    ("Dram", "dram", "dr", _0, (45359237, 25600000), ("Gram",), (), False),
    ("Ounce", "ounce", "oz", _0, (45359237, 1600000), ("Gram",), (), False),
    ("Pound", "pound", "lb", _0, (45359237, 100000), ("Gram",), (), False),
    # Electric capacitance
    ("Farad", "farad", "F", _0, _1, ("Second", "Second", "Second", "Second", "Ampere", "Ampere"),
     _KG + ("Meter", "Meter"), False),
    # Time
    ("Second", "second", "s", _0, _1, ("Second",), (), False),
    ("Minute", "minute", "min", _0, (60, 1), ("Second",), (), False),
    ("Hour", "hour", "h", _0, (3600, 1), ("Second",), (), False),
    ("Day", "day", "d", _0, (86400, 1), ("Second",), (), False),
    ("Month", "month", "mo", _0, (2629746, 1), ("Second",), (), False),
    ("Year", "year", "yr", _0, (31557600, 1), ("Second",), (), False),
)

# SI expressions are always resolved against the default table
_SI_TAGS = frozenset(row[0] for row in CATALOG_TABLE)


def unit_from_row(row: Row) -> AtomicUnit:
    tag, name, symbol, offset, slope, si_num, si_den, modifier = row
    return AtomicUnit(
        tag,
        name,
        symbol,
        offset=RationalNumber(*offset),
        slope=RationalNumber(*slope),
        si_numerator=si_num,
        si_denominator=si_den,
        modifier=modifier,
    )


def _normalize_key(s: str) -> str:
    return unicodedata.normalize("NFC", s.strip()).casefold()


# ---------------------------------------------------------------------------
# Catalog registry
# ---------------------------------------------------------------------------
class UnitCatalog:
    """Thread-safe registry of :class:`AtomicUnit` entries keyed by tag.

    Display names are registered as case-insensitive aliases. Compound
    expressions are never parsed; build them with ``*`` and ``/``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, AtomicUnit] = {}
        self._aliases: Dict[str, str] = {}

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    # -------------------------- public API ---------------------------------
    def register(self, unit: AtomicUnit, replace: bool = False) -> None:
        """Register ``unit`` under its tag and its display name."""
        with self._lock:
            if unit.tag in getattr(UnitNamespace, "_reserved_names", ()):
                raise ValueError(
                    f"Cannot register unit '{unit.tag}': "
                    "tag conflicts with UnitNamespace attribute/method."
                )
            unknown = [t for t in unit.si_numerator + unit.si_denominator if t not in _SI_TAGS]
            if unknown:
                raise ValueError(
                    f"Cannot register unit '{unit.tag}': "
                    f"SI expression names units outside the default table: {', '.join(unknown)}"
                )
            if not replace and unit.tag in self._units:
                raise ValueError(
                    f"Cannot register unit '{unit.tag}': a unit with this tag already exists."
                )
            alias = _normalize_key(unit.display_name)
            owner = self._aliases.get(alias)
            if not replace and owner is not None and owner != unit.tag:
                raise ValueError(
                    f"Cannot register unit '{unit.tag}': "
                    f"name '{unit.display_name}' already belongs to '{owner}'."
                )
            self._units[unit.tag] = unit
            self._aliases[alias] = unit.tag

    def register_alias(self, alias: str, tag: str, replace: bool = False) -> None:
        key = _normalize_key(alias)
        with self._lock:
            if tag not in self._units:
                raise ValueError(f"Cannot alias '{alias}': unknown unit tag '{tag}'")
            if not replace and key in self._aliases and self._aliases[key] != tag:
                raise ValueError(
                    f"Cannot register alias '{alias}': it already maps to '{self._aliases[key]}'."
                )
            self._aliases[key] = tag

    def get(self, key: str) -> AtomicUnit:
        """Lookup by tag (exact) or display name / alias (case-insensitive).

        Raises `ValueError` if unknown.
        """
        with self._lock:
            unit = self._units.get(key)
            if unit is not None:
                return unit
            tag = self._aliases.get(_normalize_key(key))
            if tag is not None:
                return self._units[tag]
        raise ValueError(f"Unknown unit: {key}")

    def has(self, key: str) -> bool:
        try:
            self.get(key)
            return True
        except ValueError:
            return False

    def all(self) -> Mapping[str, AtomicUnit]:
        with self._lock:
            return dict(self._units)

    def modifiers(self) -> Tuple[AtomicUnit, ...]:
        with self._lock:
            return tuple(u for u in self._units.values() if u.is_modifier())

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)


class UnitNamespace:
    """Attribute-style access to a catalog: ``u.Meter``, ``u("meter")``."""

    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, catalog: UnitCatalog) -> None:
        self._catalog = catalog

    def __contains__(self, key: str) -> bool:
        return self._catalog.has(key)

    def __call__(self, key: str) -> AtomicUnit:
        return self._catalog.get(key)

    def __getattr__(self, name: str) -> AtomicUnit:
        try:
            return self._catalog.get(name)
        except ValueError as e:
            # Unknown tag should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._catalog.all().keys()))


UnitNamespace._reserved_names = set(dir(UnitNamespace))


def build_catalog(rows: Iterable[Row] = CATALOG_TABLE) -> UnitCatalog:
    catalog = UnitCatalog()
    for row in rows:
        catalog.register(unit_from_row(row))
    return catalog


# Public, shared default catalog
DEFAULT_CATALOG: UnitCatalog = build_catalog()


@lru_cache(maxsize=None)
def si_definition(unit: AtomicUnit) -> Tuple[RationalNumber, RationalNumber, Unit]:
    """
    ``(offset, slope, si_unit)`` for an atomic unit.

    The SI expression's tags are resolved against :data:`DEFAULT_CATALOG`,
    whichever catalog ``unit`` was registered in. :meth:`UnitCatalog.register`
    only accepts units whose SI tags name default-table units.
    """
    numerator = tuple(DEFAULT_CATALOG.get(tag) for tag in unit.si_numerator)
    denominator = tuple(DEFAULT_CATALOG.get(tag) for tag in unit.si_denominator)
    return unit.offset, unit.slope, Compound(numerator, denominator).simplify()


__all__ = [
    "CATALOG_TABLE",
    "DEFAULT_CATALOG",
    "UnitCatalog",
    "UnitNamespace",
    "build_catalog",
    "si_definition",
    "unit_from_row",
]
