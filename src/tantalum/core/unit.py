"""
tantalum.core.unit
==================

Unit algebra: atomic catalog units, compound units built from them, and the
operations that combine, cancel, render and reduce them to SI.

A :class:`Compound` is an ordered numerator tuple over an ordered denominator
tuple. Members may themselves be compounds until :meth:`Unit.flatten` inlines
them. Order matters: ``==`` compares the tuples as written, and cancellation in
:meth:`Unit.simplify` removes the *first* matching atom from the denominator.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

from tantalum.core.rational import ONE, ZERO, RationalNumber

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from tantalum.core.quantity import Quantity

UnitFraction = Tuple[Tuple["Unit", ...], Tuple["Unit", ...]]
SiTriple = Tuple[RationalNumber, RationalNumber, "Unit"]


class Unit:
    """Common behaviour of :class:`AtomicUnit` and :class:`Compound`."""

    __slots__ = ()

    # ------------------------------------------------------------- structure
    def to_fraction(self) -> UnitFraction:
        """Return ``(numerator, denominator)``; an atom is ``((atom,), ())``."""
        raise NotImplementedError

    def flatten(self) -> Unit:
        return self

    def simplify(self) -> Unit:
        return self

    def is_modifier(self) -> bool:
        return False

    def is_unitless(self) -> bool:
        return self == UNITLESS

    # --------------------------------------------------------------- algebra
    def __mul__(self, other: Unit) -> Unit:
        if not isinstance(other, Unit):
            return NotImplemented
        n1, d1 = self.to_fraction()
        n2, d2 = other.to_fraction()
        return Compound(n1 + n2, d1 + d2).simplify()

    def __truediv__(self, other: Unit) -> Unit:
        if not isinstance(other, Unit):
            return NotImplemented
        n1, d1 = self.to_fraction()
        n2, d2 = other.to_fraction()
        # Multiply with the reciprocal
        return Compound(n1 + d2, d1 + n2).simplify()

    def __rtruediv__(self, n: int) -> Unit:
        if n != 1:
            raise TypeError(
                f"Invalid operation: cannot divide {n} by a Unit ({self.symbol()}). "
                "Only 1/unit (reciprocal) is supported."
            )
        return self.reciprocal()

    def __pow__(self, n: int) -> Unit:
        if not isinstance(n, int):
            return NotImplemented
        if n == 0:
            return UNITLESS
        if n < 0:
            return self.reciprocal() ** -n
        num, den = self.to_fraction()
        return Compound(num * n, den * n).simplify()

    def reciprocal(self) -> Unit:
        num, den = self.to_fraction()
        return Compound(den, num).simplify()

    def __rmul__(self, value: object) -> "Quantity":
        """``3 * Meter`` builds a :class:`~tantalum.core.quantity.Quantity`."""
        from tantalum.core.quantity import Quantity

        return Quantity(value, self)

    # -------------------------------------------------------------------- SI
    def to_si_units(self) -> SiTriple:
        """
        Reduce the unit to SI base units.

        Returns
        -------
        tuple
            ``(offset, slope, unit)`` such that
            ``value_in_si = (value + offset) * slope`` and ``unit`` is built only
            from SI base units and the ``Kilo`` prefix.
        """
        raise NotImplementedError

    def is_interchangeable_with(self, other: Unit) -> bool:
        """True when both units reduce to the same SI atoms with the same multiplicities."""
        return same_si_form(self.to_si_units()[2], other.to_si_units()[2])

    # ------------------------------------------------------------- rendering
    def symbol(self) -> str:
        raise NotImplementedError

    def name(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.symbol()


@dataclass(frozen=True, slots=True, repr=False)
class AtomicUnit(Unit):
    """
    A single catalog entry.

    ``offset`` and ``slope`` convert a value into the SI expression described by
    ``si_numerator`` / ``si_denominator`` (tuples of catalog tags):
    ``si = (value + offset) * slope``.
    """

    tag: str
    display_name: str
    display_symbol: str
    offset: RationalNumber = ZERO
    slope: RationalNumber = ONE
    si_numerator: Tuple[str, ...] = ()
    si_denominator: Tuple[str, ...] = ()
    modifier: bool = False

    def to_fraction(self) -> UnitFraction:
        return (self,), ()

    def is_modifier(self) -> bool:
        return self.modifier

    def to_si_units(self) -> SiTriple:
        from tantalum.units.catalog import si_definition

        return si_definition(self)

    def symbol(self) -> str:
        return self.display_symbol

    def name(self) -> str:
        return self.display_name

    def __repr__(self) -> str:
        return self.tag


@dataclass(frozen=True, slots=True, repr=False)
class Compound(Unit):
    """Product of ``numerator`` members over the product of ``denominator`` members."""

    numerator: Tuple[Unit, ...] = ()
    denominator: Tuple[Unit, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "numerator", tuple(self.numerator))
        object.__setattr__(self, "denominator", tuple(self.denominator))

    def to_fraction(self) -> UnitFraction:
        return self.numerator, self.denominator

    def flatten(self) -> Compound:
        """Inline nested compounds without cancelling anything."""
        numerator: List[Unit] = []
        denominator: List[Unit] = []

        for member in self.numerator:
            flat = member.flatten()
            if isinstance(flat, Compound):
                numerator.extend(flat.numerator)
                denominator.extend(flat.denominator)
            else:
                numerator.append(flat)

        for member in self.denominator:
            flat = member.flatten()
            if isinstance(flat, Compound):
                numerator.extend(flat.denominator)
                denominator.extend(flat.numerator)
            else:
                denominator.append(flat)

        return Compound(tuple(numerator), tuple(denominator))

    def simplify(self) -> Unit:
        """
        Flatten, then cancel each numerator atom against the first equal
        denominator atom.

        One remaining numerator atom with no denominator collapses to that atom;
        nothing left at all is ``UNITLESS``.
        """
        flat = self.flatten()
        num = list(flat.numerator)
        den = list(flat.denominator)

        i = 0
        while i < len(num):
            try:
                pos = den.index(num[i])
            except ValueError:
                i += 1
                continue
            del num[i]
            del den[pos]

        if not den and len(num) == 1:
            return num[0]
        return Compound(tuple(num), tuple(den))

    def to_si_units(self) -> SiTriple:
        # Offsets add up regardless of side; only meaningful for a lone affine
        # atom such as Celsius.
        flat = self.flatten()
        offset = ZERO
        slope = ONE
        numerator: List[Unit] = []
        denominator: List[Unit] = []

        for member in flat.numerator:
            m_offset, m_slope, m_unit = member.to_si_units()
            offset = offset + m_offset
            slope = slope.mul_raw(m_slope)
            numerator.append(m_unit)

        for member in flat.denominator:
            m_offset, m_slope, m_unit = member.to_si_units()
            offset = offset + m_offset
            slope = slope.div_raw(m_slope)
            denominator.append(m_unit)

        return offset, slope.reduced(), Compound(tuple(numerator), tuple(denominator)).simplify()

    def symbol(self) -> str:
        """
        Render symbols in first-seen order, ``X^n`` for repeats.

        ``VA/s`` and ``AV/s`` are different renderings of equal physics.
        """
        if not self.numerator and not self.denominator:
            return ""
        numerator = _format_symbols(_count(self.numerator, lambda u: u.symbol()))
        denominator = _format_symbols(_count(self.denominator, lambda u: u.symbol()))
        if not numerator:
            return f"1/{denominator}"
        if not denominator:
            return numerator
        return f"{numerator}/{denominator}"

    def name(self) -> str:
        if not self.numerator and not self.denominator:
            return ""
        numerator = _format_names(self.numerator)
        denominator = _format_names(self.denominator)
        if not numerator:
            return f"reciprocal {denominator}"
        if not denominator:
            return numerator
        return f"{numerator} per {denominator}"

    def __repr__(self) -> str:
        return f"Compound({self.numerator!r}, {self.denominator!r})"


UNITLESS: Compound = Compound((), ())


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------
def _count(units: Iterable[Unit], key) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for unit in units:
        k = key(unit)
        counts[k] = counts.get(k, 0) + 1
    return counts


def _format_symbols(counts: Dict[str, int]) -> str:
    return "".join(sym if n == 1 else f"{sym}^{n}" for sym, n in counts.items())


_POWER_WORDS = {2: "square", 3: "cubic"}


def _format_names(units: Tuple[Unit, ...]) -> str:
    counts = _count(units, lambda u: u.name())
    modifiers = {u.name() for u in units if u.is_modifier()}

    out = ""
    for i, (label, n) in enumerate(counts.items()):
        if n in _POWER_WORDS:
            term = f"{_POWER_WORDS[n]} {label}"
        elif n > 1:
            term = f"{label} to the {n}"
        else:
            term = label
        out += term
        # prefixes attach to the following unit: "kilometer", not "kilo meter"
        if i < len(counts) - 1 and label not in modifiers:
            out += " "
    return out


# ---------------------------------------------------------------------------
# Free-function forms
# ---------------------------------------------------------------------------
def multiply(a: Unit, b: Unit) -> Unit:
    return a * b


def divide(a: Unit, b: Unit) -> Unit:
    return a / b


def flatten(unit: Unit) -> Unit:
    return unit.flatten()


def simplify(unit: Unit) -> Unit:
    return unit.simplify()


def to_si_units(unit: Unit) -> SiTriple:
    return unit.to_si_units()


def same_si_form(a: Unit, b: Unit) -> bool:
    """Compare two canonical SI forms as multisets of numerator and denominator atoms."""
    an, ad = a.to_fraction()
    bn, bd = b.to_fraction()
    return Counter(an) == Counter(bn) and Counter(ad) == Counter(bd)


__all__ = [
    "Unit",
    "AtomicUnit",
    "Compound",
    "UNITLESS",
    "multiply",
    "divide",
    "flatten",
    "simplify",
    "to_si_units",
    "same_si_form",
]
