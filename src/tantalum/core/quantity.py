"""
tantalum.core.quantity
======================

Defines the `Quantity` class: an exact rational magnitude paired with a unit.

This module provides:
- Construction from ints, floats, fractions or `RationalNumber` values.
- Unit-unconstrained multiplication and division.
- Unit-checked addition and subtraction (the right operand is converted into
  the left operand's unit first).
- General conversion with `convert_to`, including affine units such as
  temperature scales.
- `apply_modifiers`, which moves SI and binary prefixes into the magnitude.

Quantities are immutable; every operation returns a new instance.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Union

from tantalum.core.errors import ConversionError, IncompatibleUnitsError
from tantalum.core.rational import RationalNumber
from tantalum.core.scalable_integer import ScalableInteger
from tantalum.core.unit import UNITLESS, Compound, Unit, same_si_form

logger = logging.getLogger(__name__)

Number = Union[int, float, Fraction, ScalableInteger, RationalNumber]


def _to_rational(value: object) -> RationalNumber:
    if isinstance(value, bool):
        raise TypeError("bool is not a valid magnitude")
    rational = RationalNumber.coerce(value)
    if rational is None:
        raise TypeError(f"Cannot use {type(value).__name__} as a magnitude")
    return rational


class Quantity:
    """
    A magnitude with a unit.

    Attributes
    ----------
    magnitude : RationalNumber
        The exact numeric value, expressed in ``unit``.
    unit : Unit
        Any unit; no invariant ties the magnitude to it.

    Examples
    --------
    >>> from tantalum.units import Meter, Inch
    >>> Quantity(152, Meter).convert_to(Inch)
    Quantity(760000/127, in)
    """

    __slots__ = ("_magnitude", "_unit")

    def __init__(self, magnitude: Number = 0, unit: Unit = UNITLESS) -> None:
        if not isinstance(unit, Unit):
            raise TypeError(f"unit must be a Unit, got {type(unit).__name__}")
        self._magnitude = _to_rational(magnitude)
        self._unit = unit

    # ----------------------------------------------------------- constructors
    @classmethod
    def from_int(cls, value: int, unit: Unit = UNITLESS) -> Quantity:
        return cls(RationalNumber.from_integer(value), unit)

    @classmethod
    def from_float(cls, value: float, unit: Unit = UNITLESS) -> Quantity:
        return cls(RationalNumber.from_float(value), unit)

    @classmethod
    def from_rational(cls, value: RationalNumber, unit: Unit = UNITLESS) -> Quantity:
        return cls(value, unit)

    @classmethod
    def from_unit(cls, unit: Unit) -> Quantity:
        """A magnitude of one in ``unit``."""
        return cls(1, unit)

    @property
    def magnitude(self) -> RationalNumber:
        return self._magnitude

    @property
    def unit(self) -> Unit:
        return self._unit

    def is_unitless(self) -> bool:
        return self._unit.is_unitless()

    def reduced(self) -> Quantity:
        """Same quantity with the magnitude in lowest terms."""
        return Quantity(self._magnitude.reduced(), self._unit)

    # ------------------------------------------------------------- conversion
    def to_si_units(self) -> Quantity:
        """Express the quantity in canonical SI units: ``(magnitude + offset) * slope``."""
        offset, slope, unit = self._unit.to_si_units()
        return Quantity((self._magnitude + offset) * slope, unit)

    def convert_to(self, target: Unit) -> Quantity:
        """
        Convert to ``target``.

        Both units are reduced to SI; the conversion is
        ``((magnitude + offset) * slope / target_slope) - target_offset``.

        Raises
        ------
        ConversionError
            If the canonical SI forms of the two units differ.
        """
        offset, slope, si_unit = self._unit.to_si_units()
        target_offset, target_slope, target_si = target.to_si_units()
        if not same_si_form(si_unit, target_si):
            logger.debug(
                "Cannot convert %s (SI %s) to %s (SI %s)",
                self._unit.symbol(), si_unit.symbol(), target.symbol(), target_si.symbol(),
            )
            raise ConversionError(self._unit, target)

        magnitude = self._magnitude + offset
        magnitude = magnitude * slope
        magnitude = magnitude / target_slope
        magnitude = magnitude - target_offset
        return Quantity(magnitude, target)

    def apply_modifiers(self) -> Quantity:
        """
        Remove SI and binary prefixes from the unit and fold them into the magnitude.

        ``Quantity(5, Kilo * Meter).apply_modifiers() == Quantity(5000, Meter)``
        """
        numerator, denominator = self._unit.flatten().to_fraction()

        magnitude = self._magnitude
        new_num = []
        new_den = []

        for unit in numerator:
            if unit.is_modifier():
                _, slope, _ = unit.to_si_units()
                magnitude = magnitude * slope
            else:
                new_num.append(unit)

        for unit in denominator:
            if unit.is_modifier():
                _, slope, _ = unit.to_si_units()
                magnitude = magnitude / slope
            else:
                new_den.append(unit)

        return Quantity(magnitude, Compound(tuple(new_num), tuple(new_den)).simplify())

    # ------------------------------------------------------------- arithmetic
    def _converted_operand(self, other: Quantity) -> Quantity:
        try:
            return other.convert_to(self._unit)
        except ConversionError:
            raise IncompatibleUnitsError(other.unit, self._unit) from None

    def __add__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        rhs = self._converted_operand(other)
        return Quantity(self._magnitude + rhs._magnitude, self._unit)

    def __sub__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        rhs = self._converted_operand(other)
        return Quantity(self._magnitude - rhs._magnitude, self._unit)

    def __mul__(self, other: "Quantity | Unit | Number") -> Quantity:
        # quantity × quantity
        if isinstance(other, Quantity):
            return Quantity(self._magnitude * other._magnitude, self._unit * other._unit)

        # quantity × unit
        if isinstance(other, Unit):
            return Quantity(self._magnitude, self._unit * other)

        # quantity × scalar
        if isinstance(other, bool):
            return NotImplemented
        scalar = RationalNumber.coerce(other)
        if scalar is None:
            return NotImplemented
        return Quantity(self._magnitude * scalar, self._unit)

    def __rmul__(self, other: Number) -> Quantity:
        # allows 3 * (2 m) -> 6 m
        if isinstance(other, Unit):
            return Quantity(self._magnitude, other * self._unit)
        return self.__mul__(other)

    def __truediv__(self, other: "Quantity | Unit | Number") -> Quantity:
        # quantity / quantity
        if isinstance(other, Quantity):
            return Quantity(self._magnitude / other._magnitude, self._unit / other._unit)

        # quantity / unit
        if isinstance(other, Unit):
            return Quantity(self._magnitude, self._unit / other)

        # quantity / scalar
        if isinstance(other, bool):
            return NotImplemented
        scalar = RationalNumber.coerce(other)
        if scalar is None:
            return NotImplemented
        return Quantity(self._magnitude / scalar, self._unit)

    def __rtruediv__(self, other: "Unit | Number") -> Quantity:
        # scalar / quantity -> inverse unit
        if isinstance(other, Unit):
            return Quantity(self._magnitude.reciprocal(), other / self._unit)
        if isinstance(other, bool):
            return NotImplemented
        scalar = RationalNumber.coerce(other)
        if scalar is None:
            return NotImplemented
        return Quantity(scalar / self._magnitude, UNITLESS / self._unit)

    def __neg__(self) -> Quantity:
        return Quantity(-self._magnitude, self._unit)

    def __pos__(self) -> Quantity:
        return self

    # ------------------------------------------------------------- comparison
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        # Structural: 2/4 m and 1/2 m are different values here.
        return self._unit == other._unit and self._magnitude == other._magnitude

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self._magnitude, self._unit))

    # ---------------------------------------------------------------- display
    def __str__(self) -> str:
        return f"{self._magnitude}{self._unit.symbol()}"

    def __repr__(self) -> str:
        symbol = self._unit.symbol()
        return f"Quantity({self._magnitude}, {symbol})" if symbol else f"Quantity({self._magnitude})"

    def __format__(self, spec: str) -> str:
        """
        Format as ``"{magnitude}{symbol}"``.

        Supported specifiers
        --------------------
        "" (empty), or "native"
            The quantity in its current unit.
        "si"
            The quantity converted with :meth:`to_si_units`.
        "name"
            Magnitude followed by the unit's display name.
        """
        spec = (spec or "").strip().lower()
        if spec in ("", "native"):
            return str(self)
        if spec == "si":
            return str(self.to_si_units())
        if spec == "name":
            name = self._unit.name()
            return f"{self._magnitude} {name}" if name else str(self._magnitude)
        raise ValueError("Unknown format spec; use '', 'native', 'si' or 'name'")


__all__ = ["Quantity"]
