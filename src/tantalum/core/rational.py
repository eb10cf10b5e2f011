"""
tantalum.core.rational
======================

Exact fractions built on :class:`~tantalum.core.scalable_integer.ScalableInteger`.

Two construction modes are available:

- ``RationalNumber(n, d)`` reduces to lowest terms and moves the sign to the
  numerator.
- ``RationalNumber.raw(n, d)`` stores the pair exactly as given. Unit slope
  composition builds long products this way and reduces once at the end.

Equality is *structural*: ``RationalNumber.raw(2, 4) != RationalNumber(1, 2)``.
Call :meth:`RationalNumber.reduced` before comparing values that may have been
built raw. Ordering (``<``, ``<=`` ...) compares values.
"""

from __future__ import annotations

from fractions import Fraction
from math import gcd, isfinite
from typing import Union

from tantalum.core.scalable_integer import ONE as _INT_ONE
from tantalum.core.scalable_integer import ZERO as _INT_ZERO
from tantalum.core.scalable_integer import ScalableInteger

RationalLike = Union[int, ScalableInteger, Fraction, "RationalNumber"]


def _int_pow(base: ScalableInteger, exp: int) -> ScalableInteger:
    result = _INT_ONE
    while exp:
        if exp & 1:
            result = result * base
        base = base * base
        exp >>= 1
    return result


class RationalNumber:
    """
    Numerator/denominator pair of :class:`ScalableInteger` values.

    Arithmetic cross-multiplies and returns reduced results.

    Examples
    --------
    >>> RationalNumber(6, -4)
    RationalNumber(-3, 2)
    >>> RationalNumber(1, 3) + RationalNumber(1, 6)
    RationalNumber(1, 2)
    """

    __slots__ = ("_numer", "_denom")

    def __init__(self, numerator: int | ScalableInteger = 0, denominator: int | ScalableInteger = 1) -> None:
        numer = ScalableInteger(numerator)
        denom = ScalableInteger(denominator)
        if denom.is_zero():
            raise ZeroDivisionError(f"RationalNumber({numer}, 0)")
        self._numer, self._denom = RationalNumber._reduce(numer, denom)

    @staticmethod
    def _reduce(numer: ScalableInteger, denom: ScalableInteger) -> tuple[ScalableInteger, ScalableInteger]:
        if numer.is_zero():
            return _INT_ZERO, _INT_ONE
        g = numer.gcd(denom)
        numer, denom = numer.div_exact(g), denom.div_exact(g)
        if denom.signum() < 0:
            numer, denom = -numer, -denom
        return numer, denom

    @classmethod
    def raw(cls, numerator: int | ScalableInteger, denominator: int | ScalableInteger) -> RationalNumber:
        """Build without reducing. The denominator must still be nonzero."""
        obj = cls.__new__(cls)
        obj._numer = ScalableInteger(numerator)
        obj._denom = ScalableInteger(denominator)
        if obj._denom.is_zero():
            raise ZeroDivisionError(f"RationalNumber.raw({numerator}, 0)")
        return obj

    @classmethod
    def from_integer(cls, value: int | ScalableInteger) -> RationalNumber:
        return cls.raw(value, _INT_ONE)

    @classmethod
    def from_fraction(cls, value: Fraction) -> RationalNumber:
        # Fraction is always kept in lowest terms with a positive denominator.
        return cls.raw(value.numerator, value.denominator)

    @classmethod
    def from_float(cls, value: float) -> RationalNumber:
        """Exact rational value of the binary float (``0.1`` is not ``1/10``)."""
        if not isfinite(value):
            raise ValueError(f"Cannot represent {value!r} as a rational number")
        return cls.from_fraction(Fraction(value))

    @classmethod
    def coerce(cls, value: object) -> RationalNumber | None:
        """Best-effort conversion of ``value``; ``None`` when the type is not numeric."""
        if isinstance(value, RationalNumber):
            return value
        if isinstance(value, (int, ScalableInteger)):
            return cls.from_integer(value)
        if isinstance(value, Fraction):
            return cls.from_fraction(value)
        if isinstance(value, float):
            return cls.from_float(value)
        return None

    # ------------------------------------------------------------- accessors
    @property
    def numerator(self) -> ScalableInteger:
        return self._numer

    @property
    def denominator(self) -> ScalableInteger:
        return self._denom

    def reduced(self) -> RationalNumber:
        return RationalNumber(self._numer, self._denom)

    def to_fraction(self) -> Fraction:
        return Fraction(int(self._numer), int(self._denom))

    def is_zero(self) -> bool:
        return self._numer.is_zero()

    def is_integer(self) -> bool:
        return self._numer.is_multiple_of(self._denom)

    def signum(self) -> int:
        return self._numer.signum() * self._denom.signum()

    def floor(self) -> ScalableInteger:
        reduced = self.reduced()
        return reduced._numer // reduced._denom

    def reciprocal(self) -> RationalNumber:
        if self.is_zero():
            raise ZeroDivisionError("reciprocal of zero")
        return RationalNumber(self._denom, self._numer)

    # ------------------------------------------------------------- arithmetic
    def __add__(self, other: RationalLike) -> RationalNumber:
        rhs = RationalNumber.coerce(other)
        if rhs is None:
            return NotImplemented
        return RationalNumber(
            self._numer * rhs._denom + rhs._numer * self._denom,
            self._denom * rhs._denom,
        )

    def __radd__(self, other: RationalLike) -> RationalNumber:
        return self.__add__(other)

    def __sub__(self, other: RationalLike) -> RationalNumber:
        rhs = RationalNumber.coerce(other)
        if rhs is None:
            return NotImplemented
        return RationalNumber(
            self._numer * rhs._denom - rhs._numer * self._denom,
            self._denom * rhs._denom,
        )

    def __rsub__(self, other: RationalLike) -> RationalNumber:
        lhs = RationalNumber.coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: RationalLike) -> RationalNumber:
        rhs = RationalNumber.coerce(other)
        if rhs is None:
            return NotImplemented
        return RationalNumber(self._numer * rhs._numer, self._denom * rhs._denom)

    def __rmul__(self, other: RationalLike) -> RationalNumber:
        return self.__mul__(other)

    def __truediv__(self, other: RationalLike) -> RationalNumber:
        rhs = RationalNumber.coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs.is_zero():
            raise ZeroDivisionError(f"division of {self} by zero")
        return RationalNumber(self._numer * rhs._denom, self._denom * rhs._numer)

    def __rtruediv__(self, other: RationalLike) -> RationalNumber:
        lhs = RationalNumber.coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def mul_raw(self, other: RationalNumber) -> RationalNumber:
        """Product without reduction."""
        return RationalNumber.raw(self._numer * other._numer, self._denom * other._denom)

    def div_raw(self, other: RationalNumber) -> RationalNumber:
        """Quotient without reduction."""
        return RationalNumber.raw(self._numer * other._denom, self._denom * other._numer)

    def __pow__(self, exponent: int) -> RationalNumber:
        if not isinstance(exponent, int):
            return NotImplemented
        base = self if exponent >= 0 else self.reciprocal()
        n = abs(exponent)
        return RationalNumber(_int_pow(base._numer, n), _int_pow(base._denom, n))

    def __neg__(self) -> RationalNumber:
        return RationalNumber.raw(-self._numer, self._denom)

    def __pos__(self) -> RationalNumber:
        return self

    def __abs__(self) -> RationalNumber:
        return RationalNumber.raw(abs(self._numer), abs(self._denom))

    # ------------------------------------------------------------- comparison
    def __eq__(self, other: object) -> bool:
        rhs = RationalNumber.coerce(other) if not isinstance(other, float) else None
        if rhs is None:
            return NotImplemented
        return self._numer == rhs._numer and self._denom == rhs._denom

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        # Lowest-terms pairs hash like the equal int or Fraction.
        n, d = int(self._numer), int(self._denom)
        if d > 0 and gcd(n, d) == 1:
            return hash(Fraction(n, d))
        return hash((n, d))

    def _cmp(self, other: object) -> int | None:
        rhs = RationalNumber.coerce(other)
        if rhs is None:
            return None
        diff = self._numer * rhs._denom - rhs._numer * self._denom
        sign = diff.signum() * self._denom.signum() * rhs._denom.signum()
        return sign

    def __lt__(self, other: RationalLike) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c < 0

    def __le__(self, other: RationalLike) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c <= 0

    def __gt__(self, other: RationalLike) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c > 0

    def __ge__(self, other: RationalLike) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c >= 0

    # -------------------------------------------------------------- conversion
    def __float__(self) -> float:
        return int(self._numer) / int(self._denom)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        if self._denom == 1:
            return str(self._numer)
        return f"{self._numer}/{self._denom}"

    def __repr__(self) -> str:
        return f"RationalNumber({self._numer}, {self._denom})"


ZERO = RationalNumber.raw(0, 1)
ONE = RationalNumber.raw(1, 1)

__all__ = ["RationalNumber", "ZERO", "ONE"]
