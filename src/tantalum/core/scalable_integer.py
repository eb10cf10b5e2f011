"""
tantalum.core.scalable_integer
==============================

An exact integer that moves between three storage tiers so that small values
stay cheap and large values never overflow.

Tiers
-----
SMALL
    Fits a signed 64-bit range.
MEDIUM
    Fits a signed 128-bit range.
LARGE
    Unbounded.

Every operation follows the same ladder: align both operands to the wider of
their tiers, run the operation with an overflow check at that width, promote
both operands one tier and retry on overflow, and finally demote the result to
the smallest tier that holds it exactly.
"""

from __future__ import annotations

import logging
import math
import operator
from enum import IntEnum
from typing import Callable, Tuple, Union

from tantalum.core.errors import InexactDivisionError

logger = logging.getLogger(__name__)


class Tier(IntEnum):
    SMALL = 0
    MEDIUM = 1
    LARGE = 2


# Inclusive (min, max) per fixed-width tier; LARGE has no bounds.
_BOUNDS = {
    Tier.SMALL: (-(1 << 63), (1 << 63) - 1),
    Tier.MEDIUM: (-(1 << 127), (1 << 127) - 1),
}


def _fits(value: int, tier: Tier) -> bool:
    if tier is Tier.LARGE:
        return True
    low, high = _BOUNDS[tier]
    return low <= value <= high


def _smallest_tier(value: int) -> Tier:
    for tier in (Tier.SMALL, Tier.MEDIUM):
        if _fits(value, tier):
            return tier
    return Tier.LARGE


IntLike = Union[int, "ScalableInteger"]


class ScalableInteger:
    """
    Exact integer stored in the cheapest of three width tiers.

    Instances are immutable. Results of arithmetic are always demoted to the
    smallest tier that can hold them, so two equal values always share a tier
    once an operation has produced them.

    Examples
    --------
    >>> ScalableInteger(2**62) + ScalableInteger(2**62)
    ScalableInteger(9223372036854775808, tier=MEDIUM)
    """

    __slots__ = ("_value", "_tier")

    def __init__(self, value: IntLike = 0) -> None:
        if isinstance(value, ScalableInteger):
            self._value = value._value
            self._tier = value._tier
            return
        if not isinstance(value, int):
            raise TypeError(
                f"ScalableInteger requires an int, got {type(value).__name__}"
            )
        self._value = int(value)
        self._tier = _smallest_tier(self._value)

    @classmethod
    def _at_tier(cls, value: int, tier: Tier) -> ScalableInteger:
        """Build a value pinned to ``tier`` without demoting it (transient use only)."""
        if not _fits(value, tier):
            raise OverflowError(f"{value} does not fit tier {tier.name}")
        obj = cls.__new__(cls)
        obj._value = value
        obj._tier = tier
        return obj

    @classmethod
    def from_str_radix(cls, text: str, radix: int = 10) -> ScalableInteger:
        """Parse a signed integer written in base ``radix`` (2..36)."""
        if not 2 <= radix <= 36:
            raise ValueError(f"radix must be between 2 and 36, got {radix}")
        try:
            return cls(int(text.strip(), radix))
        except ValueError:
            raise ValueError(f"Invalid base-{radix} integer literal: {text!r}") from None

    # ------------------------------------------------------------------ tiers
    @property
    def tier(self) -> Tier:
        return self._tier

    @property
    def value(self) -> int:
        return self._value

    def demoted(self) -> ScalableInteger:
        return ScalableInteger(self._value)

    # Pinned-tier helpers below are only used mid-operation by _tiered and
    # comparisons; their results never escape a public method.
    def _promoted(self) -> ScalableInteger:
        """Same value one tier wider. LARGE stays LARGE."""
        return ScalableInteger._at_tier(self._value, Tier(min(self._tier + 1, Tier.LARGE)))

    def _widened_to(self, tier: Tier) -> ScalableInteger:
        if tier < self._tier:
            raise ValueError(f"Cannot widen {self._tier.name} to narrower tier {tier.name}")
        return ScalableInteger._at_tier(self._value, tier)

    @staticmethod
    def _align(*operands: ScalableInteger) -> Tuple[ScalableInteger, ...]:
        """Widen every operand to the largest tier among them."""
        target = max(op._tier for op in operands)
        return tuple(op if op._tier == target else op._widened_to(target) for op in operands)

    # -------------------------------------------------------- tiered dispatch
    @staticmethod
    def _tiered(op: Callable[..., int], *operands: ScalableInteger) -> ScalableInteger:
        """Align, run ``op`` with an overflow check, promote on overflow, demote the result."""
        aligned = ScalableInteger._align(*operands)
        while True:
            tier = aligned[0]._tier
            assert all(o._tier == tier for o in aligned), "operands must share a tier"
            result = op(*(o._value for o in aligned))
            if _fits(result, tier):
                return ScalableInteger(result)
            aligned = tuple(o._promoted() for o in aligned)
            if aligned[0]._tier is Tier.LARGE:
                logger.debug("%s overflowed %s, promoting to LARGE", op.__name__, tier.name)

    @staticmethod
    def _coerce(other: object) -> ScalableInteger | None:
        if isinstance(other, ScalableInteger):
            return other
        if isinstance(other, int):
            return ScalableInteger(other)
        return None

    # ------------------------------------------------------------- arithmetic
    def __add__(self, other: IntLike) -> ScalableInteger:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._tiered(operator.add, self, rhs)

    def __radd__(self, other: int) -> ScalableInteger:
        return self.__add__(other)

    def __sub__(self, other: IntLike) -> ScalableInteger:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: int) -> ScalableInteger:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: IntLike) -> ScalableInteger:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._tiered(operator.mul, self, rhs)

    def __rmul__(self, other: int) -> ScalableInteger:
        return self.__mul__(other)

    def __floordiv__(self, other: IntLike) -> ScalableInteger:
        """Floor division (rounds toward negative infinity)."""
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._tiered(operator.floordiv, self, rhs)

    def __rfloordiv__(self, other: int) -> ScalableInteger:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs // self

    def __mod__(self, other: IntLike) -> ScalableInteger:
        """Floor remainder: the result takes the sign of the divisor."""
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._tiered(operator.mod, self, rhs)

    def __rmod__(self, other: int) -> ScalableInteger:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs % self

    def __divmod__(self, other: IntLike) -> Tuple[ScalableInteger, ScalableInteger]:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self // rhs, self % rhs

    def __rdivmod__(self, other: int) -> Tuple[ScalableInteger, ScalableInteger]:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return divmod(lhs, self)

    def div_trunc(self, other: IntLike) -> ScalableInteger:
        """Division rounding toward zero."""
        rhs = ScalableInteger(other)

        def trunc_div(a: int, b: int) -> int:
            q = abs(a) // abs(b)
            return q if (a < 0) == (b < 0) else -q

        return self._tiered(trunc_div, self, rhs)

    def div_exact(self, other: IntLike) -> ScalableInteger:
        """Division that must leave no remainder; raises ``InexactDivisionError`` otherwise."""
        quotient, remainder = divmod(self, ScalableInteger(other))
        if not remainder.is_zero():
            raise InexactDivisionError(f"{self} is not divisible by {other}")
        return quotient

    def __neg__(self) -> ScalableInteger:
        return self._tiered(operator.neg, self)

    def __pos__(self) -> ScalableInteger:
        return self

    def __abs__(self) -> ScalableInteger:
        return self._tiered(operator.abs, self)

    # ----------------------------------------------------------- number theory
    def gcd(self, other: IntLike) -> ScalableInteger:
        """Greatest common divisor, always non-negative."""
        return self._tiered(math.gcd, self, ScalableInteger(other))

    def lcm(self, other: IntLike) -> ScalableInteger:
        """Least common multiple, always non-negative."""
        return self._tiered(math.lcm, self, ScalableInteger(other))

    def is_zero(self) -> bool:
        return self._value == 0

    def is_even(self) -> bool:
        return self._value % 2 == 0

    def is_odd(self) -> bool:
        return not self.is_even()

    def is_multiple_of(self, other: IntLike) -> bool:
        rhs = ScalableInteger(other)
        if rhs.is_zero():
            return self.is_zero()
        return (self % rhs).is_zero()

    def signum(self) -> int:
        return (self._value > 0) - (self._value < 0)

    # ------------------------------------------------------------- comparison
    def _compare(self, other: object, op: Callable[[int, int], bool]) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        lhs, rhs = ScalableInteger._align(self, rhs)
        assert lhs._tier == rhs._tier, "operands must share a tier"
        return op(lhs._value, rhs._value)

    def __eq__(self, other: object) -> bool:
        return self._compare(other, operator.eq)

    def __ne__(self, other: object) -> bool:
        return self._compare(other, operator.ne)

    def __lt__(self, other: IntLike) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: IntLike) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: IntLike) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: IntLike) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Matches int hashing so ScalableInteger(5) and 5 collide in dicts.
        return hash(self._value)

    # -------------------------------------------------------------- conversion
    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"ScalableInteger({self._value}, tier={self._tier.name})"


ZERO = ScalableInteger(0)
ONE = ScalableInteger(1)

__all__ = ["ScalableInteger", "Tier", "ZERO", "ONE"]
