import logging

import pytest

from tantalum.core.errors import InexactDivisionError
from tantalum.core.scalable_integer import ONE, ZERO, ScalableInteger, Tier

I64_MAX = (1 << 63) - 1
I64_MIN = -(1 << 63)
I128_MAX = (1 << 127) - 1
I128_MIN = -(1 << 127)


# -------------------------------
# Tier selection & demotion
# -------------------------------

@pytest.mark.parametrize("value, tier", [
    (0, Tier.SMALL),
    (-1, Tier.SMALL),
    (I64_MAX, Tier.SMALL),
    (I64_MIN, Tier.SMALL),
    (I64_MAX + 1, Tier.MEDIUM),
    (I64_MIN - 1, Tier.MEDIUM),
    (I128_MAX, Tier.MEDIUM),
    (I128_MIN, Tier.MEDIUM),
    (I128_MAX + 1, Tier.LARGE),
    (I128_MIN - 1, Tier.LARGE),
    (10 ** 60, Tier.LARGE),
])
def test_construction_uses_smallest_tier(value, tier):
    n = ScalableInteger(value)
    assert n.tier is tier
    assert int(n) == value


def test_construction_rejects_non_integers():
    with pytest.raises(TypeError):
        ScalableInteger(1.5)
    with pytest.raises(TypeError):
        ScalableInteger("12")


def test_copy_constructor_keeps_value_and_tier():
    big = ScalableInteger(10 ** 40)
    copy = ScalableInteger(big)
    assert copy == big
    assert copy.tier is Tier.LARGE


def test_result_is_demoted_after_operation():
    big = ScalableInteger(2 ** 100)
    almost = ScalableInteger(2 ** 100 - 3)
    diff = big - almost
    assert diff == 3
    assert diff.tier is Tier.SMALL


def test_internal_widening_keeps_value():
    n = ScalableInteger(42)
    assert n._promoted().tier is Tier.MEDIUM
    assert n._promoted()._promoted()._promoted().tier is Tier.LARGE
    assert n._widened_to(Tier.LARGE) == 42
    assert n._promoted().demoted().tier is Tier.SMALL


def test_widen_to_narrower_tier_raises():
    with pytest.raises(ValueError):
        ScalableInteger(I64_MAX + 1)._widened_to(Tier.SMALL)


def test_align_widens_to_largest_tier():
    a, b = ScalableInteger._align(ScalableInteger(1), ScalableInteger(2 ** 70))
    assert a.tier is b.tier is Tier.MEDIUM
    assert a == 1 and b == 2 ** 70


@pytest.mark.regression(reason="Pinned-tier values must not leak out of public operations")
@pytest.mark.parametrize("op", [
    lambda n: n + 0,
    lambda n: n * 1,
    lambda n: -(-n),
    lambda n: abs(n),
    lambda n: n // 1,
])
def test_public_results_are_demoted_even_from_widened_operands(op):
    widened = ScalableInteger(42)._widened_to(Tier.LARGE)
    result = op(widened)
    assert result == 42
    assert result.tier is Tier.SMALL


def test_pinned_tier_helpers_are_not_public():
    public = {name for name in dir(ScalableInteger) if not name.startswith("_")}
    assert not public & {"promoted", "widened_to", "align"}
    assert "demoted" in public


# -------------------------------
# Overflow promotion
# -------------------------------

def test_add_overflowing_small_promotes_to_medium():
    result = ScalableInteger(I64_MAX) + ScalableInteger(1)
    assert result == I64_MAX + 1
    assert result.tier is Tier.MEDIUM


def test_mul_overflowing_medium_promotes_to_large():
    result = ScalableInteger(2 ** 64) * ScalableInteger(2 ** 64)
    assert result == 2 ** 128
    assert result.tier is Tier.LARGE


def test_negating_minimum_promotes():
    result = -ScalableInteger(I64_MIN)
    assert result == I64_MAX + 1
    assert result.tier is Tier.MEDIUM


def test_floor_division_of_minimum_by_minus_one_promotes():
    result = ScalableInteger(I64_MIN) // -1
    assert result == I64_MAX + 1
    assert result.tier is Tier.MEDIUM


def test_promotion_to_large_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="tantalum.core.scalable_integer"):
        ScalableInteger(I128_MAX) + 1
    assert any("promoting to LARGE" in r.getMessage() for r in caplog.records)


BOUNDARY = [0, 1, -1, I64_MAX, I64_MIN, I64_MAX + 1, I128_MAX, I128_MIN, 3 ** 90, -(5 ** 70)]


@pytest.mark.parametrize("a", BOUNDARY)
@pytest.mark.parametrize("b", BOUNDARY)
def test_add_and_mul_never_overflow(a, b):
    x, y = ScalableInteger(a), ScalableInteger(b)
    assert int(x + y) == a + b
    assert int(x - y) == a - b
    assert int(x * y) == a * b
    assert (x * y).tier is ScalableInteger(a * b).tier


# -------------------------------
# Division & remainder
# -------------------------------

@pytest.mark.parametrize("a, b", [(7, 2), (-7, 2), (7, -2), (-7, -2), (0, 5), (I64_MIN, 3)])
def test_floor_division_and_remainder_match_python(a, b):
    x, y = ScalableInteger(a), ScalableInteger(b)
    assert x // y == a // b
    assert x % y == a % b
    q, r = divmod(x, y)
    assert (q, r) == divmod(a, b)


@pytest.mark.regression(reason="Remainder on the scalable integer must use floor semantics, not abort")
def test_remainder_takes_sign_of_divisor():
    assert ScalableInteger(-7) % 2 == 1
    assert ScalableInteger(7) % -2 == -1


def test_truncated_division_rounds_toward_zero():
    assert ScalableInteger(-7).div_trunc(2) == -3
    assert ScalableInteger(7).div_trunc(-2) == -3
    assert ScalableInteger(7).div_trunc(2) == 3


def test_exact_division():
    assert ScalableInteger(10 ** 30).div_exact(10 ** 10) == 10 ** 20
    with pytest.raises(InexactDivisionError):
        ScalableInteger(7).div_exact(2)


def test_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        ScalableInteger(1) // 0
    with pytest.raises(ZeroDivisionError):
        ScalableInteger(1) % ScalableInteger(0)


def test_reflected_operators_with_int():
    n = ScalableInteger(4)
    assert 10 - n == 6
    assert 10 + n == 14
    assert 3 * n == 12
    assert 17 // n == 4
    assert 17 % n == 1
    assert divmod(17, n) == (4, 1)


# -------------------------------
# Number theory helpers
# -------------------------------

def test_gcd_and_lcm():
    assert ScalableInteger(12).gcd(18) == 6
    assert ScalableInteger(-12).gcd(18) == 6
    assert ScalableInteger(4).lcm(6) == 12
    assert ScalableInteger(2 ** 80).gcd(2 ** 70) == 2 ** 70


def test_gcd_of_minimum_and_zero_promotes():
    result = ScalableInteger(I64_MIN).gcd(0)
    assert result == 2 ** 63
    assert result.tier is Tier.MEDIUM


def test_parity_and_multiples():
    assert ScalableInteger(10).is_even()
    assert ScalableInteger(-3).is_odd()
    assert ScalableInteger(2 ** 90).is_even()
    assert ScalableInteger(12).is_multiple_of(4)
    assert not ScalableInteger(12).is_multiple_of(5)
    assert ZERO.is_multiple_of(0)
    assert not ONE.is_multiple_of(0)


def test_signum_and_abs():
    assert ScalableInteger(-9).signum() == -1
    assert ZERO.signum() == 0
    assert abs(ScalableInteger(-(2 ** 100))) == 2 ** 100


# -------------------------------
# Parsing
# -------------------------------

@pytest.mark.parametrize("text, radix, expected", [
    ("ff", 16, 255),
    ("-101", 2, -5),
    ("z", 36, 35),
    ("123456789012345678901234567890", 10, 123456789012345678901234567890),
])
def test_from_str_radix(text, radix, expected):
    assert ScalableInteger.from_str_radix(text, radix) == expected


def test_from_str_radix_rejects_bad_input():
    with pytest.raises(ValueError):
        ScalableInteger.from_str_radix("12g", 16)
    with pytest.raises(ValueError):
        ScalableInteger.from_str_radix("10", 1)


# -------------------------------
# Comparison, hashing, display
# -------------------------------

def test_comparisons_across_tiers():
    small = ScalableInteger(1)
    large = ScalableInteger(2 ** 200)
    assert small < large
    assert large > small
    assert small <= 1 and small >= 1
    assert small != large
    assert ScalableInteger(2 ** 200) == large


def test_hash_matches_int():
    assert hash(ScalableInteger(5)) == hash(5)
    assert {ScalableInteger(2 ** 70): "x"}[2 ** 70] == "x"


def test_display():
    assert str(ScalableInteger(-42)) == "-42"
    assert repr(ScalableInteger(2 ** 64)) == f"ScalableInteger({2 ** 64}, tier=MEDIUM)"
    assert float(ScalableInteger(3)) == 3.0
    assert not ZERO
    assert ONE
