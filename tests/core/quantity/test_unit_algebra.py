import pytest

from tantalum.core.unit import (
    UNITLESS,
    Compound,
    divide,
    flatten,
    multiply,
    simplify,
)
from tantalum.units import (
    AU,
    Gallon,
    Joule,
    Kelvin,
    Kilo,
    Meter,
    Ounce,
    Second,
    Watt,
    Year,
)
from tantalum.units.catalog import DEFAULT_CATALOG

ALL_UNITS = list(DEFAULT_CATALOG.all().values())


def c(numerator=(), denominator=()):
    return Compound(tuple(numerator), tuple(denominator))


# -------------------------------
# flatten()
# -------------------------------

def test_flatten_divided_rate():
    assert ((Meter / Second) / Second).flatten() == Meter / (Second * Second)


def test_flatten_inverts_nested_denominator():
    nested = c([Second], [c([Meter], [Second])])
    assert nested.flatten() == c([Second, Second], [Meter])


def test_flatten_keeps_everything_without_cancelling():
    nested = c([c([Meter], [Second])], [c([Meter], [Second])])
    assert nested.flatten() == c([Meter, Second], [Second, Meter])


def test_flatten_deeply_nested():
    nested = c([c([c([Watt], [Joule])], [Second])], [c([Meter], [Second])])
    assert flatten(nested) == c([Watt, Second], [Joule, Second, Meter])


def test_flatten_atom_is_identity():
    assert Meter.flatten() is Meter


# -------------------------------
# simplify()
# -------------------------------

@pytest.mark.parametrize("unit", [Joule, Meter, Gallon, Year])
def test_simplify_atom_is_identity(unit):
    assert unit.simplify() == unit


def test_simplify_to_unitless():
    assert c([Second], [Second]).simplify() == UNITLESS


def test_simplify_collapses_single_numerator():
    assert c([Second, Watt], [Second]).simplify() == Watt
    assert c([Kelvin, Kelvin], [Kelvin]).simplify() == Kelvin


def test_simplify_leaves_unmatched_atoms():
    unit = c([Meter, Watt, Meter, AU], [Second])
    assert unit.simplify() == unit


def test_simplify_leaves_empty_numerator():
    assert simplify(c([Year], [Ounce, Year])) == c([], [Ounce])


def test_simplify_nested():
    assert c([c([Meter], [Second])], [Second]).simplify() == c([Meter], [Second, Second])
    nested = c([c([c([Watt], [Joule])], [Second])], [c([Meter], [Second])])
    assert nested.simplify() == c([Watt], [Joule, Meter])


def test_simplify_cancels_first_match_only():
    # Each numerator atom removes the first equal denominator atom; order is kept.
    unit = c([Meter, Second], [Joule, Second, Meter, Second])
    assert unit.simplify() == c([], [Joule, Second])


def test_simplify_multiple_numerators_stay_compound():
    assert c([Meter, Meter], []).simplify() == c([Meter, Meter], [])
    assert c([], []).simplify() == UNITLESS


def test_simplify_is_idempotent():
    samples = [
        c([c([Meter], [Second])], [Second]),
        c([Meter, Second, Watt], [Second, Joule]),
        c([Year], [Ounce, Year]),
        (Kilo * Watt) / (Meter / Second),
    ]
    for unit in samples:
        once = simplify(flatten(unit))
        assert simplify(flatten(once)) == once


@pytest.mark.parametrize("unit", ALL_UNITS, ids=lambda u: u.tag)
def test_unit_over_itself_is_unitless(unit):
    assert (unit / unit) == UNITLESS
    assert (unit / unit).is_unitless()


# -------------------------------
# multiply() / divide()
# -------------------------------

def test_multiply_concatenates_in_order():
    assert Meter * Second == c([Meter, Second], [])
    assert Second * Meter == c([Second, Meter], [])
    assert Meter * Second != Second * Meter


def test_divide_swaps_right_operand():
    assert Meter / Second == c([Meter], [Second])
    assert divide(Meter, Meter / Second) == Second


def test_free_functions_match_operators():
    assert multiply(Meter, Second) == Meter * Second
    assert divide(Watt, Second) == Watt / Second


def test_multiply_cancels():
    assert (Meter / Second) * Second == Meter
    assert (Meter / Second) * (Second / Meter) == UNITLESS


def test_to_fraction():
    assert Meter.to_fraction() == ((Meter,), ())
    assert (Meter / Second).to_fraction() == ((Meter,), (Second,))


# -------------------------------
# Powers & reciprocals
# -------------------------------

def test_pow():
    assert Meter ** 2 == c([Meter, Meter], [])
    assert Meter ** 1 == Meter
    assert Meter ** 0 == UNITLESS
    assert Meter ** -2 == c([], [Meter, Meter])
    assert (Meter / Second) ** 2 == c([Meter, Meter], [Second, Second])


def test_reciprocal_and_one_over_unit():
    assert Second.reciprocal() == c([], [Second])
    assert 1 / Second == c([], [Second])
    assert (Meter / Second).reciprocal() == Second / Meter


def test_dividing_other_scalars_by_unit_raises():
    with pytest.raises(TypeError):
        2 / Meter


def test_modifier_flags():
    assert Kilo.is_modifier()
    assert not Meter.is_modifier()
    assert not (Kilo * Meter).is_modifier()


def test_units_are_hashable():
    assert len({Meter / Second, c([Meter], [Second]), Meter}) == 2
