"""
Test Canonical Evaluation
=========================
"""

import pytest


def _evaluate(expression, catalog):
    from ucumkit.evaluate import TraversalResult
    from ucumkit.parser.tree import generate_root

    return TraversalResult.from_root(generate_root(expression, catalog), expression)


def test_render_base_units():
    from ucumkit.evaluate import render_base_units

    assert render_base_units([1, -2, 1, 0, 0, 0, 0]) == "m.s-2.g"
    assert render_base_units([0] * 7) == "1"
    assert render_base_units([0, 0, 0, 2, 0, 0, 1]) == "rad2.cd"


def test_velocity(catalog):
    result = _evaluate("m.s-1", catalog)
    assert result.vector_list() == [1, -1, 0, 0, 0, 0, 0]
    assert result.magnitude == pytest.approx(1.0)


def test_kilometre(catalog):
    result = _evaluate("km", catalog)
    assert result.base_units() == "m"
    assert result.magnitude == pytest.approx(1000)


def test_newton(catalog):
    result = _evaluate("N", catalog)
    assert result.base_units() == "m.s-2.g"
    assert result.magnitude == pytest.approx(1000)


def test_km_per_hour(catalog):
    result = _evaluate("km/h", catalog)
    assert result.base_units() == "m.s-1"
    assert result.magnitude == pytest.approx(1000 / 3600)


def test_square_inch(catalog):
    result = _evaluate("[in_i]2", catalog)
    assert result.base_units() == "m2"
    assert result.magnitude == pytest.approx(0.0254 ** 2)


def test_percent_is_dimensionless(catalog):
    result = _evaluate("%", catalog)
    assert result.base_units() == "1"
    assert result.magnitude == pytest.approx(0.01)


def test_numeric_factor(catalog):
    result = _evaluate("10*3.m", catalog)
    assert result.base_units() == "m"
    assert result.magnitude == pytest.approx(1000)


def test_capital_base_units_count(catalog):
    result = _evaluate("KM/HR", catalog)
    assert result.base_units() == "m.s-1"
    assert result.magnitude == pytest.approx(1000 / 3600)


def test_multiply_value(catalog):
    result = _evaluate("km", catalog).multiply_value(2)
    assert result.magnitude == pytest.approx(2000)


@pytest.mark.parametrize("expression", ["m/0", "km400", "10*400"])
def test_non_finite_magnitude(catalog, expression):
    from ucumkit.errors import MagnitudeOutOfRange

    with pytest.raises(MagnitudeOutOfRange) as excinfo:
        _evaluate(expression, catalog)
    assert excinfo.value.expression == expression


def test_zero_literal_numerator(catalog):
    assert _evaluate("0.m", catalog).magnitude == 0


def test_ratio():
    import math

    from ucumkit.evaluate import ratio

    assert ratio(1, 4) == 0.25
    assert math.isinf(ratio(1, 0))
    assert math.isnan(ratio(0, 0))


def test_canonical_form(catalog):
    from ucumkit.evaluate import CanonicalForm

    form = CanonicalForm.from_result(_evaluate("N", catalog))
    assert form.units == "m.s-2.g"
    assert form.vector == [1, -2, 1, 0, 0, 0, 0]
    assert str(form) == "m.s-2.g, 1000.0"
    assert form.to_dict()['magnitude'] == pytest.approx(1000)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
