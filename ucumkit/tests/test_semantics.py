"""
Test Semantic Rules
===================
"""

import pytest


def _check(catalog, expression, purpose):
    from ucumkit.parser.semantics import check_purpose
    from ucumkit.parser.tokenizer import tokenize

    check_purpose(expression, tokenize(expression), catalog, purpose)


@pytest.mark.parametrize("expression", ["kg.m/s2", "KG.M", "KM/HR", "2.kg", "10.M", "Cel", "2.Cel", "[iU]/L"])
def test_valid(catalog, expression):
    _check(catalog, expression, 'validity')


def test_mixed_case(catalog):
    from ucumkit.errors import MixedCaseConvention

    with pytest.raises(MixedCaseConvention):
        _check(catalog, "kg.M", 'validity')


def test_capital_s_is_siemens(catalog):
    """Capital S resolves as the case-sensitive siemens, not a capital second."""
    from ucumkit.errors import MixedCaseConvention

    with pytest.raises(MixedCaseConvention):
        _check(catalog, "KG.M/S2", 'validity')


def test_numbers_do_not_fix_case(catalog):
    """A leading number leaves the convention to the first unit."""
    _check(catalog, "1000.KG.M", 'validity')


@pytest.mark.parametrize("expression", ["Cel2", "Cel.m", "m/Cel", "[degF].s"])
def test_special_misuse(catalog, expression):
    from ucumkit.errors import SpecialUnitMisuse

    with pytest.raises(SpecialUnitMisuse):
        _check(catalog, expression, 'validity')


def test_arbitrary_allowed_for_validity_only(catalog):
    from ucumkit.errors import ArbitraryUnitNotEligible

    _check(catalog, "[iU]", 'validity')
    with pytest.raises(ArbitraryUnitNotEligible):
        _check(catalog, "[iU]", 'canonization')
    with pytest.raises(ArbitraryUnitNotEligible):
        _check(catalog, "[iU]/ml", 'operations')


def test_special_excluded_from_operations(catalog):
    from ucumkit.errors import SpecialUnitNotEligible

    _check(catalog, "Cel", 'canonization')
    with pytest.raises(SpecialUnitNotEligible):
        _check(catalog, "Cel", 'operations')


def test_unknown_unit_propagates(catalog):
    from ucumkit.errors import UnknownUnit

    with pytest.raises(UnknownUnit):
        _check(catalog, "m.furlong", 'validity')


def test_unknown_purpose(catalog):
    with pytest.raises(ValueError):
        _check(catalog, "m", 'decoration')


def test_named_purposes(catalog):
    from ucumkit.errors import SpecialUnitNotEligible
    from ucumkit.parser.semantics import check_canonization, check_operations, check_validity

    check_validity("Cel", ["Cel"], catalog)
    check_canonization("Cel", ["Cel"], catalog)
    with pytest.raises(SpecialUnitNotEligible):
        check_operations("Cel", ["Cel"], catalog)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
