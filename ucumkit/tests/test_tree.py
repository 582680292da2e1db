"""
Test Expression Tree
====================
"""

import pytest


def test_postfix_order():
    from ucumkit.parser.tree import to_postfix

    assert to_postfix("kg.m/s2") == ['kg', 'm', '.', 's2', '/']
    assert to_postfix("m/(s.g)") == ['m', 's', 'g', '.', '/']


def test_postfix_pads_division():
    from ucumkit.parser.tree import to_postfix

    assert to_postfix("/s") == ['1', 's', '/']
    assert to_postfix("m.(/s)") == ['m', '1', 's', '/', '.']


def test_postfix_imbalance():
    from ucumkit.errors import ParenthesesImbalance
    from ucumkit.parser.tree import to_postfix

    with pytest.raises(ParenthesesImbalance):
        to_postfix("(m")
    with pytest.raises(ParenthesesImbalance):
        to_postfix("m)")


def test_division_negates_right_child(catalog):
    from ucumkit.parser.tree import TreeBuilder

    root = TreeBuilder(catalog).build("m/s")
    assert root.symbol == '/'
    assert root.left.symbol == 'm'
    assert root.left.exponent == 1
    assert root.right.symbol == 's'
    assert root.right.exponent == -1


def test_dissolution_attached_as_right_child(catalog):
    from ucumkit.parser.tree import TreeBuilder

    root = TreeBuilder(catalog).build("L")
    assert root.symbol == 'L'
    assert root.right.symbol == 'l'
    assert root.right.right.symbol == 'm'
    assert root.right.right.prefix == 'd'


def test_cascade_exponents(catalog):
    """L2 -> l2 -> dm6"""
    from ucumkit.parser.tree import generate_root

    root = generate_root("L2", catalog)
    assert root.exponent == 2
    assert root.right.exponent == 2
    assert root.right.right.exponent == 6


def test_cascade_through_division(catalog):
    """m/(s.g): the parenthesised denominator inverts both factors."""
    from ucumkit.parser.tree import generate_root, walk

    root = generate_root("m/(s.g)", catalog)
    exponents = {node.symbol: node.exponent for node in walk(root) if not node.is_operator}
    assert exponents == {'m': 1, 's': -1, 'g': -1}


def test_walk_preorder(catalog):
    from ucumkit.parser.tree import TreeBuilder, walk

    root = TreeBuilder(catalog).build("m.s")
    assert [node.symbol for node in walk(root)] == ['.', 'm', 's']


def test_cycle_raises_expansion_too_deep():
    from ucumkit.errors import ExpansionTooDeep
    from ucumkit.parser.tree import generate_root
    from ucumkit.tests.conftest import minimal_catalog

    catalog = minimal_catalog([
        {'code': 'foo', 'capital': 'FOO', 'name': 'foo', 'value': '1', 'unit': 'bar'},
        {'code': 'bar', 'capital': 'BAR', 'name': 'bar', 'value': '1', 'unit': 'foo'},
    ])
    with pytest.raises(ExpansionTooDeep):
        generate_root("foo", catalog, max_depth=8)


def test_depth_ceiling_is_configurable(catalog):
    """Newton needs more than one level of dissolution."""
    from ucumkit.errors import ExpansionTooDeep
    from ucumkit.parser.tree import generate_root

    generate_root("N", catalog, max_depth=32)
    with pytest.raises(ExpansionTooDeep):
        generate_root("J", catalog, max_depth=0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
