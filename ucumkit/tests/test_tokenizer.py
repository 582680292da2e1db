"""
Test Tokenizer
==============
"""

import pytest


def test_operators_split():
    """Operators and parentheses are tokens of their own."""
    from ucumkit.parser.tokenizer import tokenize

    assert tokenize("kg.m/s2") == ['kg', '.', 'm', '/', 's2']
    assert tokenize("(m/s)") == ['(', 'm', '/', 's', ')']


def test_annotation_copied_verbatim():
    """Operator characters inside braces stay in the operand."""
    from ucumkit.parser.tokenizer import tokenize

    assert tokenize("g{a.b/c}/(h)") == ['g{a.b/c}', '/', '(', 'h', ')']
    assert tokenize("{rbc}") == ['{rbc}']


def test_unterminated_annotation_runs_to_end():
    from ucumkit.parser.tokenizer import tokenize

    assert tokenize("m{a.b") == ['m{a.b']


def test_classification():
    from ucumkit.parser.tokenizer import is_operator, is_group, is_operand

    assert is_operator('.') and is_operator('/')
    assert is_group('(') and is_group(')')
    assert is_operand('kg')
    assert not is_operand('/')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
