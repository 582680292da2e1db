"""
Tokenizer
=========

Splits a UCUM expression into operators, parentheses and operands.

    "kg.m/s2"      -> ['kg', '.', 'm', '/', 's2']
    "g{a.b}/(h)"   -> ['g{a.b}', '/', '(', 'h', ')']
"""

from typing import List

OPERATORS = ('.', '/')
GROUPS = ('(', ')')


def is_operator(token: str) -> bool:
    return token in OPERATORS


def is_group(token: str) -> bool:
    return token in GROUPS


def is_operand(token: str) -> bool:
    return not (is_operator(token) or is_group(token))


def tokenize(expression: str) -> List[str]:
    """
    Split an expression into tokens.

    Annotations are copied into the current operand verbatim, so braces may
    hold operator characters. An unterminated annotation runs to the end of
    the input; callers validate braces first.
    """
    tokens: List[str] = []
    current: List[str] = []

    i = 0
    n = len(expression)
    while i < n:
        char = expression[i]
        if char in OPERATORS or char in GROUPS:
            if current:
                tokens.append(''.join(current))
                current = []
            tokens.append(char)
        elif char == '{':
            end = expression.find('}', i)
            if end == -1:
                end = n - 1
            current.append(expression[i:end + 1])
            i = end
        else:
            current.append(char)
        i += 1

    if current:
        tokens.append(''.join(current))

    return tokens
