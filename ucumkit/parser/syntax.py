"""
Syntax Check
============

Structural rules an expression must satisfy before any unit is looked up.

Every illegal pattern is searched across the whole input; matches that lie
entirely inside one {annotation} are exempt, so annotation text may hold
any printable character.

    >>> passes_syntax("kg.m/s2")
    True
    >>> passes_syntax("m..s")
    False
    >>> passes_syntax("m{..}")
    True
"""

import logging
import re
from typing import List, Tuple

from ucumkit.errors import SyntaxViolation, UcumError
from ucumkit.parser.tree import to_postfix

logger = logging.getLogger(__name__)


# (description, pattern) in the order they are checked
ILLEGAL_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("operand directly before '('", re.compile(r"[^./(]\(")),
    ("annotation not followed by an operator", re.compile(r"\}[^./]")),
    ("empty parentheses", re.compile(r"\(\)")),
    ("consecutive signs", re.compile(r"[+-]{2}")),
    ("integer with a leading zero", re.compile(r"(?<!\d)0\d+")),
    ("consecutive operators", re.compile(r"[./]{2}")),
    ("division without right operand", re.compile(r"/\)")),
    ("multiplication without operands", re.compile(r"\(\.\)")),
    ("negative exponent on an integer", re.compile(r"\d-")),
    ("operator followed by a signed integer", re.compile(r"[./]+[-+]+\d")),
    ("exponent on parentheses", re.compile(r"\)[-+]*\d")),
    ("exponent on an annotation", re.compile(r"\}[-+]*\d")),
]


def annotation_spans(expression: str) -> List[Tuple[int, int]]:
    """
    Positions of every '{' and its matching '}'.

    Raises:
        SyntaxViolation: On unbalanced or nested braces
    """
    spans = []
    opened = []
    for i, char in enumerate(expression):
        if char == '{':
            if opened:
                raise SyntaxViolation(expression, "Annotations cannot be nested")
            opened.append(i)
        elif char == '}':
            if not opened:
                raise SyntaxViolation(expression, "Closing brace without opening brace")
            spans.append((opened.pop(), i))

    if opened:
        raise SyntaxViolation(expression, "Unterminated annotation")
    return spans


def _inside_annotation(start: int, end: int, spans: List[Tuple[int, int]]) -> bool:
    return any(open_at < start and end <= close_at for open_at, close_at in spans)


def contains_illegal_pattern(pattern: re.Pattern, expression: str,
                             spans: List[Tuple[int, int]]) -> bool:
    """True if the pattern matches anywhere outside an annotation."""
    for match in pattern.finditer(expression):
        if not _inside_annotation(match.start(), match.end(), spans):
            return True
    return False


def check_syntax(expression: str) -> None:
    """
    Raise if the expression is structurally ill-formed.

    Raises:
        SyntaxViolation: Any character, brace or pattern rule fails
        ParenthesesImbalance: Parentheses do not pair up
    """
    if not expression:
        raise SyntaxViolation(expression, "Empty expression")

    if not all(33 <= ord(c) <= 126 for c in expression):
        raise SyntaxViolation(expression, "Only printable ASCII without spaces is allowed")

    if expression.startswith('.') or expression.endswith('.'):
        raise SyntaxViolation(expression, "Expression cannot start or end with '.'")

    if expression.endswith('/'):
        raise SyntaxViolation(expression, "Expression cannot end with '/'")

    if expression.startswith(('+', '-')):
        raise SyntaxViolation(expression, "Expression cannot start with a sign")

    spans = annotation_spans(expression)

    for description, pattern in ILLEGAL_PATTERNS:
        if contains_illegal_pattern(pattern, expression, spans):
            raise SyntaxViolation(expression, f"Illegal pattern: {description}")

    # Balanced parentheses are a by-product of a successful postfix ordering
    to_postfix(expression)


def passes_syntax(expression: str) -> bool:
    """Boolean form of check_syntax."""
    try:
        check_syntax(expression)
    except UcumError as e:
        logger.debug("Syntax check failed: %s", e)
        return False
    return True


__all__ = [
    'ILLEGAL_PATTERNS',
    'annotation_spans',
    'contains_illegal_pattern',
    'check_syntax',
    'passes_syntax',
]
