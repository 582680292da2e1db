"""
Expression Tree
===============

Builds the tree for an expression and expands derived units.

Pipeline:
    1. to_postfix   - pad implicit numerators, shunting-yard ordering
    2. build        - stack evaluation into operator/operand nodes;
                      '/' negates the exponent of its right child so the
                      finished tree reads as pure multiplication
    3. dissolve     - every operand with a catalog definition gets the tree
                      of that definition as its right child (recursive)
    4. cascade      - each child's exponent is multiplied by its parent's

Example:
    "L2" -> L(2) ── l(1) ── dm(3)
    after cascade: L(2) ── l(2) ── dm(6)
"""

import logging
from typing import List, Optional

from ucumkit.catalog import Catalog
from ucumkit.errors import ExpansionTooDeep, ParenthesesImbalance, SyntaxViolation
from ucumkit.parser.operand import Node, resolve_operand
from ucumkit.parser.tokenizer import tokenize, is_operator

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def pad_division(expression: str) -> str:
    """Give every division an explicit numerator: "/s" -> "1/s", "(/s)" -> "(1/s)"."""
    if expression.startswith('/'):
        expression = '1' + expression
    return expression.replace('(/', '(1/')


def to_postfix(expression: str) -> List[str]:
    """
    Order the tokens of an expression in reverse polish notation.

    '.' and '/' share one precedence and associate to the left.

    Raises:
        ParenthesesImbalance: On a ')' without '(' or a '(' left open
    """
    stack: List[str] = []
    output: List[str] = []

    for token in tokenize(pad_division(expression)):
        if is_operator(token):
            while stack and stack[-1] != '(':
                output.append(stack.pop())
            stack.append(token)
        elif token == '(':
            stack.append(token)
        elif token == ')':
            while stack and stack[-1] != '(':
                output.append(stack.pop())
            if not stack:
                raise ParenthesesImbalance(expression)
            stack.pop()
        else:
            output.append(token)

    while stack:
        if stack[-1] == '(':
            raise ParenthesesImbalance(expression)
        output.append(stack.pop())

    return output


class TreeBuilder:
    """
    Builds fully dissolved expression trees against one catalog.

    Usage:
        builder = TreeBuilder(catalog, max_depth=32)
        root = builder.build("kg.m/s2")
    """

    def __init__(self, catalog: Catalog, max_depth: int = DEFAULT_MAX_DEPTH):
        self.catalog = catalog
        self.max_depth = max_depth

    def build(self, expression: str, depth: int = 0) -> Node:
        """
        Build the tree for an expression and every dissolution beneath it.

        Raises:
            ParenthesesImbalance: Unbalanced parentheses
            SyntaxViolation: Operators and operands do not pair up
            UnknownUnit: An operand cannot be resolved
            ExpansionTooDeep: Dissolution nested deeper than max_depth
        """
        if depth > self.max_depth:
            raise ExpansionTooDeep(
                expression,
                f"Unit dissolution exceeded depth {self.max_depth}",
            )

        stack: List[Node] = []
        operands: List[Node] = []

        for token in to_postfix(expression):
            if is_operator(token):
                if len(stack) < 2:
                    raise SyntaxViolation(expression, "Operator without two operands")
                right = stack.pop()
                left = stack.pop()
                node = Node(symbol=token, left=left, right=right)
                if token == '/':
                    right.exponent = -right.exponent
                stack.append(node)
            else:
                node = resolve_operand(token, self.catalog)
                stack.append(node)
                operands.append(node)

        if len(stack) != 1:
            raise SyntaxViolation(expression, "Operands without operator")

        for node in operands:
            if node.can_dissolve:
                logger.debug("Dissolving %s -> %s (depth %d)", node.symbol, node.dissolves_to, depth + 1)
                node.right = self.build(node.dissolves_to, depth + 1)

        return stack[0]


def cascade(root: Node) -> Node:
    """Multiply every child's exponent by its parent's, top-down."""
    pending = [root]
    while pending:
        node = pending.pop()
        for child in node.children():
            child.exponent *= node.exponent
            pending.append(child)
    return root


def generate_root(expression: str, catalog: Catalog, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Build and cascade the tree for an expression."""
    return cascade(TreeBuilder(catalog, max_depth).build(expression))


def walk(root: Optional[Node]):
    """Depth-first pre-order iteration over a tree."""
    pending = [root] if root is not None else []
    while pending:
        node = pending.pop()
        yield node
        pending.extend(reversed(node.children()))
