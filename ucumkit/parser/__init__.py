"""
ucumkit Parser
==============

Expression string to expanded tree, in stages:

    tokenizer  -> tokens
    syntax     -> structural rules
    operand    -> catalog resolution of one token
    semantics  -> case / special / arbitrary rules
    tree       -> postfix, tree building, dissolution, cascade
"""

from .tokenizer import tokenize, is_operator, is_group, is_operand
from .syntax import check_syntax, passes_syntax
from .operand import Node, STRATEGIES, resolve_operand
from .semantics import (
    PURPOSES,
    check_purpose,
    check_validity,
    check_canonization,
    check_operations,
)
from .tree import TreeBuilder, to_postfix, cascade, generate_root, walk

__all__ = [
    'tokenize', 'is_operator', 'is_group', 'is_operand',
    'check_syntax', 'passes_syntax',
    'Node', 'STRATEGIES', 'resolve_operand',
    'PURPOSES', 'check_purpose', 'check_validity', 'check_canonization', 'check_operations',
    'TreeBuilder', 'to_postfix', 'cascade', 'generate_root', 'walk',
]
