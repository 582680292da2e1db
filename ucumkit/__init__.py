"""
ucumkit - UCUM Unit Expressions
===============================

Parse, validate and canonize unit expressions written in the Unified Code
for Units of Measure.

    "kPa.l/min"  → TOKENS → TREE → CANONICAL FORM
                                   ("m2.s-3.g", 16.67)

Architecture:
    - catalog/: Unit and prefix definitions (YAML, loaded once)
    - parser/: Tokenizer, syntax and semantic rules, expression tree
    - evaluate: Magnitude and base-unit vector of a tree
    - service: Public operations (is_valid, convert, canonize, ...)
    - stream/: Batch canonization over CSV/Parquet bytes
    - server/: HTTP handlers

Usage:
    # Library
    from ucumkit import canonize, convert
    convert("[in_i]", "cm", 1)

    # CLI
    python -m ucumkit.run canonize "kg.m/s2"

    # Start server
    uvicorn ucumkit.server.routes:app --host 0.0.0.0 --port 8080
"""

__version__ = "1.0.0"

from .errors import UcumError
from .evaluate import CanonicalForm
from .service import (
    UcumService,
    get_service,
    is_valid,
    is_commensurable,
    convert,
    multiply,
    divide,
    canonize,
    canon_vector,
    display_name,
    number_to_notation,
)

__all__ = [
    'UcumError',
    'CanonicalForm',
    'UcumService',
    'get_service',
    'is_valid',
    'is_commensurable',
    'convert',
    'multiply',
    'divide',
    'canonize',
    'canon_vector',
    'display_name',
    'number_to_notation',
    '__version__',
]
