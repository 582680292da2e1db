"""
ucumkit Batch Infrastructure
============================

Bytes in, bytes out:
- parser: Parse incoming chunks (parquet/csv) into expression rows
- writer: Write canonized rows as parquet
"""

from .parser import parse_chunk, detect_format, EXPRESSION_COLUMN
from .writer import ParquetStreamWriter, CANONICAL_COLUMNS, CANONICAL_SCHEMA

__all__ = [
    'parse_chunk',
    'detect_format',
    'EXPRESSION_COLUMN',
    'ParquetStreamWriter',
    'CANONICAL_COLUMNS',
    'CANONICAL_SCHEMA',
]
