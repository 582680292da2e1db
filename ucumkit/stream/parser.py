"""
Chunk Parser
============

Parse incoming data chunks (parquet/csv) into expression rows.
Uses Polars for parquet and CSV handling.
"""

import io
from typing import List, Dict, Any

EXPRESSION_COLUMN = 'expression'


def parse_chunk(chunk: bytes, format: str = 'parquet') -> List[Dict[str, Any]]:
    """
    Parse a chunk of data into rows.

    Args:
        chunk: Raw bytes
        format: 'parquet' or 'csv'

    Returns:
        List of row dicts; each holds at least an 'expression' key

    Raises:
        ValueError: Unknown format, unreadable bytes or no expression column
    """
    if format == 'parquet':
        rows = _parse_parquet(chunk)
    elif format == 'csv':
        rows = _parse_csv(chunk)
    else:
        raise ValueError(f"Unknown format: {format}")

    if rows and EXPRESSION_COLUMN not in rows[0]:
        raise ValueError(
            f"Missing '{EXPRESSION_COLUMN}' column. Found: {', '.join(rows[0])}"
        )
    return rows


def _parse_parquet(chunk: bytes) -> List[Dict[str, Any]]:
    """Parse parquet bytes using Polars."""
    import polars as pl

    try:
        df = pl.read_parquet(io.BytesIO(chunk))
    except Exception as e:
        raise ValueError(f"Failed to parse parquet: {e}")
    return df.to_dicts()


def _parse_csv(chunk: bytes) -> List[Dict[str, Any]]:
    """Parse CSV bytes using Polars. Every column is read as text."""
    import polars as pl

    try:
        text = chunk.decode('utf-8')
        df = pl.read_csv(io.StringIO(text), infer_schema_length=0)
    except Exception as e:
        raise ValueError(f"Failed to parse CSV: {e}")
    return df.to_dicts()


def detect_format(chunk: bytes) -> str:
    """Detect format from magic bytes."""
    # Parquet magic bytes
    if chunk[:4] == b'PAR1':
        return 'parquet'

    # CSV heuristic (header names the expression column)
    try:
        text = chunk[:1000].decode('utf-8')
    except UnicodeDecodeError:
        return 'parquet'

    if EXPRESSION_COLUMN in text.lower():
        return 'csv'

    # Default to parquet
    return 'parquet'
