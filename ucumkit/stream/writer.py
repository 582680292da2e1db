"""
Parquet Stream Writer
=====================

Write parquet output using Polars.
"""

import io
from typing import Dict, Any, List

# Output columns for canonized batches, in order, with their polars dtype names
CANONICAL_SCHEMA = {
    'expression': 'Utf8',
    'valid': 'Boolean',
    'units': 'Utf8',
    'magnitude': 'Float64',
    'error': 'Utf8',
}
CANONICAL_COLUMNS = list(CANONICAL_SCHEMA)


class ParquetStreamWriter:
    """
    Write parquet incrementally using Polars.

    Accumulates rows in memory, flushes to output when finalized.
    """

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []

    def write_row(self, **kwargs) -> None:
        """Write a result row."""
        self.rows.append(kwargs)

    def finalize(self) -> bytes:
        """Complete the parquet file and return bytes."""
        import polars as pl

        schema = {name: getattr(pl, dtype) for name, dtype in CANONICAL_SCHEMA.items()}

        try:
            df = pl.DataFrame(self.rows, schema=schema)
            buffer = io.BytesIO()
            df.write_parquet(buffer)
        except Exception as e:
            raise ValueError(f"Failed to write parquet: {e}")
        return buffer.getvalue()
