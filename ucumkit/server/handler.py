"""
Batch Canonize Handler
======================

Main entry point for batch canonization.
Bytes in → Canonize → Bytes out. Nothing stored.
"""

import logging
from typing import Dict, Any, Optional

from ucumkit.errors import UcumError
from ucumkit.evaluate import CanonicalForm
from ucumkit.service import UcumService, get_service
from ucumkit.stream import (
    EXPRESSION_COLUMN,
    ParquetStreamWriter,
    detect_format,
    parse_chunk,
)

logger = logging.getLogger(__name__)


def canonize_row(expression: Optional[str], service: UcumService) -> Dict[str, Any]:
    """
    Canonize one expression into an output row.

    Returns:
        Dict with expression, valid, units, magnitude, error
    """
    result = {
        'expression': expression,
        'valid': False,
        'units': None,
        'magnitude': None,
        'error': None,
    }

    if expression is None:
        result['error'] = 'SyntaxViolation'
        return result

    try:
        canonical = CanonicalForm.from_result(service.evaluate(expression, 'canonization'))
    except UcumError as e:
        result['error'] = e.kind
        return result

    result['valid'] = True
    result['units'] = canonical.units
    result['magnitude'] = canonical.magnitude
    return result


def canonize_batch(
    data: bytes,
    format: Optional[str] = None,
    service: Optional[UcumService] = None,
) -> bytes:
    """
    Synchronous batch canonize.

    Args:
        data: Input data (parquet or csv bytes) with an 'expression' column
        format: 'parquet' or 'csv' (auto-detected if None)
        service: Service to evaluate with (process default if None)

    Returns:
        Parquet bytes with columns expression, valid, units, magnitude, error
    """
    service = service or get_service()

    if format is None:
        format = detect_format(data)

    rows = parse_chunk(data, format)
    writer = ParquetStreamWriter()

    for row in rows:
        writer.write_row(**canonize_row(row[EXPRESSION_COLUMN], service))

    logger.info("Canonized %d expressions (%s)", len(rows), format)
    return writer.finalize()


def lambda_handler(event, context):
    """AWS Lambda entry point."""
    import base64

    body = event.get('body', '')
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body)
    elif isinstance(body, str):
        body = body.encode('utf-8')

    headers = event.get('headers', {})
    format = headers.get('x-format') or headers.get('X-Format')

    result = canonize_batch(body, format)

    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/octet-stream'},
        'body': base64.b64encode(result).decode('utf-8'),
        'isBase64Encoded': True
    }
