"""
Test Batch Canonization
=======================
"""

import io

import pytest


def test_detect_format():
    from ucumkit.stream import detect_format

    assert detect_format(b"PAR1....") == 'parquet'
    assert detect_format(b"id,expression\n1,m\n") == 'csv'


def test_parse_csv_reads_text():
    """Numeric-looking expressions stay strings."""
    from ucumkit.stream import parse_chunk

    rows = parse_chunk(b"expression\n10\nkm\n", 'csv')
    assert rows == [{'expression': '10'}, {'expression': 'km'}]


def test_parse_requires_expression_column():
    from ucumkit.stream import parse_chunk

    with pytest.raises(ValueError, match="expression"):
        parse_chunk(b"unit\nm\n", 'csv')


def test_unknown_format():
    from ucumkit.stream import parse_chunk

    with pytest.raises(ValueError):
        parse_chunk(b"", 'xml')


def test_writer_schema():
    import polars as pl
    from ucumkit.stream import CANONICAL_COLUMNS, ParquetStreamWriter

    writer = ParquetStreamWriter()
    writer.write_row(expression='m', valid=True, units='m', magnitude=1.0, error=None)
    df = pl.read_parquet(io.BytesIO(writer.finalize()))

    assert df.columns == CANONICAL_COLUMNS
    assert df.height == 1


def test_empty_writer_still_writes_schema():
    import polars as pl
    from ucumkit.stream import CANONICAL_COLUMNS, ParquetStreamWriter

    df = pl.read_parquet(io.BytesIO(ParquetStreamWriter().finalize()))
    assert df.columns == CANONICAL_COLUMNS
    assert df.height == 0


def test_writer_dtypes_follow_schema():
    import polars as pl
    from ucumkit.stream import CANONICAL_SCHEMA, ParquetStreamWriter

    df = pl.read_parquet(io.BytesIO(ParquetStreamWriter().finalize()))
    assert list(CANONICAL_SCHEMA) == df.columns
    assert df.schema['expression'] == pl.Utf8
    assert df.schema['valid'] == pl.Boolean
    assert df.schema['magnitude'] == pl.Float64


def test_canonize_batch_out_of_range_row(ucum):
    """A zero literal in the denominator is a row error, not a failed batch."""
    import polars as pl
    from ucumkit.server.handler import canonize_batch

    df = pl.read_parquet(io.BytesIO(canonize_batch(b"expression\nm/0\nkm400\nm\n", 'csv', ucum)))

    assert df['valid'].to_list() == [False, False, True]
    assert df['error'].to_list() == ['MagnitudeOutOfRange', 'MagnitudeOutOfRange', None]
    assert df['magnitude'][0] is None


def test_canonize_row_validates_once(catalog):
    from ucumkit.server.handler import canonize_row
    from ucumkit.service import UcumService

    class CountingService(UcumService):
        calls = 0

        def validate(self, expression, purpose='validity'):
            CountingService.calls += 1
            return super().validate(expression, purpose)

    service = CountingService(catalog=catalog)
    row = canonize_row("km/h", service)

    assert CountingService.calls == 1
    assert row['valid'] is True
    assert row['units'] == "m.s-1"
    assert canonize_row("[iU]", service)['error'] == 'ArbitraryUnitNotEligible'


def test_canonize_batch_parquet_round_trip(ucum):
    import polars as pl
    from ucumkit.server.handler import canonize_batch

    source = io.BytesIO()
    pl.DataFrame({'expression': ['km/h', '[iU]', 'm..s']}).write_parquet(source)

    df = pl.read_parquet(io.BytesIO(canonize_batch(source.getvalue(), service=ucum)))

    assert df['valid'].to_list() == [True, False, False]
    assert df['magnitude'][0] == pytest.approx(1000 / 3600)
    assert df['error'].to_list() == [None, 'ArbitraryUnitNotEligible', 'SyntaxViolation']


def test_lambda_handler():
    import base64

    import polars as pl
    from ucumkit.server.handler import lambda_handler

    response = lambda_handler({'body': 'expression\nkm\n', 'headers': {'X-Format': 'csv'}}, None)
    assert response['statusCode'] == 200

    df = pl.read_parquet(io.BytesIO(base64.b64decode(response['body'])))
    assert df['units'].to_list() == ['m']


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
