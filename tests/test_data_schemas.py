"""
Tests for header contracts and header validation (dream_candies/data/schemas.py).

Header comparison is strict: quotes, comma placement, column names, column
order and case must all match the expected literal exactly.
"""

import io

import pytest

from dream_candies.data.errors import ExtractionError, HeaderMismatchError
from dream_candies.data.schemas import (
    CUSTOMER_SCHEMA,
    INVOICE_ITEM_SCHEMA,
    INVOICE_SCHEMA,
    SEED_SCHEMA,
    SchemaHeader,
    validate_header,
)


# ============================================================================
# SchemaHeader
# ============================================================================

def test_schema_literals_match_master_file_headers():
    assert SEED_SCHEMA.literal == '"CUSTOMER_CODE"'
    assert CUSTOMER_SCHEMA.literal == '"CUSTOMER_CODE","FIRSTNAME","LASTNAME"'
    assert INVOICE_SCHEMA.literal == '"CUSTOMER_CODE","INVOICE_CODE","AMOUNT","DATE"'
    assert INVOICE_ITEM_SCHEMA.literal == '"INVOICE_CODE","ITEM_CODE","AMOUNT","QUANTITY"'


def test_index_of_returns_column_position():
    assert INVOICE_SCHEMA.index_of("CUSTOMER_CODE") == 0
    assert INVOICE_SCHEMA.index_of("INVOICE_CODE") == 1


def test_index_of_unknown_column_raises():
    with pytest.raises(KeyError) as exc_info:
        CUSTOMER_SCHEMA.index_of("INVOICE_CODE")

    assert "INVOICE_CODE" in str(exc_info.value)
    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__


@pytest.mark.parametrize("columns", [(), ("",), ('BAD"NAME',), ("A,B",)])
def test_schema_header_rejects_invalid_columns(columns):
    with pytest.raises(ValueError):
        SchemaHeader("broken", columns)


# ============================================================================
# validate_header
# ============================================================================

def test_validate_header_accepts_exact_literal_and_positions_cursor():
    handle = io.StringIO('"CUSTOMER_CODE","FIRSTNAME","LASTNAME"\n"CUST1","A","B"\n')

    header = validate_header(handle, CUSTOMER_SCHEMA)

    assert header == CUSTOMER_SCHEMA.literal
    # Cursor sits on the first record
    assert handle.readline() == '"CUST1","A","B"\n'


def test_validate_header_accepts_header_without_trailing_newline():
    handle = io.StringIO('"CUSTOMER_CODE"')
    assert validate_header(handle, SEED_SCHEMA) == '"CUSTOMER_CODE"'


@pytest.mark.parametrize(
    "bad_header",
    [
        '"BAD_HEADER"',
        '"customer_code"',                                    # casing
        ' "CUSTOMER_CODE"',                                   # leading whitespace
        '"CUSTOMER_CODE" ',                                   # trailing whitespace
        'CUSTOMER_CODE',                                      # quotes missing
        '"CUSTOMER_CODE"\r',                                  # CRLF line ending
        '"CUSTOMER_CODE","FIRSTNAME"',                        # extra column
    ],
)
def test_validate_header_rejects_any_deviation(bad_header):
    handle = io.StringIO(bad_header + "\n")

    with pytest.raises(HeaderMismatchError) as exc_info:
        validate_header(handle, SEED_SCHEMA, context="sample.csv")

    assert exc_info.value.expected == '"CUSTOMER_CODE"'
    assert exc_info.value.found == bad_header
    assert exc_info.value.kind == "header_mismatch"
    assert "sample.csv" in str(exc_info.value)


def test_validate_header_rejects_reordered_columns():
    handle = io.StringIO('"CUSTOMER_CODE","LASTNAME","FIRSTNAME"\n')

    with pytest.raises(HeaderMismatchError):
        validate_header(handle, CUSTOMER_SCHEMA)


def test_validate_header_on_empty_input_is_a_mismatch():
    """An empty file has an empty header, which never matches."""
    with pytest.raises(HeaderMismatchError) as exc_info:
        validate_header(io.StringIO(""), SEED_SCHEMA)

    assert exc_info.value.found == ""
    assert isinstance(exc_info.value, ExtractionError)
