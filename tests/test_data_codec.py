"""
Tests for the quoted-field line codec (dream_candies/data/codec.py).
"""

from dream_candies.data.codec import (
    decode_field,
    encode_line,
    open_for_read,
    open_for_write,
    split_record,
    strip_line_ending,
)
from tests.fixture_data import read_text, write_text


def test_decode_field_strips_surrounding_quotes():
    assert decode_field('"CUST0000010231"') == "CUST0000010231"


def test_decode_field_keeps_inner_characters_untouched():
    """Only the first and last character are removed; spaces are data."""
    assert decode_field('" IN0000001 "') == " IN0000001 "
    assert decode_field('""') == ""


def test_split_record_splits_on_every_comma():
    fields = split_record('"CUST0000010231","IN0000001","105.50","01-Jan-2016"')
    assert fields == ['"CUST0000010231"', '"IN0000001"', '"105.50"', '"01-Jan-2016"']


def test_split_record_without_comma_is_single_field():
    assert split_record('"CUSTOMER_CODE"') == ['"CUSTOMER_CODE"']
    assert split_record("") == [""]


def test_strip_line_ending_only_removes_newline():
    assert strip_line_ending('"A","B"\n') == '"A","B"'
    assert strip_line_ending('"A","B"') == '"A","B"'
    # Carriage returns are data, not terminators
    assert strip_line_ending('"A","B"\r\n') == '"A","B"\r'


def test_encode_line_appends_newline():
    assert encode_line('"A"') == '"A"\n'


def test_open_for_write_creates_parent_directory(tmp_path):
    """Extracted files can be written into a directory that does not exist yet."""
    target = tmp_path / "nested" / "extracted_files" / "out.csv"

    with open_for_write(target) as f:
        f.write('"A"\n')

    assert read_text(target) == '"A"\n'


def test_open_for_read_does_not_translate_newlines(tmp_path):
    path = write_text(tmp_path / "crlf.csv", '"A"\r\n"B"\r\n')

    with open_for_read(path) as f:
        lines = list(f)

    assert lines == ['"A"\r\n', '"B"\r\n']


def test_open_for_read_keeps_bare_carriage_return_inside_line(tmp_path):
    path = write_text(tmp_path / "cr.csv", '"C1","A\rB","X"\n"C2","D","E"\n')

    with open_for_read(path) as f:
        lines = list(f)

    assert lines == ['"C1","A\rB","X"\n', '"C2","D","E"\n']


def test_undecodable_bytes_round_trip_through_read_and_write(tmp_path):
    source = tmp_path / "latin1.csv"
    source.write_bytes(b'"Jos\xe9"\n')
    target = tmp_path / "copy.csv"

    with open_for_read(source) as src, open_for_write(target) as dst:
        dst.write(src.read())

    assert target.read_bytes() == b'"Jos\xe9"\n'
