"""
Filtered extraction of one master file into its extracted counterpart.

**Conceptual**: Each pass of the pipeline streams one master file (customers,
invoices, or invoice items) and copies the rows whose key column is a member
of a key set into a destination file. The pass is also where keys for the
next pass are collected: while filtering invoices by customer code, the
invoice code of every matched row is harvested so the invoice item pass can
filter by it.

**Functionally**:
  - Source is read one line at a time; nothing is materialised beyond a line.
  - The header is validated before the destination is touched, so a file
    with a bad header produces no output at all.
  - Matched rows are copied verbatim, in source order. Input order is
    irrelevant to matching (set membership), so permuting a master file only
    permutes the extracted rows.
  - Harvested keys are returned raw: possibly duplicated, in order of
    appearance. Deduplication is the next stage's job (KeySet does it).

**Malformed rows**: a row with no comma, or with fewer fields than the key or
harvest column requires, is skipped silently (counted in rows_skipped and
logged at DEBUG). This mirrors the long-standing behaviour of treating an
unparseable row as "no match" rather than as a fatal error.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from dream_candies.data.codec import (
    decode_field,
    encode_line,
    open_for_read,
    open_for_write,
    split_record,
    strip_line_ending,
)
from dream_candies.data.errors import ExtractionIOError
from dream_candies.data.keys import KeySet
from dream_candies.data.schemas import SchemaHeader, validate_header

LOGGER = logging.getLogger(__name__)

# A record must contain at least one separator to be considered splittable.
MIN_RECORD_FIELDS = 2


@dataclass
class FilteredExtraction:
    """
    Outcome of one filtered extraction pass.

    Attributes:
        source: Master file that was read.
        destination: Extracted file that was written.
        rows_read: Data rows read from the source (header excluded).
        rows_written: Data rows copied to the destination (header excluded).
        rows_skipped: Malformed rows ignored (no comma / too few fields).
        harvested_keys: Values of the harvest column from matched rows, in
                        source order, duplicates kept. Empty when no harvest
                        column was configured.
    """
    source: Path
    destination: Path
    rows_read: int = 0
    rows_written: int = 0
    rows_skipped: int = 0
    harvested_keys: list[str] = field(default_factory=list)


def _check_column_index(schema: SchemaHeader, index: int, role: str) -> None:
    if not 0 <= index < len(schema.columns):
        raise ValueError(
            f"{role} column index {index} is out of range for {schema.name} "
            f"schema with columns {list(schema.columns)}"
        )


def extract_filtered(
    source_path: Path | str,
    dest_path: Path | str,
    schema: SchemaHeader,
    key_column_index: int,
    key_set: KeySet,
    harvest_column_index: int | None = None,
) -> FilteredExtraction:
    """
    Copy the rows of `source_path` whose key column is in `key_set` to `dest_path`.

    **Process**:
      1. Open the source (failure -> ExtractionIOError).
      2. Validate its header against `schema` (failure -> HeaderMismatchError,
         destination untouched).
      3. Create/truncate the destination and write the header line.
      4. For every remaining line: split, decode the key field, test
         membership; on a match copy the line verbatim and, if configured,
         harvest the decoded `harvest_column_index` field.

    Args:
        source_path: Master file to read.
        dest_path: Extracted file to create (parent directory is created).
        schema: Header contract of the master file.
        key_column_index: Position of the join key column (0 for every master file).
        key_set: Keys to keep.
        harvest_column_index: Optional position of a secondary key column to
                              collect from matched rows.

    Returns:
        FilteredExtraction with row counts and harvested keys.

    Raises:
        ExtractionIOError: If the source cannot be read or the destination
                           cannot be written.
        HeaderMismatchError: If the source header is not exactly schema.literal.
        ValueError: If a column index is outside the schema.
    """
    source_path = Path(source_path)
    dest_path = Path(dest_path)

    _check_column_index(schema, key_column_index, "key")
    required_fields = key_column_index + 1
    if harvest_column_index is not None:
        _check_column_index(schema, harvest_column_index, "harvest")
        required_fields = max(required_fields, harvest_column_index + 1)
    required_fields = max(required_fields, MIN_RECORD_FIELDS)

    try:
        source = open_for_read(source_path)
    except OSError as e:
        raise ExtractionIOError(
            f"Cannot open {schema.name} file {source_path}. Error: {e}",
            path=source_path,
        ) from e

    with source:
        header = validate_header(source, schema, context=str(source_path))

        try:
            destination = open_for_write(dest_path)
        except OSError as e:
            raise ExtractionIOError(
                f"Cannot create extracted {schema.name} file {dest_path}. Error: {e}",
                path=dest_path,
            ) from e

        result = FilteredExtraction(source=source_path, destination=dest_path)

        with destination:
            try:
                destination.write(encode_line(header))

                for line in source:
                    record = strip_line_ending(line)
                    result.rows_read += 1

                    fields = split_record(record)
                    if len(fields) < required_fields:
                        result.rows_skipped += 1
                        LOGGER.debug(
                            "%s line %d: skipping malformed row %r",
                            source_path, result.rows_read + 1, record,
                        )
                        continue

                    if decode_field(fields[key_column_index]) not in key_set:
                        continue

                    destination.write(encode_line(record))
                    result.rows_written += 1

                    if harvest_column_index is not None:
                        result.harvested_keys.append(decode_field(fields[harvest_column_index]))

            except OSError as e:
                raise ExtractionIOError(
                    f"Failed extracting {schema.name} rows from {source_path} "
                    f"to {dest_path}. Error: {e}",
                    path=source_path,
                ) from e

    LOGGER.info(
        "Extracted %d of %d %s rows to %s",
        result.rows_written, result.rows_read, schema.name, dest_path,
    )
    return result
