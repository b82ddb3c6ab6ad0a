"""
Header contracts for the seed file and the three master files.

**Conceptual**: This module defines the "data contracts" for every file the
pipeline reads. A file is valid only if its first line is exactly the header
literal for its schema: same quotes, same comma placement, same column names,
same order. There is no normalisation (no whitespace trimming, no case
folding, no column reordering). Any deviation makes the whole file invalid
and no records from it are extracted.

**Schema descriptors**: Rather than scattering hand-written header strings
through the extractors, each file type is described once as an ordered list
of column names (SchemaHeader). The literal is rendered from the columns,
which keeps the contracts easy to read, test, and extend while comparing
exactly the same bytes the master files carry.

**Usage**: validate_header() is called on a freshly opened handle before any
record is read. On success the handle is positioned on the first record.
"""

from dataclasses import dataclass
from typing import IO

from dream_candies.data.codec import FIELD_SEPARATOR, strip_line_ending
from dream_candies.data.errors import ExtractionIOError, HeaderMismatchError


@dataclass(frozen=True)
class SchemaHeader:
    """
    Ordered column names of one file type, plus its exact header literal.

    Attributes:
        name: Human-readable file type name, used in error messages
              (e.g., "customer", "invoice").
        columns: Column names in file order (e.g., ("CUSTOMER_CODE", "FIRSTNAME")).
    """
    name: str
    columns: tuple[str, ...]

    def __post_init__(self):
        """Validate the descriptor after initialization."""
        if not self.columns:
            raise ValueError(f"Schema '{self.name}' must have at least one column")
        for column in self.columns:
            if not column or '"' in column or FIELD_SEPARATOR in column:
                raise ValueError(
                    f"Schema '{self.name}' has an invalid column name: {column!r}. "
                    f"Column names must be non-empty and contain no quotes or commas."
                )

    @property
    def literal(self) -> str:
        """The exact first line a file of this type must start with."""
        return FIELD_SEPARATOR.join(f'"{column}"' for column in self.columns)

    def matches(self, line: str) -> bool:
        """True iff `line` (without terminator) equals the header literal byte for byte."""
        return line == self.literal

    def index_of(self, column: str) -> int:
        """
        Position of a column in this schema.

        Raises:
            KeyError: If the schema has no such column.
        """
        try:
            return self.columns.index(column)
        except ValueError:
            raise KeyError(
                f"Schema '{self.name}' has no column {column!r}. "
                f"Columns: {list(self.columns)}"
            ) from None


# Seed file: one quoted customer code per line
SEED_SCHEMA = SchemaHeader("customer sample", ("CUSTOMER_CODE",))

# Master files
CUSTOMER_SCHEMA = SchemaHeader("customer", ("CUSTOMER_CODE", "FIRSTNAME", "LASTNAME"))
INVOICE_SCHEMA = SchemaHeader("invoice", ("CUSTOMER_CODE", "INVOICE_CODE", "AMOUNT", "DATE"))
INVOICE_ITEM_SCHEMA = SchemaHeader("invoice item", ("INVOICE_CODE", "ITEM_CODE", "AMOUNT", "QUANTITY"))


def validate_header(
    handle: IO[str],
    schema: SchemaHeader,
    context: str | None = None,
) -> str:
    """
    Read exactly one line from `handle` and check it against the schema literal.

    **Functionally**:
      - Reads one line and strips its trailing "\\n" (nothing else).
      - Compares it to schema.literal byte for byte.
      - On success, returns the header line; the handle is now positioned
        immediately after the header.
      - An empty file reads "" and therefore fails like any other mismatch.

    Args:
        handle: Text handle opened with codec.open_for_read().
        schema: The header contract the file must satisfy.
        context: Optional source description (usually the file path) for
                 error messages.

    Returns:
        The validated header line, without its terminator.

    Raises:
        HeaderMismatchError: If the first line is not exactly schema.literal.
        ExtractionIOError: If the line cannot be read.
    """
    ctx = f"{context}: " if context else ""

    try:
        header = strip_line_ending(handle.readline())
    except OSError as e:
        raise ExtractionIOError(
            f"{ctx}Failed to read {schema.name} header. Error: {e}",
            path=context,
        ) from e

    if not schema.matches(header):
        raise HeaderMismatchError(
            f"{ctx}Unexpected {schema.name} header. "
            f"Expected {schema.literal!r}, found {header!r}.",
            path=context,
            expected=schema.literal,
            found=header,
        )

    return header
