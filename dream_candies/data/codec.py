"""
Line-level codec for the quoted-field CSV dialect used by the master files.

**Conceptual**: Every file this system touches uses one fixed dialect:
  - Every field is wrapped in double quotes: "CUST0000010231","Maria","Alba"
  - Fields are separated by bare commas.
  - Fields never contain commas, quotes, or newlines (no escaping exists).

Because the dialect is this restricted, we do not go through the csv module
or pandas on the hot path. Records are split on commas and keys are decoded
by stripping the surrounding quotes. Matched lines are never re-encoded: they
are copied verbatim so the extracted files keep the original formatting
byte for byte (only the line terminator is normalised to "\\n").

**Rule**: All file handles for master, seed, and extracted files are opened
through open_for_read/open_for_write so that encoding and newline handling
are identical at every I/O boundary.
"""

from pathlib import Path
from typing import IO

FIELD_SEPARATOR = ","
LINE_TERMINATOR = "\n"
ENCODING = "utf-8"
# Undecodable bytes map to lone surrogates and are written back unchanged.
ENCODING_ERRORS = "surrogateescape"


def decode_field(raw: str) -> str:
    """
    Strip the single leading and trailing quote from a raw field.

    No escaping is handled and the quotes are not checked: a field shorter
    than two characters, or one without quotes, is malformed input and the
    result is simply whatever slicing produces.

    Example:
        >>> decode_field('"CUST0000010231"')
        'CUST0000010231'
    """
    return raw[1:-1]


def split_record(line: str) -> list[str]:
    """
    Split a record into its raw (still quoted) fields.

    Splits on every comma. Commas inside quoted fields are not supported by
    the dialect, so no quote tracking is needed.

    Example:
        >>> split_record('"IN0000001","MEIJI","75.60","100"')
        ['"IN0000001"', '"MEIJI"', '"75.60"', '"100"']
    """
    return line.split(FIELD_SEPARATOR)


def strip_line_ending(line: str) -> str:
    """Remove one trailing "\\n" from a line read with newline translation off."""
    if line.endswith(LINE_TERMINATOR):
        return line[: -len(LINE_TERMINATOR)]
    return line


def encode_line(line: str) -> str:
    """Terminate a line for writing (lines are otherwise copied verbatim)."""
    return line + LINE_TERMINATOR


def open_for_read(path: Path | str) -> IO[str]:
    """
    Open a seed or master file for line-at-a-time reading.

    newline="\\n" makes "\\n" the only line terminator and disables newline
    translation, so a "\\r" (bare or before "\\n") stays in the line and is
    compared and copied like any other character. Bytes that are not valid
    UTF-8 are decoded with surrogateescape, so keys compare by their exact
    bytes and matched rows are written back byte for byte.

    Raises:
        OSError: If the file cannot be opened (missing, directory, permissions).
    """
    return open(Path(path), "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline=LINE_TERMINATOR)


def open_for_write(path: Path | str) -> IO[str]:
    """
    Create (or truncate) an extracted file for writing.

    Creates the parent directory if it does not exist yet. Uses the same
    surrogateescape handling as open_for_read so copied rows keep their bytes.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return open(path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="")
