"""
Key sets and the seed-file loader.

**Conceptual**: A key set is the filter each extraction pass applies. The
seed key set comes from the customer sample file; the invoice key set is
built from the invoice codes harvested while extracting invoices. Both are
built once, never modified, and thrown away when the pipeline finishes.

Membership is tested with a binary search over a sorted, deduplicated tuple,
so loading a seed file with duplicates gives exactly the same key set as
loading it without them.
"""

from bisect import bisect_left
from pathlib import Path
from typing import Iterable, Iterator

from dream_candies.data.codec import decode_field, open_for_read, strip_line_ending
from dream_candies.data.errors import ExtractionIOError
from dream_candies.data.schemas import SEED_SCHEMA, SchemaHeader, validate_header


class KeySet:
    """
    Immutable, deduplicated collection of keys with O(log n) membership.

    Keys are opaque strings compared by exact equality. Iteration yields the
    keys in sorted order, but callers should not rely on any ordering.

    Example:
        >>> keys = KeySet(["CUST2", "CUST1", "CUST2"])
        >>> len(keys)
        2
        >>> "CUST1" in keys
        True
    """
    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[str] = ()):
        self._keys: tuple[str, ...] = tuple(sorted(set(keys)))

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        i = bisect_left(self._keys, key)
        return i < len(self._keys) and self._keys[i] == key

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySet):
            return NotImplemented
        return self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)

    def __repr__(self) -> str:
        return f"KeySet({list(self._keys)!r})"


def load_key_set(path: Path | str, schema: SchemaHeader = SEED_SCHEMA) -> KeySet:
    """
    Read a single-column keyed file into a KeySet.

    **Functionally**:
      - Opens the file; a missing or unreadable path is a hard failure.
      - Validates the first line against `schema` (for the customer sample
        file: "CUSTOMER_CODE" with its quotes).
      - Decodes every following line as one quoted field.
      - Collapses duplicates into a KeySet.

    A file holding only the header yields an empty KeySet; that is a valid
    sample, not an error.

    Args:
        path: Path to the seed file.
        schema: Header contract for the file (default: SEED_SCHEMA).

    Returns:
        KeySet of the decoded keys.

    Raises:
        ExtractionIOError: If the file cannot be opened or read.
        HeaderMismatchError: If the first line is not exactly schema.literal.
    """
    path = Path(path)

    try:
        handle = open_for_read(path)
    except OSError as e:
        raise ExtractionIOError(
            f"Cannot open {schema.name} file {path}. Error: {e}",
            path=path,
        ) from e

    with handle:
        validate_header(handle, schema, context=str(path))
        try:
            keys = [decode_field(strip_line_ending(line)) for line in handle]
        except OSError as e:
            raise ExtractionIOError(
                f"Failed to read {schema.name} file {path}. Error: {e}",
                path=path,
            ) from e

    return KeySet(keys)
