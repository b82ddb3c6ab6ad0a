"""
Exceptions raised by the extraction stages.

Every stage raises as soon as it fails; the pipeline performs no recovery and
simply lets the first error propagate. The boolean entry point and the CLI
action are the only places that catch these.
"""

from pathlib import Path


class ExtractionError(Exception):
    """
    Base class for all extraction failures.

    Attributes:
        path: The file the failing stage was working on (if known).
        kind: Short machine-readable error kind ("io" or "header_mismatch").
    """
    kind = "extraction"

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ExtractionIOError(ExtractionError):
    """
    Raised when a seed, master, or extracted file cannot be opened, read,
    or written.

    A missing seed file is always this error, never an empty key set.
    """
    kind = "io"


class HeaderMismatchError(ExtractionError):
    """
    Raised when a file's first line is not exactly the expected header literal.

    An empty file reads an empty header, so it fails here as well.

    Attributes:
        expected: The header literal the file was required to start with.
        found: The first line actually read (without its line terminator).
    """
    kind = "header_mismatch"

    def __init__(self, message: str, path: Path | str | None = None,
                 expected: str = "", found: str = ""):
        super().__init__(message, path=path)
        self.expected = expected
        self.found = found
