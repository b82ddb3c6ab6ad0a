"""
Configuration settings for the extraction pipeline.

**Conceptual**: This module provides a strongly-typed configuration object for
where the master files are read from and where the extracted files are
written to. Paths are passed explicitly into the pipeline instead of being
hardcoded inside each extraction pass, so tests (and callers with a different
directory layout) can point the whole run somewhere else.

**Defaults**: With nothing configured, the pipeline reads
original_files/{customer,invoice,invoice_item}.csv and writes
extracted_files/extracted_{customer,invoice,invoice_item}.csv, both
relative to the current working directory.

This module uses python-dotenv to load a .env file from the project root and
dataclasses for type safety.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); no-op if absent
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_ORIGINAL_DIR = "original_files"
DEFAULT_EXTRACTED_DIR = "extracted_files"

CUSTOMER_FILE = "customer.csv"
INVOICE_FILE = "invoice.csv"
INVOICE_ITEM_FILE = "invoice_item.csv"
EXTRACTED_PREFIX = "extracted_"


@dataclass(frozen=True)
class ExtractionSettings:
    """
    Input and output locations for one extraction run.

    **Why a settings object?**
      - No hidden global paths: every pass receives its source and
        destination from here.
      - Testable: tests build ExtractionSettings(tmp_path / "original_files",
        tmp_path / "extracted_files") instead of changing directory.

    Attributes:
        original_dir: Directory holding customer.csv, invoice.csv and
                      invoice_item.csv.
        extracted_dir: Directory the extracted_*.csv files are written to.
                       Created on demand.
    """
    original_dir: Path = Path(DEFAULT_ORIGINAL_DIR)
    extracted_dir: Path = Path(DEFAULT_EXTRACTED_DIR)

    def __post_init__(self):
        """Validate settings after initialization and coerce to Path."""
        for name in ("original_dir", "extracted_dir"):
            value = getattr(self, name)
            if value is None or str(value) == "":
                raise ValueError(f"{name} must be a non-empty path")
            # frozen dataclass: bypass __setattr__ to store the coerced value
            object.__setattr__(self, name, Path(value))

    @property
    def customer_source(self) -> Path:
        return self.original_dir / CUSTOMER_FILE

    @property
    def invoice_source(self) -> Path:
        return self.original_dir / INVOICE_FILE

    @property
    def invoice_item_source(self) -> Path:
        return self.original_dir / INVOICE_ITEM_FILE

    @property
    def customer_output(self) -> Path:
        return self.extracted_dir / f"{EXTRACTED_PREFIX}{CUSTOMER_FILE}"

    @property
    def invoice_output(self) -> Path:
        return self.extracted_dir / f"{EXTRACTED_PREFIX}{INVOICE_FILE}"

    @property
    def invoice_item_output(self) -> Path:
        return self.extracted_dir / f"{EXTRACTED_PREFIX}{INVOICE_ITEM_FILE}"

    @classmethod
    def from_env(cls) -> "ExtractionSettings":
        """
        Load extraction settings from environment variables.

        **Environment variables**:
          - DREAM_CANDIES_ORIGINAL_DIR (optional): master file directory.
            Defaults to "original_files".
          - DREAM_CANDIES_EXTRACTED_DIR (optional): output directory.
            Defaults to "extracted_files".

        Returns:
            ExtractionSettings with values loaded from environment.

        Raises:
            ValueError: If a variable is set but empty.
        """
        original_dir = os.getenv("DREAM_CANDIES_ORIGINAL_DIR", DEFAULT_ORIGINAL_DIR)
        extracted_dir = os.getenv("DREAM_CANDIES_EXTRACTED_DIR", DEFAULT_EXTRACTED_DIR)

        return cls(
            original_dir=Path(original_dir) if original_dir else original_dir,
            extracted_dir=Path(extracted_dir) if extracted_dir else extracted_dir,
        )


# Lazily loaded singleton; tests can bypass it by passing ExtractionSettings directly.
_default_settings: Optional[ExtractionSettings] = None


def get_settings() -> ExtractionSettings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached.
    Callers that need a different layout should build ExtractionSettings
    themselves and pass it to the pipeline instead.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = ExtractionSettings.from_env()

    return _default_settings


def reset_settings():
    """Reset the global settings singleton (for testing)."""
    global _default_settings
    _default_settings = None
