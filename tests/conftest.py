"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import dream_candies...' works,
and provides fixtures that lay out the reference data set under tmp_path.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from dream_candies.config.settings import ExtractionSettings, reset_settings
from tests.fixture_data import (
    CUSTOMER_FILE,
    CUSTOMER_SAMPLE,
    INVOICE_FILE,
    INVOICE_ITEM_FILE,
    write_text,
)


@pytest.fixture
def settings(tmp_path) -> ExtractionSettings:
    """Settings pointing at tmp_path/original_files and tmp_path/extracted_files."""
    return ExtractionSettings(
        original_dir=tmp_path / "original_files",
        extracted_dir=tmp_path / "extracted_files",
    )


@pytest.fixture
def master_files(settings) -> ExtractionSettings:
    """Write the reference master files and return the settings locating them."""
    write_text(settings.customer_source, CUSTOMER_FILE)
    write_text(settings.invoice_source, INVOICE_FILE)
    write_text(settings.invoice_item_source, INVOICE_ITEM_FILE)
    return settings


@pytest.fixture
def seed_path(tmp_path) -> Path:
    """The reference customer sample (both customers)."""
    return write_text(tmp_path / "customer_samples" / "customer_sample.csv", CUSTOMER_SAMPLE)


@pytest.fixture(autouse=True)
def _fresh_settings_singleton():
    """Each test starts (and ends) with an unloaded settings singleton."""
    reset_settings()
    yield
    reset_settings()
