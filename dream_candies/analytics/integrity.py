"""
Referential integrity checks and summaries for extracted files.

**Conceptual**: The pipeline guarantees by construction that every extracted
invoice item belongs to an extracted invoice, and every extracted invoice
(and customer) belongs to a sampled customer. This module checks that
property after the fact, on the files actually written to disk, which makes
it useful both in tests and as a post-run sanity check from the CLI action.

Unlike the extraction passes (which stream line by line and never re-encode
rows), these checks load the extracted files with pandas. Extracted files are
small subsets, and joins/membership tests are what pandas is for.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import pandas as pd

from dream_candies.config.settings import ExtractionSettings
from dream_candies.data.codec import ENCODING, ENCODING_ERRORS
from dream_candies.data.errors import ExtractionIOError, HeaderMismatchError
from dream_candies.data.schemas import (
    CUSTOMER_SCHEMA,
    INVOICE_ITEM_SCHEMA,
    INVOICE_SCHEMA,
    SchemaHeader,
)
from dream_candies.orchestration.pipeline import ExtractionReport


@dataclass
class IntegrityReport:
    """
    Violations found across the three extracted files.

    Attributes:
        foreign_customers: Customer codes in the extracted customer file that
                           are not in the sample.
        foreign_invoices: Invoice codes in the extracted invoice file whose
                          customer is not in the sample.
        orphan_invoice_items: Invoice codes referenced by extracted invoice
                              items that do not appear in the extracted
                              invoice file.
    """
    foreign_customers: list[str] = field(default_factory=list)
    foreign_invoices: list[str] = field(default_factory=list)
    orphan_invoice_items: list[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not (self.foreign_customers or self.foreign_invoices or self.orphan_invoice_items)


def read_extracted_csv(path: Path | str, schema: SchemaHeader) -> pd.DataFrame:
    """
    Load an extracted file with every column as a string.

    keep_default_na=False keeps values such as "NA" or "" as literal strings
    instead of turning them into NaN; codes are opaque and must compare
    exactly.

    Raises:
        ExtractionIOError: If the file does not exist or cannot be parsed.
        HeaderMismatchError: If the columns are not exactly schema.columns.
    """
    path = Path(path)

    if not path.exists():
        raise ExtractionIOError(
            f"Extracted {schema.name} file not found: {path}. "
            f"Run the extraction before checking integrity.",
            path=path,
        )

    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding=ENCODING,
            encoding_errors=ENCODING_ERRORS,
        )
    except (OSError, ValueError) as e:
        raise ExtractionIOError(
            f"{path}: Failed to read extracted {schema.name} CSV. Error: {e}",
            path=path,
        ) from e

    if list(df.columns) != list(schema.columns):
        raise HeaderMismatchError(
            f"{path}: Unexpected {schema.name} columns. "
            f"Expected {list(schema.columns)}, found {list(df.columns)}.",
            path=path,
            expected=schema.literal,
            found=",".join(f'"{c}"' for c in df.columns),
        )

    return df


def check_referential_integrity(
    settings: ExtractionSettings,
    customer_codes: Iterable[str],
) -> IntegrityReport:
    """
    Verify the customer -> invoice -> invoice item chain on the extracted files.

    Args:
        settings: Locations the extraction wrote to.
        customer_codes: The sampled customer codes (e.g., report.customer_codes).

    Returns:
        IntegrityReport; check .is_consistent.

    Raises:
        ExtractionIOError / HeaderMismatchError: See read_extracted_csv().
    """
    sample = set(customer_codes)

    customers = read_extracted_csv(settings.customer_output, CUSTOMER_SCHEMA)
    invoices = read_extracted_csv(settings.invoice_output, INVOICE_SCHEMA)
    items = read_extracted_csv(settings.invoice_item_output, INVOICE_ITEM_SCHEMA)

    foreign_customers = customers.loc[~customers["CUSTOMER_CODE"].isin(sample), "CUSTOMER_CODE"]
    foreign_invoices = invoices.loc[~invoices["CUSTOMER_CODE"].isin(sample), "INVOICE_CODE"]
    orphan_items = items.loc[~items["INVOICE_CODE"].isin(invoices["INVOICE_CODE"]), "INVOICE_CODE"]

    return IntegrityReport(
        foreign_customers=sorted(foreign_customers.unique()),
        foreign_invoices=sorted(foreign_invoices.unique()),
        orphan_invoice_items=sorted(orphan_items.unique()),
    )


def summarize_extraction(report: ExtractionReport) -> pd.DataFrame:
    """
    One row per extraction stage with its row counts and destination.

    Example:
        >>> summarize_extraction(report)
                  stage  rows_read  rows_written  rows_skipped                                destination
        0      customer          2             2             0      extracted_files/extracted_customer.csv
        1       invoice          3             3             0       extracted_files/extracted_invoice.csv
        2  invoice_item          7             7             0  extracted_files/extracted_invoice_item.csv
    """
    rows = [
        {
            "stage": stage,
            "rows_read": outcome.rows_read,
            "rows_written": outcome.rows_written,
            "rows_skipped": outcome.rows_skipped,
            "destination": str(outcome.destination),
        }
        for stage, outcome in report.stages.items()
    ]
    return pd.DataFrame(
        rows,
        columns=["stage", "rows_read", "rows_written", "rows_skipped", "destination"],
    )
