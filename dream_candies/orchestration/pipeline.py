"""
Customer-sample extraction pipeline.

**Conceptual**: Extracts every record related to a sample of customers from
the three master files, following the foreign-key chain

    customer sample -> customers
                    -> invoices      (harvesting invoice codes)
                                     -> invoice items

**Sequencing**: The stages run strictly in order and the first failure aborts
the run. The invoice item pass can only start once the invoice pass has run
to completion, because its key set is built from the invoice codes harvested
from matched invoice rows. Since only rows already filtered by customer are
harvested, every extracted invoice item belongs to an extracted invoice,
which belongs to a sampled customer; no separate re-validation is needed.

**Failure semantics**: run_extraction() raises the first ExtractionError.
extract_customer_data() is the boolean entry point: True iff every stage
succeeded. Destination files written by stages that ran before a failure are
left on disk; the overall result still reports failure.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dream_candies.config.settings import ExtractionSettings, get_settings
from dream_candies.data.errors import ExtractionError
from dream_candies.data.extractor import FilteredExtraction, extract_filtered
from dream_candies.data.keys import KeySet, load_key_set
from dream_candies.data.schemas import (
    CUSTOMER_SCHEMA,
    INVOICE_ITEM_SCHEMA,
    INVOICE_SCHEMA,
    SEED_SCHEMA,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionReport:
    """
    Everything a successful run produced.

    Attributes:
        seed_path: Customer sample file the run started from.
        customer_codes: Deduplicated seed key set.
        invoice_codes: Deduplicated key set of invoice codes harvested from
                       the extracted invoices.
        customers: Outcome of the customer pass.
        invoices: Outcome of the invoice pass.
        invoice_items: Outcome of the invoice item pass.
    """
    seed_path: Path
    customer_codes: KeySet
    invoice_codes: KeySet
    customers: FilteredExtraction
    invoices: FilteredExtraction
    invoice_items: FilteredExtraction

    @property
    def stages(self) -> dict[str, FilteredExtraction]:
        """Pass outcomes keyed by stage name, in execution order."""
        return {
            "customer": self.customers,
            "invoice": self.invoices,
            "invoice_item": self.invoice_items,
        }


def run_extraction(
    seed_path: Path | str,
    settings: Optional[ExtractionSettings] = None,
) -> ExtractionReport:
    """
    Run the full extraction for the customers listed in `seed_path`.

    **Steps**:
      1. Load the customer sample into a KeySet ("CUSTOMER_CODE" header).
      2. Extract customers whose CUSTOMER_CODE is in the sample.
      3. Extract invoices whose CUSTOMER_CODE is in the sample, harvesting
         their INVOICE_CODE values.
      4. Deduplicate the harvested invoice codes into a KeySet.
      5. Extract invoice items whose INVOICE_CODE is in that KeySet.

    Args:
        seed_path: Path to the customer sample CSV.
        settings: Master/extracted file locations. Defaults to get_settings().

    Returns:
        ExtractionReport describing every stage.

    Raises:
        ExtractionIOError: If any file cannot be read or written.
        HeaderMismatchError: If any file's header is not the expected literal.
    """
    settings = settings or get_settings()
    seed_path = Path(seed_path)

    customer_codes = load_key_set(seed_path, SEED_SCHEMA)
    LOGGER.info("Loaded %d customer code(s) from %s", len(customer_codes), seed_path)

    customers = extract_filtered(
        settings.customer_source,
        settings.customer_output,
        CUSTOMER_SCHEMA,
        key_column_index=CUSTOMER_SCHEMA.index_of("CUSTOMER_CODE"),
        key_set=customer_codes,
    )

    invoices = extract_filtered(
        settings.invoice_source,
        settings.invoice_output,
        INVOICE_SCHEMA,
        key_column_index=INVOICE_SCHEMA.index_of("CUSTOMER_CODE"),
        key_set=customer_codes,
        harvest_column_index=INVOICE_SCHEMA.index_of("INVOICE_CODE"),
    )

    invoice_codes = KeySet(invoices.harvested_keys)
    LOGGER.info(
        "Harvested %d invoice code(s) (%d distinct)",
        len(invoices.harvested_keys), len(invoice_codes),
    )

    invoice_items = extract_filtered(
        settings.invoice_item_source,
        settings.invoice_item_output,
        INVOICE_ITEM_SCHEMA,
        key_column_index=INVOICE_ITEM_SCHEMA.index_of("INVOICE_CODE"),
        key_set=invoice_codes,
    )

    return ExtractionReport(
        seed_path=seed_path,
        customer_codes=customer_codes,
        invoice_codes=invoice_codes,
        customers=customers,
        invoices=invoices,
        invoice_items=invoice_items,
    )


def extract_customer_data(
    seed_path: Path | str,
    settings: Optional[ExtractionSettings] = None,
) -> bool:
    """
    Create extracted files holding only the data of the sampled customers.

    Boolean wrapper around run_extraction(): returns True iff every stage
    succeeded. The failure reason is logged, not returned; callers that need
    it should call run_extraction() and catch ExtractionError. Invalid
    environment settings (e.g., an empty DREAM_CANDIES_ORIGINAL_DIR) are a
    failure too.
    """
    if settings is None:
        try:
            settings = get_settings()
        except ValueError as e:
            LOGGER.error("Invalid extraction settings: %s", e)
            return False

    try:
        run_extraction(seed_path, settings)
    except ExtractionError as e:
        LOGGER.error("Extraction failed (%s): %s", e.kind, e)
        return False
    return True
