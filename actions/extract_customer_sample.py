#!/usr/bin/env python3
"""
Extract the customers, invoices and invoice items of a customer sample.

**Purpose**: Given a CSV of customer codes (header "CUSTOMER_CODE"), write
extracted copies of the master files that contain only rows belonging to
those customers:

    original_files/customer.csv      -> extracted_files/extracted_customer.csv
    original_files/invoice.csv       -> extracted_files/extracted_invoice.csv
    original_files/invoice_item.csv  -> extracted_files/extracted_invoice_item.csv

**Usage**:
    From project root:
    ```bash
    python actions/extract_customer_sample.py customer_samples/customer_sample.csv
    python actions/extract_customer_sample.py sample.csv --original-dir data/master --check-integrity
    ```

**Exit codes**:
  - 0: Extraction succeeded (and integrity check passed, if requested)
  - 1: Extraction failed (missing/unreadable file or unexpected header)
  - 2: Integrity check found violations

Example output:
    $ python actions/extract_customer_sample.py customer_samples/customer_sample.csv
    Extracting data for customer sample customer_samples/customer_sample.csv...
           stage  rows_read  rows_written  rows_skipped                                destination
        customer          2             2             0      extracted_files/extracted_customer.csv
         invoice          3             3             0       extracted_files/extracted_invoice.csv
    invoice_item          7             7             0  extracted_files/extracted_invoice_item.csv
    Done!
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to Python path so we can import dream_candies modules
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from dream_candies.analytics.integrity import check_referential_integrity, summarize_extraction
from dream_candies.config.settings import ExtractionSettings, get_settings
from dream_candies.data.errors import ExtractionError
from dream_candies.orchestration.pipeline import run_extraction


def parse_args(argv=None):
    """
    Parse command line arguments.

    Returns:
        Namespace with attributes: seed_path, original_dir, extracted_dir,
        check_integrity, verbose.
    """
    parser = argparse.ArgumentParser(
        description="Extract customer, invoice and invoice item rows for a customer sample",
        epilog="""
Examples:
  # Default locations (original_files/ -> extracted_files/)
  python actions/extract_customer_sample.py customer_samples/customer_sample.csv

  # Custom locations, then verify the extracted files reference each other correctly
  python actions/extract_customer_sample.py sample.csv --original-dir data/master --extracted-dir out --check-integrity
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "seed_path",
        help='CSV of customer codes with header "CUSTOMER_CODE"',
    )

    parser.add_argument(
        "--original-dir",
        type=str,
        help="Directory holding customer.csv, invoice.csv, invoice_item.csv "
             "(default: DREAM_CANDIES_ORIGINAL_DIR or original_files/)",
        default=None,
    )

    parser.add_argument(
        "--extracted-dir",
        type=str,
        help="Output directory for extracted_*.csv files "
             "(default: DREAM_CANDIES_EXTRACTED_DIR or extracted_files/)",
        default=None,
    )

    parser.add_argument(
        "--check-integrity",
        action="store_true",
        help="After extracting, verify every extracted row traces back to a sampled customer",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-stage progress and skipped rows",
    )

    return parser.parse_args(argv)


def resolve_settings(args) -> ExtractionSettings:
    """Environment/default settings with any command line overrides applied."""
    settings = get_settings()
    overrides = {}
    if args.original_dir:
        overrides["original_dir"] = Path(args.original_dir)
    if args.extracted_dir:
        overrides["extracted_dir"] = Path(args.extracted_dir)
    return replace(settings, **overrides) if overrides else settings


def main(argv=None) -> int:
    """
    Main entry point for the script.

    Returns the process exit code (see module docstring).
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = resolve_settings(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Extracting data for customer sample {args.seed_path}...")

    try:
        report = run_extraction(args.seed_path, settings)
    except ExtractionError as e:
        print(f"  ✗ Extraction failed ({e.kind}): {e}", file=sys.stderr)
        return 1

    summary = summarize_extraction(report)
    print(summary.to_string(index=False))

    skipped = int(summary["rows_skipped"].sum())
    if skipped:
        print(f"  ! skipped {skipped} malformed row(s)")

    if args.check_integrity:
        try:
            integrity = check_referential_integrity(settings, report.customer_codes)
        except ExtractionError as e:
            print(f"  ✗ Integrity check could not run ({e.kind}): {e}", file=sys.stderr)
            return 2

        if not integrity.is_consistent:
            print("  ✗ Integrity check failed:", file=sys.stderr)
            print(f"    foreign customers: {integrity.foreign_customers}", file=sys.stderr)
            print(f"    foreign invoices: {integrity.foreign_invoices}", file=sys.stderr)
            print(f"    orphan invoice items: {integrity.orphan_invoice_items}", file=sys.stderr)
            return 2
        print("  ✓ Integrity check passed")

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
