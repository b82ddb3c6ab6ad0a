"""
Post-run checks and summaries over extracted files.

Includes referential integrity checks across the extracted customer, invoice,
and invoice item files, and per-stage row count summaries.
"""
