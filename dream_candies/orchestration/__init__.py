"""
Multi-stage extraction pipeline.

Coordinates the customer, invoice, and invoice item passes in dependency
order, wiring each pass's key set into the next.
"""
