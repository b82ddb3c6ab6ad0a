"""
dream_candies: customer-sample extraction from the customer/invoice/invoice item CSVs.

Given a file of customer codes, copies the matching customers, their invoices,
and those invoices' line items into a parallel set of extracted CSV files.
"""
