"""
Line codec, header contracts, key sets, and filtered extraction.

Handles reading the quoted-field CSVs line by line, enforcing exact header
literals, and copying matching records verbatim to destination files.
"""
