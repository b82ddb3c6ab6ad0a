"""
Configuration loading and validation for input and output locations.

Provides strongly typed settings objects for the master file directory and
the extracted file directory, loaded from environment variables.
"""
