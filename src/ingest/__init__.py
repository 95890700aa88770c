"""Export ingestion pipeline.

This module retrieves, extracts, and parses the export archive.
It hands transformed film records to the store layer.
"""
