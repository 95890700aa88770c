"""Browser session automation.

This module signs in to the export provider and downloads the
archive through the authenticated browser context.
"""
