"""Film persistence layer.

This module replaces the stored film table with each sync's records.
It defines the gateway interface and its Postgres implementation.
"""
