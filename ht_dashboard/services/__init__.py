"""Sync pipeline and read-side services."""
