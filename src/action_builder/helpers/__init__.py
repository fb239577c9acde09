"""Shared helpers: logging, CLI error handling and file utilities."""
