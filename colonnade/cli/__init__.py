"""Command-line interface for Colonnade."""
