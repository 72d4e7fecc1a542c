"""Command-line interface for importgate."""
