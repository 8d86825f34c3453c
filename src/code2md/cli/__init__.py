"""Command-line interface for code2md."""
