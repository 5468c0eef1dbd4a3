"""Command-line interface for styletrack."""
