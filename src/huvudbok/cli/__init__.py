"""Command-line interface for huvudbok."""
