"""Command-line interface for cmdflow."""
