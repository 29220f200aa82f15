"""Command-line interface for warnhub."""
