"""Command-line interface for BaselineKit."""
