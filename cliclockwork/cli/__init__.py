"""Command-line interface for cliclockwork."""
