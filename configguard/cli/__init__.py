"""Command-line interface for ConfigGuard."""
