"""Command-line management of session logs."""
