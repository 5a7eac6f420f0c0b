"""Command-line interface for sql-upcase."""
