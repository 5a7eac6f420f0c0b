"""Shared utilities for sql-upcase."""
