"""Configuration management for sql-upcase.

Usage:
    >>> from sql_upcase.config import get_settings
    >>> settings = get_settings()
    >>> settings.default_dialect
    'ansi'
"""

from sql_upcase.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
