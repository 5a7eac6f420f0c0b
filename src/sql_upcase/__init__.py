"""
sql-upcase: context-aware keyword capitalization for SQL and Redis-like text.

Keywords are rewritten to uppercase as they are typed (or across a region)
only when they sit in code or in an eval string of the active dialect, and
never when they are blacklisted, commented or quoted.
"""

__version__ = "0.1.0"
