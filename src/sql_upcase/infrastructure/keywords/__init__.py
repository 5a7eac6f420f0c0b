"""
Keyword sources: dialect tables, the per-document registry, the user
blacklist and eval-string prefixes.

Usage:
    from sql_upcase.infrastructure.keywords import load_keyword_tables

    tables = load_keyword_tables()
    tables.keywords_for(Dialect.POSTGRES)
"""

from sql_upcase.infrastructure.keywords.blacklist import (
    Blacklist,
    load_blacklist,
    load_blacklist_file,
)
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable
from sql_upcase.infrastructure.keywords.registry import KeywordRegistry, KeywordSet
from sql_upcase.infrastructure.keywords.tables import (
    KeywordTablesConfig,
    clear_keyword_table_cache,
    load_keyword_tables,
)

__all__ = [
    "Blacklist",
    "EvalKeywordTable",
    "KeywordRegistry",
    "KeywordSet",
    "KeywordTablesConfig",
    "clear_keyword_table_cache",
    "load_blacklist",
    "load_blacklist_file",
    "load_keyword_tables",
]
