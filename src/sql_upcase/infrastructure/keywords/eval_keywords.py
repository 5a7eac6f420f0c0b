"""
Eval-string prefixes per dialect.

An eval string is a string literal whose contents the server executes as
dialect code, e.g. ``EXECUTE 'select 1'`` in PL/pgSQL or
``EXEC sp_executesql N'select 1'`` in T-SQL. A string is an eval string when
the text before its opening delimiter, trailing whitespace ignored, ends with
one of the dialect's prefixes.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from sql_upcase.domain.capitalization.tokens import WordSyntax
from sql_upcase.domain.models import Dialect
from sql_upcase.infrastructure.keywords.tables import KeywordTablesConfig


class EvalKeywordTable:
    """Ordered eval prefixes keyed by dialect."""

    def __init__(self, prefixes: Mapping[Dialect, Iterable[str]]):
        table: Dict[Dialect, Tuple[str, ...]] = {}
        for dialect, values in prefixes.items():
            cleaned = tuple(p.rstrip() for p in values if p.strip())
            if cleaned:
                table[dialect] = cleaned
        self._table: Mapping[Dialect, Tuple[str, ...]] = MappingProxyType(table)

    @classmethod
    def from_tables(cls, tables: KeywordTablesConfig) -> "EvalKeywordTable":
        return cls({dialect: tables.eval_prefixes_for(dialect) for dialect in Dialect})

    def prefixes_for(self, dialect: Dialect) -> Tuple[str, ...]:
        return self._table.get(dialect, ())

    def longest_prefix(self, dialect: Dialect) -> int:
        return max((len(p) for p in self.prefixes_for(dialect)), default=0)

    def match(
        self, dialect: Dialect, text_before: str, syntax: WordSyntax
    ) -> Optional[str]:
        """
        Find the prefix that ``text_before`` ends with.

        Matching is case-insensitive. A prefix starting with a word
        constituent only matches at a word boundary, so ``myexecute '...'``
        is not an eval string.

        Args:
            dialect: Dialect whose prefixes apply
            text_before: Text preceding the string's opening delimiter
            syntax: Word constituent rules for the boundary check

        Returns:
            The matched prefix as declared, or None
        """
        text = text_before.rstrip()
        folded = text.lower()
        for prefix in self.prefixes_for(dialect):
            if not folded.endswith(prefix.lower()):
                continue
            head = text[: len(text) - len(prefix)]
            if head and syntax.is_constituent(prefix[0]) and syntax.is_constituent(head[-1]):
                continue
            return prefix
        return None
