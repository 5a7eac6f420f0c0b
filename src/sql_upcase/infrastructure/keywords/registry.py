"""
Per-document keyword registry.

Keyword sets are built lazily from the host's keyword sources and cached per
document. The cache entry remembers the dialect it was built for; the host
integration layer calls ``invalidate`` when a document's dialect changes, and
a lookup for a different dialect than the cached one rebuilds synchronously.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Mapping, Optional, Sequence, Tuple

from sql_upcase.domain.models import Dialect, DocumentMode
from sql_upcase.domain.protocols import HostProtocol
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)

SOURCE_KEY_VALUE = "key_value"
SOURCE_NATIVE = "native"
SOURCE_ADDITION = "addition"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class KeywordSet:
    """Immutable lowercase keyword -> canonical uppercase mapping for one dialect."""

    dialect: Dialect
    source: str
    words: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_words(
        cls, dialect: Dialect, words: Iterable[str], source: str
    ) -> "KeywordSet":
        mapping: Dict[str, str] = {}
        for word in words:
            word = word.strip()
            if word:
                mapping[word.lower()] = word.upper()
        return cls(dialect=dialect, source=source, words=MappingProxyType(mapping))

    def canonical(self, word: str) -> Optional[str]:
        """Canonical form of ``word`` if the whole word is a keyword."""
        return self.words.get(word.lower())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self.words

    def __len__(self) -> int:
        return len(self.words)


class KeywordRegistry:
    """
    Cache of KeywordSets keyed by document identity.

    Source resolution, most specific first:
    1. key/value command list when the document is the key/value variant
    2. the host's native keyword table when the document is natively query
       text in the requested dialect
    3. the dialect's synthesized keyword addition, or the ANSI one when empty
    """

    def __init__(self, host: HostProtocol) -> None:
        self._host = host
        self._cache: Dict[Hashable, KeywordSet] = {}

    def get_keywords(
        self, document: Hashable, dialect: Optional[Dialect] = None
    ) -> KeywordSet:
        """
        Return the KeywordSet for ``document`` under ``dialect``.

        Args:
            document: Host document handle
            dialect: Dialect to use; the host's active dialect when omitted

        Returns:
            Cached or freshly built KeywordSet
        """
        if dialect is None:
            dialect = self._host.active_dialect(document)

        cached = self._cache.get(document)
        if cached is not None:
            if cached.dialect is dialect:
                return cached
            logger.debug(
                "keywords.cache_stale",
                cached_dialect=cached.dialect.value,
                dialect=dialect.value,
            )

        source, words = self._resolve_source(document, dialect)
        keyword_set = KeywordSet.from_words(dialect, words, source)
        self._cache[document] = keyword_set
        logger.debug(
            "keywords.cache_built",
            dialect=dialect.value,
            source=source,
            keyword_count=len(keyword_set),
        )
        return keyword_set

    def _resolve_source(
        self, document: Hashable, dialect: Dialect
    ) -> Tuple[str, Sequence[str]]:
        mode = self._host.document_mode(document)
        if dialect.is_key_value or mode is DocumentMode.KEY_VALUE:
            return SOURCE_KEY_VALUE, self._host.redis_like_keywords()

        # The native table describes the document's own dialect only
        if dialect is self._host.active_dialect(document):
            native = self._host.native_query_language_keywords(document)
            if native is not None:
                return SOURCE_NATIVE, native

        words = self._host.dialect_keyword_addition(dialect)
        if words:
            return SOURCE_ADDITION, words

        logger.info(
            "keywords.dialect_table_missing",
            dialect=dialect.value,
            fallback=Dialect.default().value,
        )
        return SOURCE_DEFAULT, self._host.dialect_keyword_addition(Dialect.default())

    def invalidate(self, document: Hashable) -> None:
        """Drop the cached set for ``document``; the next lookup rebuilds it."""
        if self._cache.pop(document, None) is not None:
            logger.debug("keywords.cache_invalidated")

    def discard(self, document: Hashable) -> None:
        """Forget ``document`` entirely (document closed)."""
        self._cache.pop(document, None)

    def is_cached(self, document: Hashable) -> bool:
        return document in self._cache
