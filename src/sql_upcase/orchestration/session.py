"""
Capitalization session: one host, one set of collaborators.

``CapitalizationSession`` builds the registry, classifier, engine, trigger
controller and batch processor over a host and exposes the editor-facing
operations:

- incremental capitalization while typing (``enable`` / ``insert_text``)
- region and whole-buffer capitalization
- capitalize-before-send for REPL style documents
- dialect changes with synchronous keyword cache invalidation
- blacklist replacement at runtime

Incremental capitalization is off until ``enable`` is called for a document;
the batch operations work regardless.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterable, List, Optional, Set

from sql_upcase.config.settings import Settings, get_settings
from sql_upcase.domain.capitalization.batch import BatchProcessor
from sql_upcase.domain.capitalization.classifier import SyntaxClassifier
from sql_upcase.domain.capitalization.engine import CapitalizationEngine
from sql_upcase.domain.capitalization.tokens import TokenLocator, WordSyntax
from sql_upcase.domain.capitalization.trigger import TriggerController
from sql_upcase.domain.models import BatchResult, Dialect, Outcome
from sql_upcase.domain.protocols import DialectChangeSource, HostProtocol
from sql_upcase.infrastructure.host.text_document import InMemoryHost
from sql_upcase.infrastructure.keywords.blacklist import Blacklist, load_blacklist
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable
from sql_upcase.infrastructure.keywords.registry import KeywordRegistry
from sql_upcase.infrastructure.keywords.tables import load_keyword_tables
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)


class CapitalizationSession:
    """Editor-facing facade over the capitalization components."""

    def __init__(
        self,
        host: HostProtocol,
        eval_table: EvalKeywordTable,
        blacklist: Optional[Blacklist] = None,
        word_syntax: Optional[WordSyntax] = None,
    ) -> None:
        self.host = host
        self.word_syntax = word_syntax or WordSyntax()
        self.registry = KeywordRegistry(host)
        self.classifier = SyntaxClassifier(host, eval_table, self.word_syntax)
        self.locator = TokenLocator(host, self.word_syntax)
        self.engine = CapitalizationEngine(
            host, self.registry, self.classifier, blacklist
        )
        self.trigger = TriggerController(self.locator, self.engine)
        self.batch = BatchProcessor(host, self.locator, self.engine)
        self._enabled: Set[Hashable] = set()

        if isinstance(host, DialectChangeSource):
            host.add_dialect_listener(self.registry.invalidate)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        extra_blacklist: Optional[Iterable[Any]] = None,
    ) -> "CapitalizationSession":
        """
        Build a session over an ``InMemoryHost`` from configuration.

        Args:
            settings: Settings to use; the cached application settings when omitted
            extra_blacklist: Words blacklisted on top of the configured ones

        Returns:
            A ready CapitalizationSession

        Raises:
            KeywordTableError: If the keyword tables cannot be loaded
            BlacklistConfigError: If a blacklist entry is malformed
        """
        settings = settings or get_settings()
        tables = load_keyword_tables(settings.keyword_tables_file)
        host = InMemoryHost(tables, default_dialect=settings.dialect)
        session = cls(
            host,
            EvalKeywordTable.from_tables(tables),
            blacklist=load_blacklist(settings, extra_blacklist),
            word_syntax=WordSyntax(settings.extra_word_constituents),
        )
        logger.debug(
            "session.created",
            default_dialect=settings.dialect.value,
            blacklist_size=len(session.blacklist),
        )
        return session

    # --- incremental mode ---------------------------------------------------
    def enable(self, document: Hashable) -> None:
        """Turn on capitalization-as-you-type for ``document``."""
        self._enabled.add(document)

    def disable(self, document: Hashable) -> None:
        self._enabled.discard(document)

    def is_enabled(self, document: Hashable) -> bool:
        return document in self._enabled

    def insert_text(
        self, document: Hashable, offset: int, text: str
    ) -> List[Outcome]:
        """
        Insert ``text`` one character at a time, as if typed.

        Each inserted character is reported to the trigger controller when
        the document is enabled.

        Returns:
            Outcomes of the capitalization attempts the insertion triggered
        """
        outcomes: List[Outcome] = []
        for char in text:
            self.host.replace_text(document, offset, offset, char)
            if self.is_enabled(document):
                outcome = self.trigger.on_insert(document, char, offset)
                if outcome is not None:
                    outcomes.append(outcome)
            offset += len(char)
        return outcomes

    def capitalize_before_send(self, document: Hashable) -> Optional[Outcome]:
        """
        Capitalize the token at the end of ``document`` before it is sent.

        The final token of a REPL input line is never followed by a trigger
        character, so the send action gets one last attempt.
        """
        if not self.is_enabled(document):
            return None
        return self.trigger.capitalize_before(
            document, self.host.document_length(document)
        )

    # --- batch mode ---------------------------------------------------------
    def capitalize_region(
        self, document: Hashable, begin: int, end: int
    ) -> BatchResult:
        return self.batch.capitalize_region(document, begin, end)

    def capitalize_buffer(self, document: Hashable) -> BatchResult:
        return self.batch.capitalize_buffer(document)

    # --- configuration changes ----------------------------------------------
    def set_dialect(self, document: Hashable, dialect: Optional[Dialect]) -> None:
        """
        Change the dialect of ``document``.

        Keyword sets are invalidated before this returns, so the next
        capitalization already uses the new dialect.
        """
        set_dialect = getattr(self.host, "set_dialect", None)
        if set_dialect is None:
            raise TypeError(
                f"{type(self.host).__name__} does not support changing dialects"
            )
        set_dialect(document, dialect)
        self.dialect_changed(document)

    def dialect_changed(self, document: Hashable) -> None:
        """Notification for hosts that change dialects on their own."""
        self.registry.invalidate(document)

    @property
    def blacklist(self) -> Blacklist:
        return self.engine.blacklist

    def update_blacklist(self, words: Iterable[Any]) -> Blacklist:
        """
        Replace the blacklist with ``words``.

        Raises:
            BlacklistConfigError: If an entry is not a non-empty string; the
                current blacklist stays in effect
        """
        blacklist = Blacklist.from_words(words)
        self.engine.use_blacklist(blacklist)
        logger.info("session.blacklist_updated", size=len(blacklist))
        return blacklist

    def close(self, document: Hashable) -> None:
        """Forget every per-document cache held for ``document``."""
        self.disable(document)
        self.registry.discard(document)
        close = getattr(self.host, "close", None)
        if close is not None:
            close(document)
