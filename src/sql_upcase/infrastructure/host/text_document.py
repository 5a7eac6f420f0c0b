"""
In-memory reference host.

``TextDocument`` is a plain text buffer with a mode and an optional dialect.
``InMemoryHost`` implements ``HostProtocol`` over such documents: it serves
text, applies replacements, answers lexical-state queries from a
``DialectLexer`` view of the document, and exposes the packaged keyword
tables as the native/addition/key-value keyword sources.

The lexer view belongs to the host, one per document. It is rebuilt lazily
after edits that can move comment or string boundaries and after a dialect
change; pure case changes of the same length keep it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from sql_upcase.domain.errors import LexicalStateUnavailable
from sql_upcase.domain.models import Dialect, DocumentMode, LexicalState
from sql_upcase.infrastructure.keywords.tables import KeywordTablesConfig
from sql_upcase.infrastructure.lexer.dialect_lexer import DialectLexer
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)

LexerFactory = Callable[[str, Dialect], DialectLexer]
DialectListener = Callable[[Hashable], None]


@dataclass(eq=False)
class TextDocument:
    """Editable text buffer; identity is the document handle."""

    text: str = ""
    name: str = "<buffer>"
    mode: DocumentMode = DocumentMode.QUERY
    dialect: Optional[Dialect] = None
    version: int = 0

    def __len__(self) -> int:
        return len(self.text)


class InMemoryHost:
    """HostProtocol implementation over TextDocument instances."""

    def __init__(
        self,
        tables: KeywordTablesConfig,
        default_dialect: Dialect = Dialect.ANSI,
        lexer_factory: LexerFactory = DialectLexer,
    ) -> None:
        self._tables = tables
        self.default_dialect = default_dialect
        self._lexer_factory = lexer_factory
        self._views: Dict[TextDocument, Tuple[int, Dialect, DialectLexer]] = {}
        self._dialect_listeners: List[DialectListener] = []

    # --- text access --------------------------------------------------------
    def read_text(self, document: TextDocument, start: int, end: int) -> str:
        start = max(0, start)
        return document.text[start:max(start, end)]

    def replace_text(
        self, document: TextDocument, start: int, end: int, new_text: str
    ) -> None:
        length = len(document.text)
        if not (0 <= start <= end <= length):
            raise ValueError(
                f"Replacement range [{start}, {end}) outside document of length {length}"
            )
        old_text = document.text[start:end]
        document.text = document.text[:start] + new_text + document.text[end:]
        if len(old_text) == len(new_text) and old_text.lower() == new_text.lower():
            # A case change cannot move comment or string boundaries
            return
        document.version += 1

    def insert_text(self, document: TextDocument, offset: int, text: str) -> None:
        self.replace_text(document, offset, offset, text)

    def document_length(self, document: TextDocument) -> int:
        return len(document.text)

    def document_mode(self, document: TextDocument) -> DocumentMode:
        return document.mode

    # --- lexical view -------------------------------------------------------
    def lexical_state_at(self, document: TextDocument, offset: int) -> LexicalState:
        if not 0 <= offset < len(document.text):
            raise LexicalStateUnavailable(
                f"Offset {offset} outside document '{document.name}'"
            )
        return self._view(document).state_at(offset)

    def _view(self, document: TextDocument) -> DialectLexer:
        dialect = self.active_dialect(document)
        cached = self._views.get(document)
        if cached is not None:
            version, view_dialect, lexer = cached
            if version == document.version and view_dialect is dialect:
                return lexer

        try:
            lexer = self._lexer_factory(document.text, dialect)
        except Exception as exc:
            raise LexicalStateUnavailable(
                f"Cannot lex '{document.name}' as {dialect.value}: {exc}"
            ) from exc
        self._views[document] = (document.version, dialect, lexer)
        logger.debug(
            "host.lexical_view_built",
            document=document.name,
            dialect=dialect.value,
            spans=len(lexer.spans),
        )
        return lexer

    def close(self, document: TextDocument) -> None:
        """Release the lexical view of ``document``."""
        self._views.pop(document, None)

    # --- dialects and keyword sources ---------------------------------------
    def active_dialect(self, document: TextDocument) -> Dialect:
        return document.dialect or self.default_dialect

    def set_dialect(self, document: TextDocument, dialect: Optional[Dialect]) -> None:
        """Change the document dialect and notify listeners synchronously."""
        previous = self.active_dialect(document)
        document.dialect = dialect
        current = self.active_dialect(document)
        if current is previous:
            return
        logger.info(
            "host.dialect_changed",
            document=document.name,
            previous=previous.value,
            dialect=current.value,
        )
        for listener in list(self._dialect_listeners):
            listener(document)

    def add_dialect_listener(self, listener: DialectListener) -> None:
        self._dialect_listeners.append(listener)

    def remove_dialect_listener(self, listener: DialectListener) -> None:
        if listener in self._dialect_listeners:
            self._dialect_listeners.remove(listener)

    def native_query_language_keywords(
        self, document: TextDocument
    ) -> Optional[Sequence[str]]:
        if document.mode is not DocumentMode.QUERY:
            return None
        dialect = self.active_dialect(document)
        if not self._tables.has_dialect(dialect):
            return None
        return self._tables.keywords_for(dialect) + self._tables.builtins_for(dialect)

    def dialect_keyword_addition(self, dialect: Dialect) -> Sequence[str]:
        if not self._tables.has_dialect(dialect):
            return []
        return self._tables.keywords_for(dialect)

    def redis_like_keywords(self) -> Sequence[str]:
        return list(self._tables.redis_commands)
