"""Host Protocol - the collaborator contract the capitalization core consumes.

The core owns no text. Everything it needs from the editing surface (reading
and replacing text, lexical state, dialect discovery, keyword sources) goes
through a host object satisfying ``HostProtocol``. ``document`` is an opaque,
hashable handle chosen by the host; the core only uses it as a cache key and
passes it back.

Design Goals:
- one narrow interface per concern, no host-specific types leak into the core
- dialect-change and character-insertion notifications are plain method calls
  on the core (``KeywordRegistry.invalidate``, ``TriggerController.on_insert``)
"""

from __future__ import annotations

from typing import Callable, Hashable, Optional, Protocol, Sequence, runtime_checkable

from sql_upcase.domain.models import Dialect, DocumentMode, LexicalState


@runtime_checkable
class HostProtocol(Protocol):
    """Interface every editing host must implement."""

    def read_text(self, document: Hashable, start: int, end: int) -> str:
        """Return the text of ``[start, end)``."""
        ...

    def replace_text(
        self, document: Hashable, start: int, end: int, new_text: str
    ) -> None:
        """Replace ``[start, end)`` with ``new_text`` as one atomic edit."""
        ...

    def document_length(self, document: Hashable) -> int:
        """Number of characters in the document."""
        ...

    def document_mode(self, document: Hashable) -> DocumentMode:
        """Whether the host edits the document natively as query text."""
        ...

    def lexical_state_at(self, document: Hashable, offset: int) -> LexicalState:
        """
        Lexical state of the character at ``offset`` under the active dialect.

        Raises:
            LexicalStateUnavailable: when the document cannot be lexed
        """
        ...

    def active_dialect(self, document: Hashable) -> Dialect:
        """Active dialect, or the default dialect when undetermined."""
        ...

    def native_query_language_keywords(
        self, document: Hashable
    ) -> Optional[Sequence[str]]:
        """Keyword table exposed natively by the host mode, if any."""
        ...

    def dialect_keyword_addition(self, dialect: Dialect) -> Sequence[str]:
        """Synthesized default keyword list for ``dialect``."""
        ...

    def redis_like_keywords(self) -> Sequence[str]:
        """Key/value command list; empty when unsupported."""
        ...


@runtime_checkable
class DialectChangeSource(Protocol):
    """Hosts that can announce dialect changes to observers."""

    def add_dialect_listener(self, listener: Callable[[Hashable], None]) -> None:
        """Call ``listener(document)`` synchronously after a dialect change."""
        ...

    def remove_dialect_listener(self, listener: Callable[[Hashable], None]) -> None:
        ...
