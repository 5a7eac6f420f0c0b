"""
The capitalize/skip decision.

A token is rewritten to its canonical uppercase form only when all of the
following hold:

- the whole token, case-insensitively, is a keyword of the active dialect
- the token is not blacklisted
- the token starts in code or in an eval string

Anything else is the ordinary SKIPPED outcome, never an error.
"""

from __future__ import annotations

from typing import Hashable, Optional

from sql_upcase.domain.capitalization.classifier import SyntaxClassifier
from sql_upcase.domain.models import Dialect, Outcome, Token
from sql_upcase.domain.protocols import HostProtocol
from sql_upcase.infrastructure.keywords.blacklist import Blacklist
from sql_upcase.infrastructure.keywords.registry import KeywordRegistry
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)


class CapitalizationEngine:
    """Decides and applies keyword capitalization for single tokens."""

    def __init__(
        self,
        host: HostProtocol,
        registry: KeywordRegistry,
        classifier: SyntaxClassifier,
        blacklist: Optional[Blacklist] = None,
    ) -> None:
        self._host = host
        self._registry = registry
        self._classifier = classifier
        self._blacklist = blacklist or Blacklist()

    @property
    def blacklist(self) -> Blacklist:
        return self._blacklist

    def use_blacklist(self, blacklist: Blacklist) -> None:
        """Swap in a new blacklist snapshot."""
        self._blacklist = blacklist

    def maybe_capitalize(
        self,
        document: Hashable,
        token: Token,
        dialect: Optional[Dialect] = None,
    ) -> Outcome:
        """
        Capitalize ``token`` in place if it qualifies.

        Args:
            document: Host document handle
            token: Candidate span and its current text
            dialect: Dialect to decide under; the host's active dialect when omitted

        Returns:
            Outcome.CAPITALIZED when the token is (now) in canonical form,
            Outcome.SKIPPED otherwise
        """
        if dialect is None:
            dialect = self._host.active_dialect(document)

        canonical = self._registry.get_keywords(document, dialect).canonical(token.text)
        if canonical is None:
            return Outcome.SKIPPED

        if self._blacklist.is_blacklisted(token.text):
            logger.debug("engine.skip_blacklisted", word=token.text, start=token.start)
            return Outcome.SKIPPED

        context = self._classifier.classify(document, token.start, dialect)
        if not context.is_capitalizable:
            logger.debug(
                "engine.skip_context",
                word=token.text,
                start=token.start,
                context=context.value,
            )
            return Outcome.SKIPPED

        if len(canonical) != len(token.text):
            # Case mapping changed the length; rewriting would shift offsets
            logger.debug("engine.skip_length_change", word=token.text, start=token.start)
            return Outcome.SKIPPED

        if token.text != canonical:
            self._host.replace_text(document, token.start, token.end, canonical)
            logger.debug(
                "engine.capitalized",
                word=token.text,
                start=token.start,
                dialect=dialect.value,
            )
        return Outcome.CAPITALIZED
