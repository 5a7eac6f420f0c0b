"""
Batch capitalization of a region or a whole document.

The scan walks forward token by token. Each step resumes at the end of the
previous token whether or not it was rewritten, so the position strictly
increases and the loop ends for any finite region.
"""

from __future__ import annotations

import time
from typing import Hashable

from sql_upcase.domain.capitalization.engine import CapitalizationEngine
from sql_upcase.domain.capitalization.tokens import TokenLocator
from sql_upcase.domain.models import BatchResult, Outcome
from sql_upcase.domain.protocols import HostProtocol
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)


class BatchProcessor:
    """Runs the engine over every token of a region."""

    def __init__(
        self,
        host: HostProtocol,
        locator: TokenLocator,
        engine: CapitalizationEngine,
    ) -> None:
        self._host = host
        self._locator = locator
        self._engine = engine

    def capitalize_region(self, document: Hashable, begin: int, end: int) -> BatchResult:
        """
        Capitalize keywords of every token starting before ``end``.

        A ``begin`` that falls inside a token includes that whole token. A
        token starting before ``end`` but running past it is included too.
        Bounds are clamped to the document.

        Args:
            document: Host document handle
            begin: Region start offset
            end: Region end offset (exclusive)

        Returns:
            BatchResult with examined/capitalized counters
        """
        length = self._host.document_length(document)
        begin = max(0, min(begin, length))
        end = max(0, min(end, length))
        result = BatchResult(begin=begin, end=end)
        if begin >= end:
            return result

        started = time.perf_counter()
        dialect = self._host.active_dialect(document)
        pos = begin
        snap = True
        while pos < end:
            token = self._locator.token_at_or_after(document, pos, snap_to_start=snap)
            snap = False
            if token is None or token.start >= end:
                break

            outcome = self._engine.maybe_capitalize(document, token, dialect)
            result.tokens_examined += 1
            if outcome is Outcome.CAPITALIZED:
                result.tokens_capitalized += 1
            pos = token.end

        logger.debug(
            "batch.region_completed",
            dialect=dialect.value,
            begin=begin,
            end=end,
            tokens_examined=result.tokens_examined,
            tokens_capitalized=result.tokens_capitalized,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

    def capitalize_buffer(self, document: Hashable) -> BatchResult:
        """Capitalize the whole document."""
        return self.capitalize_region(document, 0, self._host.document_length(document))
