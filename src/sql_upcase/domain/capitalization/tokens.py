"""
Token location over host text.

A token is a maximal run of word constituents: letters, digits, ``_`` and a
configurable set of extra characters (backslash by default, so that escape
introduced words such as psql's ``\\copy`` are never mistaken for ``copy``).
Scanning reads the document through the host in fixed-size chunks and never
moves the host cursor.
"""

from __future__ import annotations

from typing import Hashable, Optional

from sql_upcase.domain.models import DEFAULT_EXTRA_WORD_CONSTITUENTS, Token
from sql_upcase.domain.protocols import HostProtocol

_CHUNK = 256


class WordSyntax:
    """Decides which characters are word constituents."""

    def __init__(self, extra_constituents: str = DEFAULT_EXTRA_WORD_CONSTITUENTS):
        self.extra_constituents = frozenset(extra_constituents)

    def is_constituent(self, ch: str) -> bool:
        return ch.isalnum() or ch == "_" or ch in self.extra_constituents


class TokenLocator:
    """Finds token spans behind or ahead of an offset."""

    def __init__(self, host: HostProtocol, syntax: Optional[WordSyntax] = None):
        self._host = host
        self.syntax = syntax or WordSyntax()

    def token_before(self, document: Hashable, offset: int) -> Optional[Token]:
        """
        Move one token backward from ``offset``.

        Non-constituents directly behind ``offset`` are skipped first, then the
        constituent run is taken as the token.

        Returns:
            The token, or None when there is no word behind ``offset``
        """
        offset = min(offset, self._host.document_length(document))
        end = self._scan_backward(document, offset, want_constituent=True)
        if end == 0:
            return None
        start = self._scan_backward(document, end, want_constituent=False)
        return Token(start, end, self._host.read_text(document, start, end))

    def token_at_or_after(
        self, document: Hashable, offset: int, snap_to_start: bool = True
    ) -> Optional[Token]:
        """
        Move one token forward from ``offset``.

        Args:
            document: Host document handle
            offset: Position to scan from
            snap_to_start: When ``offset`` falls inside a token, return that
                token (starting before ``offset``) instead of the next one

        Returns:
            The token, or None when no word remains
        """
        length = self._host.document_length(document)
        if offset >= length:
            return None
        offset = max(0, offset)

        if snap_to_start and offset > 0 and self._is_inside_word(document, offset):
            start = self._scan_backward(document, offset, want_constituent=False)
        else:
            start = self._scan_forward(document, offset, length, want_constituent=True)
        if start >= length:
            return None
        end = self._scan_forward(document, start, length, want_constituent=False)
        return Token(start, end, self._host.read_text(document, start, end))

    def _is_inside_word(self, document: Hashable, offset: int) -> bool:
        pair = self._host.read_text(document, offset - 1, offset + 1)
        return len(pair) == 2 and all(self.syntax.is_constituent(ch) for ch in pair)

    def _scan_forward(
        self, document: Hashable, pos: int, end: int, want_constituent: bool
    ) -> int:
        """First offset in ``[pos, end)`` with the wanted constituent-ness, else ``end``."""
        while pos < end:
            chunk_end = min(end, pos + _CHUNK)
            chunk = self._host.read_text(document, pos, chunk_end)
            for i, ch in enumerate(chunk):
                if self.syntax.is_constituent(ch) == want_constituent:
                    return pos + i
            pos = chunk_end
        return end

    def _scan_backward(self, document: Hashable, pos: int, want_constituent: bool) -> int:
        """
        Offset just after the nearest character before ``pos`` with the wanted
        constituent-ness, or 0 when there is none.
        """
        while pos > 0:
            chunk_start = max(0, pos - _CHUNK)
            chunk = self._host.read_text(document, chunk_start, pos)
            for i in range(len(chunk) - 1, -1, -1):
                if self.syntax.is_constituent(chunk[i]) == want_constituent:
                    return chunk_start + i + 1
            pos = chunk_start
        return 0
