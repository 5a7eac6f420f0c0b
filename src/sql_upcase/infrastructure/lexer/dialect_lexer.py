"""
Dialect-consistent lexical view of a text.

``DialectLexer`` lexes a snapshot of raw text under one dialect's grammar and
answers ``state_at(offset)`` from the resulting comment/string spans. It is
read-only: it is rebuilt, never edited, and it knows nothing about rendering.
Unterminated comments and strings run to the end of the text.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import List, Optional

from sql_upcase.domain.models import Dialect, LexicalState
from sql_upcase.infrastructure.lexer.grammar import LexicalGrammar, grammar_for

COMMENT = "comment"
STRING = "string"


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` comment or string region."""

    start: int
    end: int
    kind: str
    open_offset: Optional[int] = None


class DialectLexer:
    """Comment/string spans of ``text`` under ``dialect``."""

    def __init__(
        self,
        text: str,
        dialect: Dialect,
        grammar: Optional[LexicalGrammar] = None,
    ) -> None:
        self.dialect = dialect
        self.grammar = grammar or grammar_for(dialect)
        self.length = len(text)
        self.spans: List[Span] = self._scan(text)
        self._starts = [span.start for span in self.spans]

    def state_at(self, offset: int) -> LexicalState:
        """Lexical state of the character at ``offset``."""
        idx = bisect.bisect_right(self._starts, offset) - 1
        if idx < 0:
            return LexicalState()
        span = self.spans[idx]
        if offset >= span.end:
            return LexicalState()
        if span.kind == COMMENT:
            return LexicalState(in_comment=True)
        return LexicalState(in_string=True, string_open_offset=span.open_offset)

    # --- scanning -----------------------------------------------------------
    def _scan(self, text: str) -> List[Span]:
        grammar = self.grammar
        spans: List[Span] = []
        n = len(text)
        i = 0
        while i < n:
            block = grammar.block_comment
            if block and text.startswith(block[0], i):
                end = self._block_comment_end(text, i)
                spans.append(Span(i, end, COMMENT))
                i = end
                continue

            if self._line_comment_at(text, i):
                newline = text.find("\n", i)
                end = n if newline < 0 else newline
                spans.append(Span(i, end, COMMENT))
                i = end
                continue

            ch = text[i]
            if (
                ch in grammar.string_prefixes
                and i + 1 < n
                and text[i + 1] == "'"
                and (i == 0 or not _is_word_char(text[i - 1]))
            ):
                escapes = ch in grammar.escape_prefixes
                end = self._string_end(text, i + 1, force_backslash=escapes)
                spans.append(Span(i, end, STRING, open_offset=i))
                i = end
                continue

            if ch in grammar.string_delimiters:
                end = self._string_end(text, i)
                spans.append(Span(i, end, STRING, open_offset=i))
                i = end
                continue

            i += 1
        return spans

    def _line_comment_at(self, text: str, i: int) -> bool:
        for comment in self.grammar.line_comments:
            if not text.startswith(comment.marker, i):
                continue
            if comment.requires_space:
                after = i + len(comment.marker)
                if after < len(text) and not text[after].isspace():
                    continue
            return True
        return False

    def _block_comment_end(self, text: str, i: int) -> int:
        opener, closer = self.grammar.block_comment  # type: ignore[misc]
        depth = 0
        j = i
        n = len(text)
        while j < n:
            if text.startswith(opener, j):
                depth += 1
                j += len(opener)
                if not self.grammar.nested_block_comments and depth > 1:
                    depth = 1
                continue
            if text.startswith(closer, j):
                depth -= 1
                j += len(closer)
                if depth == 0:
                    return j
                continue
            j += 1
        return n

    def _string_end(self, text: str, i: int, force_backslash: bool = False) -> int:
        """Offset just past the closing delimiter of the string opened at ``i``."""
        opener = text[i]
        closer = self.grammar.string_delimiters[opener]
        backslash = force_backslash or opener in self.grammar.backslash_escapes
        j = i + 1
        n = len(text)
        while j < n:
            c = text[j]
            if backslash and c == "\\":
                j += 2
                continue
            if c == closer:
                # doubled delimiter escapes itself: 'it''s', [a]]b]
                if j + 1 < n and text[j + 1] == closer:
                    j += 2
                    continue
                return j + 1
            j += 1
        return n


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"
