"""
Syntactic context classification.

Answers, for one document offset, whether the character there is code, in a
comment, in a plain string or in an eval string. The host's lexical view
must be consistent with the target dialect even when the document itself is
not a query-language document (a shell, a REPL, a host-language file).
"""

from __future__ import annotations

from typing import Hashable

from sql_upcase.domain.capitalization.tokens import WordSyntax
from sql_upcase.domain.errors import LexicalStateUnavailable
from sql_upcase.domain.models import Dialect, DocumentMode, SyntaxContext
from sql_upcase.domain.protocols import HostProtocol
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)

# Extra characters read before a string delimiter beyond the longest prefix
_LOOKBEHIND_SLACK = 32


class SyntaxClassifier:
    """Maps (document, offset, dialect) to a SyntaxContext."""

    def __init__(
        self,
        host: HostProtocol,
        eval_table: EvalKeywordTable,
        syntax: WordSyntax,
    ) -> None:
        self._host = host
        self._eval_table = eval_table
        self._syntax = syntax

    def classify(
        self, document: Hashable, offset: int, dialect: Dialect
    ) -> SyntaxContext:
        """
        Classify the character at ``offset``.

        1. in a comment -> COMMENT
        2. not in a string -> CODE
        3. in a string whose opening delimiter follows an eval prefix of
           ``dialect`` -> EVAL_STRING, otherwise PLAIN_STRING

        When the host cannot produce lexical state, native query documents
        are treated as CODE and everything else as UNKNOWN, which is never
        capitalized.
        """
        try:
            state = self._host.lexical_state_at(document, offset)
        except LexicalStateUnavailable as exc:
            mode = self._host.document_mode(document)
            context = (
                SyntaxContext.CODE if mode is DocumentMode.QUERY else SyntaxContext.UNKNOWN
            )
            logger.warning(
                "classifier.lexical_state_unavailable",
                offset=offset,
                dialect=dialect.value,
                mode=mode.value,
                context=context.value,
                error=str(exc),
            )
            return context

        if state.in_comment:
            return SyntaxContext.COMMENT
        if not state.in_string:
            return SyntaxContext.CODE
        if state.string_open_offset is None:
            # Without the delimiter position the eval check cannot be made
            return SyntaxContext.PLAIN_STRING

        if self._follows_eval_prefix(document, state.string_open_offset, dialect):
            return SyntaxContext.EVAL_STRING
        return SyntaxContext.PLAIN_STRING

    def _follows_eval_prefix(
        self, document: Hashable, open_offset: int, dialect: Dialect
    ) -> bool:
        longest = self._eval_table.longest_prefix(dialect)
        if longest == 0 or open_offset <= 0:
            return False

        # Whitespace between prefix and delimiter is unbounded, so widen the
        # window until enough non-blank text (plus a boundary char) is in view.
        window = longest + _LOOKBEHIND_SLACK
        while True:
            start = max(0, open_offset - window)
            text = self._host.read_text(document, start, open_offset).rstrip()
            if len(text) > longest or start == 0:
                break
            window *= 2

        prefix = self._eval_table.match(dialect, text, self._syntax)
        if prefix is None:
            return False

        # A prefix inside a comment or another string does not make an eval string
        prefix_start = start + len(text) - len(prefix)
        state = self._host.lexical_state_at(document, prefix_start)
        return not (state.in_comment or state.in_string)
