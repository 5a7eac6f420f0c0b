"""
Per-dialect lexical grammar: comment markers and string delimiters.

Only what is needed to tell comments and quoted text apart from code is
described here. Quoted identifiers (``"col"``, ```col```, ``[col]``) count as
strings so that a column named ``order`` is never rewritten.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from sql_upcase.domain.models import Dialect


@dataclass(frozen=True)
class LineComment:
    """Line comment marker; MySQL's ``--`` needs whitespace after it."""

    marker: str
    requires_space: bool = False


@dataclass(frozen=True)
class LexicalGrammar:
    """Comment and string syntax of one dialect."""

    line_comments: Tuple[LineComment, ...] = (LineComment("--"),)
    block_comment: Optional[Tuple[str, str]] = ("/*", "*/")
    nested_block_comments: bool = False
    # opening delimiter -> closing delimiter
    string_delimiters: Dict[str, str] = field(
        default_factory=lambda: {"'": "'", '"': '"'}
    )
    # delimiters inside which backslash escapes the next character
    backslash_escapes: FrozenSet[str] = frozenset()
    # letters that, glued to an opening quote, belong to the literal (E'..', N'..')
    string_prefixes: FrozenSet[str] = frozenset()
    # string prefixes that switch on backslash escapes (PostgreSQL E'..')
    escape_prefixes: FrozenSet[str] = frozenset()


ANSI_GRAMMAR = LexicalGrammar()

POSTGRES_GRAMMAR = LexicalGrammar(
    nested_block_comments=True,
    string_prefixes=frozenset("eEbBxX"),
    escape_prefixes=frozenset("eE"),
)

MYSQL_GRAMMAR = LexicalGrammar(
    line_comments=(LineComment("--", requires_space=True), LineComment("#")),
    string_delimiters={"'": "'", '"': '"', "`": "`"},
    backslash_escapes=frozenset({"'", '"'}),
    string_prefixes=frozenset("bBxXnN"),
)

MS_GRAMMAR = LexicalGrammar(
    string_delimiters={"'": "'", '"': '"', "[": "]"},
    string_prefixes=frozenset("nN"),
)

ORACLE_GRAMMAR = LexicalGrammar(string_prefixes=frozenset("nN"))

SQLITE_GRAMMAR = LexicalGrammar(
    string_delimiters={"'": "'", '"': '"', "`": "`", "[": "]"},
    string_prefixes=frozenset("xX"),
)

REDIS_GRAMMAR = LexicalGrammar(
    line_comments=(LineComment("#"),),
    block_comment=None,
    backslash_escapes=frozenset({'"'}),
)

GRAMMARS: Dict[Dialect, LexicalGrammar] = {
    Dialect.ANSI: ANSI_GRAMMAR,
    Dialect.POSTGRES: POSTGRES_GRAMMAR,
    Dialect.MYSQL: MYSQL_GRAMMAR,
    Dialect.MARIADB: MYSQL_GRAMMAR,
    Dialect.MS: MS_GRAMMAR,
    Dialect.ORACLE: ORACLE_GRAMMAR,
    Dialect.SQLITE: SQLITE_GRAMMAR,
    Dialect.REDIS: REDIS_GRAMMAR,
}


def grammar_for(dialect: Dialect) -> LexicalGrammar:
    """Grammar of ``dialect``, ANSI when none is registered."""
    return GRAMMARS.get(dialect, ANSI_GRAMMAR)
