"""
Core value types shared by the capitalization engine and its hosts.

Everything here is a plain value: enums for the closed vocabularies (dialect,
syntactic context, outcome, document mode) and frozen dataclasses for the
per-attempt records (token, lexical state, batch result).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


class Dialect(Enum):
    """Query language variants with their own keyword set and eval prefixes."""

    ANSI = "ansi"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    MS = "ms"
    ORACLE = "oracle"
    SQLITE = "sqlite"
    REDIS = "redis"

    @classmethod
    def default(cls) -> "Dialect":
        return cls.ANSI

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Dialect":
        """
        Resolve a dialect name, falling back to ANSI for unknown or empty names.

        Args:
            name: Dialect name such as ``"postgres"`` (case-insensitive)

        Returns:
            Matching Dialect, or ``Dialect.ANSI`` when undetermined
        """
        if not name:
            return cls.default()
        key = name.strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return cls.default()

    @property
    def is_key_value(self) -> bool:
        """True for the key/value command dialect (Redis-like)."""
        return self is Dialect.REDIS


class SyntaxContext(Enum):
    """Syntactic context of a document offset."""

    CODE = "code"
    COMMENT = "comment"
    PLAIN_STRING = "plain_string"
    EVAL_STRING = "eval_string"
    # Lexical state could not be obtained for a non-native document
    UNKNOWN = "unknown"

    @property
    def is_capitalizable(self) -> bool:
        return self in (SyntaxContext.CODE, SyntaxContext.EVAL_STRING)


class Outcome(Enum):
    """Result of one capitalization attempt."""

    CAPITALIZED = "capitalized"
    SKIPPED = "skipped"


class DocumentMode(Enum):
    """How the host edits a document."""

    QUERY = "query"
    KEY_VALUE = "key_value"
    FOREIGN = "foreign"


# Characters whose insertion makes the token behind the cursor a candidate
TRIGGER_CHARACTERS: FrozenSet[str] = frozenset({" ", "\n", ",", ";", "(", "'"})

DEFAULT_EXTRA_WORD_CONSTITUENTS = "\\"


@dataclass(frozen=True)
class Token:
    """A maximal span of word-constituent characters, ``[start, end)``."""

    start: int
    end: int
    text: str

    def __post_init__(self) -> None:
        if self.end - self.start != len(self.text):
            raise ValueError(
                f"Token span [{self.start}, {self.end}) does not match text {self.text!r}"
            )

    @property
    def normalized(self) -> str:
        return self.text.lower()


@dataclass(frozen=True)
class LexicalState:
    """Host lexical answer for a single offset."""

    in_comment: bool = False
    in_string: bool = False
    string_open_offset: Optional[int] = None


@dataclass
class BatchResult:
    """Counters for one region scan."""

    begin: int
    end: int
    tokens_examined: int = 0
    tokens_capitalized: int = 0

    @property
    def tokens_skipped(self) -> int:
        return self.tokens_examined - self.tokens_capitalized
