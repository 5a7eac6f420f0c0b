"""Exception hierarchy for sql-upcase.

The capitalization path itself never raises for ordinary input: a token that
is not a keyword, is blacklisted, or sits in a string/comment simply resolves
to ``Outcome.SKIPPED``. The exceptions below cover configuration that cannot be
loaded and host collaborators that cannot answer.
"""


class SqlUpcaseError(Exception):
    """Base class for all sql-upcase errors."""

    pass


class LexicalStateUnavailable(SqlUpcaseError):
    """Raised by a host when it cannot lex a document under the target dialect."""

    pass


class BlacklistConfigError(SqlUpcaseError):
    """Raised when blacklist configuration contains malformed entries."""

    pass


class KeywordTableError(SqlUpcaseError):
    """Raised when the dialect keyword table file is missing or invalid."""

    pass
