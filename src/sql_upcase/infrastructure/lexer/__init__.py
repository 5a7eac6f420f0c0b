"""Dialect lexing used to classify offsets as code, comment or string."""

from sql_upcase.infrastructure.lexer.dialect_lexer import DialectLexer, Span
from sql_upcase.infrastructure.lexer.grammar import (
    GRAMMARS,
    LexicalGrammar,
    LineComment,
    grammar_for,
)

__all__ = [
    "DialectLexer",
    "GRAMMARS",
    "LexicalGrammar",
    "LineComment",
    "Span",
    "grammar_for",
]
