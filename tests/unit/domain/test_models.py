"""Unit tests for the core value types."""

import pytest

from sql_upcase.domain.models import (
    TRIGGER_CHARACTERS,
    BatchResult,
    Dialect,
    SyntaxContext,
    Token,
)


@pytest.mark.unit
class TestDialect:
    """Dialect name resolution."""

    def test_from_name_is_case_insensitive(self):
        assert Dialect.from_name(" PostgreS ") is Dialect.POSTGRES

    @pytest.mark.parametrize("name", [None, "", "db2"])
    def test_from_name_falls_back_to_ansi(self, name):
        assert Dialect.from_name(name) is Dialect.ANSI

    def test_only_redis_is_key_value(self):
        assert [d for d in Dialect if d.is_key_value] == [Dialect.REDIS]


@pytest.mark.unit
class TestSyntaxContext:
    def test_capitalizable_contexts(self):
        allowed = {c for c in SyntaxContext if c.is_capitalizable}
        assert allowed == {SyntaxContext.CODE, SyntaxContext.EVAL_STRING}


@pytest.mark.unit
class TestToken:
    def test_span_must_match_text(self):
        with pytest.raises(ValueError):
            Token(0, 3, "select")

    def test_normalized_is_lowercase(self):
        assert Token(4, 10, "SeLeCt").normalized == "select"


@pytest.mark.unit
def test_trigger_characters():
    """Space, newline, comma, semicolon, open paren and single quote."""
    assert TRIGGER_CHARACTERS == frozenset({" ", "\n", ",", ";", "(", "'"})


@pytest.mark.unit
def test_batch_result_skipped_count():
    result = BatchResult(begin=0, end=10, tokens_examined=5, tokens_capitalized=2)
    assert result.tokens_skipped == 3
