"""Unit tests for the dialect lexer's comment/string spans."""

import pytest

from sql_upcase.domain.models import Dialect, LexicalState
from sql_upcase.infrastructure.lexer import DialectLexer, grammar_for
from sql_upcase.infrastructure.lexer.grammar import ANSI_GRAMMAR, MYSQL_GRAMMAR


def state(text: str, offset: int, dialect: Dialect = Dialect.ANSI) -> LexicalState:
    return DialectLexer(text, dialect).state_at(offset)


@pytest.mark.unit
class TestAnsi:
    def test_code_string_comment(self):
        text = "select 'a' -- c\nx"
        lexer = DialectLexer(text, Dialect.ANSI)

        assert lexer.state_at(0) == LexicalState()
        assert lexer.state_at(8) == LexicalState(in_string=True, string_open_offset=7)
        assert lexer.state_at(12) == LexicalState(in_comment=True)
        assert lexer.state_at(15) == LexicalState()
        assert lexer.state_at(16) == LexicalState()

    def test_doubled_quote_does_not_close(self):
        text = "'it''s' x"
        assert state(text, 4).in_string
        assert state(text, 8) == LexicalState()

    def test_block_comment(self):
        text = "/* a */ b"
        assert state(text, 3).in_comment
        assert state(text, 8) == LexicalState()

    def test_block_comments_do_not_nest(self):
        text = "/* a /* b */ c */ d"
        assert state(text, 13) == LexicalState()

    def test_double_quoted_identifier_is_a_string(self):
        text = 'select "order" from t'
        assert state(text, 8) == LexicalState(in_string=True, string_open_offset=7)

    def test_unterminated_string_runs_to_end(self):
        assert state("select 'abc", 10).in_string

    def test_unterminated_comment_runs_to_end(self):
        assert state("/* abc", 5).in_comment

    def test_hash_is_code(self):
        assert state("# select", 2) == LexicalState()


@pytest.mark.unit
class TestPostgres:
    def test_nested_block_comments(self):
        text = "/* a /* b */ c */ d"
        assert state(text, 13, Dialect.POSTGRES).in_comment
        assert state(text, 18, Dialect.POSTGRES) == LexicalState()

    def test_escape_string_prefix(self):
        text = "x E'a\\'b' y"
        lexer = DialectLexer(text, Dialect.POSTGRES)

        assert lexer.state_at(4) == LexicalState(in_string=True, string_open_offset=2)
        assert lexer.state_at(10) == LexicalState()

    def test_prefix_letter_inside_word_is_not_a_prefix(self):
        text = "nameE'x'"
        assert state(text, 6, Dialect.POSTGRES).string_open_offset == 5


@pytest.mark.unit
class TestMysql:
    def test_double_dash_needs_whitespace(self):
        assert state("a --x", 4, Dialect.MYSQL) == LexicalState()
        assert state("a -- x", 5, Dialect.MYSQL).in_comment
        assert state("a --x", 4, Dialect.ANSI).in_comment

    def test_double_dash_at_end_of_text(self):
        assert state("a --", 3, Dialect.MYSQL).in_comment

    def test_hash_comment(self):
        assert state("a # select", 5, Dialect.MYSQL).in_comment

    def test_backslash_escape(self):
        text = "'a\\'b' c"
        assert state(text, 4, Dialect.MYSQL).in_string
        assert state(text, 7, Dialect.MYSQL) == LexicalState()

    def test_backtick_identifier(self):
        assert state("`select` x", 2, Dialect.MYSQL).in_string

    def test_mariadb_shares_mysql_grammar(self):
        assert grammar_for(Dialect.MARIADB) is MYSQL_GRAMMAR


@pytest.mark.unit
class TestMs:
    def test_national_string_prefix(self):
        text = "EXEC N'x'"
        assert state(text, 7, Dialect.MS) == LexicalState(
            in_string=True, string_open_offset=5
        )

    def test_bracket_identifier(self):
        text = "[order] x"
        assert state(text, 1, Dialect.MS).in_string
        assert state(text, 8, Dialect.MS) == LexicalState()


@pytest.mark.unit
class TestRedis:
    def test_hash_comment_only(self):
        assert state("# get", 2, Dialect.REDIS).in_comment
        assert state("-- get", 3, Dialect.REDIS) == LexicalState()

    def test_double_quoted_value(self):
        text = 'set k "a\\"b" x'
        assert state(text, 8, Dialect.REDIS).in_string
        assert state(text, 13, Dialect.REDIS) == LexicalState()


@pytest.mark.unit
def test_ansi_grammar_registered():
    assert grammar_for(Dialect.ANSI) is ANSI_GRAMMAR


@pytest.mark.unit
def test_empty_text_has_no_spans():
    assert DialectLexer("", Dialect.ANSI).spans == []
