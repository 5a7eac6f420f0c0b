"""Unit tests for eval prefix matching."""

import pytest

from sql_upcase.domain.capitalization.tokens import WordSyntax
from sql_upcase.domain.models import Dialect
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable


@pytest.fixture
def eval_table(tables):
    return EvalKeywordTable.from_tables(tables)


@pytest.fixture
def syntax():
    return WordSyntax()


@pytest.mark.unit
class TestEvalKeywordTable:
    def test_prefixes_per_dialect(self, eval_table):
        assert eval_table.prefixes_for(Dialect.POSTGRES) == ("EXECUTE", "format(")
        assert eval_table.prefixes_for(Dialect.ANSI) == ()
        assert eval_table.prefixes_for(Dialect.REDIS) == ()

    def test_longest_prefix(self, eval_table):
        assert eval_table.longest_prefix(Dialect.MS) == len("sp_executesql")
        assert eval_table.longest_prefix(Dialect.SQLITE) == 0

    def test_blank_and_padded_prefixes_cleaned(self):
        table = EvalKeywordTable({Dialect.POSTGRES: ["EXECUTE  ", "  "]})
        assert table.prefixes_for(Dialect.POSTGRES) == ("EXECUTE",)


@pytest.mark.unit
class TestMatch:
    @pytest.mark.parametrize(
        "dialect,text_before,expected",
        [
            (Dialect.POSTGRES, "EXECUTE ", "EXECUTE"),
            (Dialect.POSTGRES, "  execute\n\t", "EXECUTE"),
            (Dialect.POSTGRES, "EXECUTE format(", "format("),
            (Dialect.MS, "EXEC sp_executesql ", "sp_executesql"),
            (Dialect.MS, "EXEC(", "EXEC("),
            (Dialect.ORACLE, "begin execute   immediate ", None),
            (Dialect.ORACLE, "begin execute immediate ", "EXECUTE IMMEDIATE"),
        ],
    )
    def test_matches(self, eval_table, syntax, dialect, text_before, expected):
        assert eval_table.match(dialect, text_before, syntax) == expected

    @pytest.mark.parametrize(
        "text_before",
        ["x = ", "myexecute ", "\\execute ", "myformat(", ""],
    )
    def test_no_match(self, eval_table, syntax, text_before):
        assert eval_table.match(Dialect.POSTGRES, text_before, syntax) is None

    def test_dialect_without_prefixes(self, eval_table, syntax):
        assert eval_table.match(Dialect.ANSI, "EXECUTE ", syntax) is None

    def test_prefix_not_starting_with_word_char_needs_no_boundary(self, syntax):
        table = EvalKeywordTable({Dialect.POSTGRES: ["$q$"]})
        assert table.match(Dialect.POSTGRES, "select$q$", syntax) == "$q$"
