"""Unit tests for the capitalize/skip decision."""

import textwrap

import pytest

from sql_upcase.domain.capitalization.classifier import SyntaxClassifier
from sql_upcase.domain.capitalization.engine import CapitalizationEngine
from sql_upcase.domain.capitalization.tokens import WordSyntax
from sql_upcase.domain.models import Dialect, DocumentMode, Outcome, Token
from sql_upcase.infrastructure.host.text_document import InMemoryHost, TextDocument
from sql_upcase.infrastructure.keywords.blacklist import Blacklist
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable
from sql_upcase.infrastructure.keywords.registry import KeywordRegistry
from sql_upcase.infrastructure.keywords.tables import load_keyword_tables


class RecordingHost(InMemoryHost):
    def __init__(self, tables):
        super().__init__(tables)
        self.replacements = []

    def replace_text(self, document, start, end, new_text):
        self.replacements.append((start, end, new_text))
        super().replace_text(document, start, end, new_text)


def build_engine(host, tables, blacklist=None):
    classifier = SyntaxClassifier(host, EvalKeywordTable.from_tables(tables), WordSyntax())
    return CapitalizationEngine(host, KeywordRegistry(host), classifier, blacklist)


def token_of(document, word, occurrence=0):
    start = -1
    for _ in range(occurrence + 1):
        start = document.text.index(word, start + 1)
    return Token(start, start + len(word), document.text[start:start + len(word)])


@pytest.fixture
def recording_host(tables):
    return RecordingHost(tables)


@pytest.fixture
def engine(recording_host, tables):
    return build_engine(recording_host, tables)


@pytest.mark.unit
class TestCapitalize:
    def test_keyword_in_code(self, engine):
        document = TextDocument("select 1")
        assert engine.maybe_capitalize(document, token_of(document, "select")) is (
            Outcome.CAPITALIZED
        )
        assert document.text == "SELECT 1"

    def test_mixed_case_keyword(self, engine):
        document = TextDocument("SeLeCt 1")
        engine.maybe_capitalize(document, token_of(document, "SeLeCt"))
        assert document.text == "SELECT 1"

    def test_already_canonical_issues_no_edit(self, engine, recording_host):
        document = TextDocument("SELECT 1")
        assert engine.maybe_capitalize(document, token_of(document, "SELECT")) is (
            Outcome.CAPITALIZED
        )
        assert recording_host.replacements == []

    def test_eval_string(self, engine):
        document = TextDocument("EXECUTE 'select 1'", dialect=Dialect.POSTGRES)
        engine.maybe_capitalize(document, token_of(document, "select"))
        assert document.text == "EXECUTE 'SELECT 1'"

    def test_commented_eval_prefix_leaves_string_alone(self, engine):
        document = TextDocument("-- execute\n'select 1'", dialect=Dialect.POSTGRES)
        token = token_of(document, "select")

        assert engine.maybe_capitalize(document, token) is Outcome.SKIPPED
        assert document.text == "-- execute\n'select 1'"

    def test_explicit_dialect(self, engine):
        document = TextDocument("returning id")
        token = token_of(document, "returning")

        assert engine.maybe_capitalize(document, token) is Outcome.SKIPPED
        assert engine.maybe_capitalize(document, token, Dialect.POSTGRES) is (
            Outcome.CAPITALIZED
        )
        assert document.text == "RETURNING id"


@pytest.mark.unit
class TestSkip:
    @pytest.mark.parametrize("word", ["foo", "selection", "sel"])
    def test_not_a_whole_keyword(self, engine, recording_host, word):
        document = TextDocument(f"{word} x")
        assert engine.maybe_capitalize(document, token_of(document, word)) is (
            Outcome.SKIPPED
        )
        assert recording_host.replacements == []

    def test_blacklisted(self, recording_host, tables):
        engine = build_engine(recording_host, tables, Blacklist.from_words(["NAME", "user"]))
        document = TextDocument("select user from t")

        assert engine.maybe_capitalize(document, token_of(document, "user")) is (
            Outcome.SKIPPED
        )
        assert document.text == "select user from t"

    def test_comment(self, engine):
        document = TextDocument("-- select")
        assert engine.maybe_capitalize(document, token_of(document, "select")) is (
            Outcome.SKIPPED
        )

    def test_plain_string(self, engine):
        document = TextDocument("x = 'select 1'", dialect=Dialect.POSTGRES)
        assert engine.maybe_capitalize(document, token_of(document, "select")) is (
            Outcome.SKIPPED
        )
        assert document.text == "x = 'select 1'"

    def test_quoted_identifier(self, engine):
        document = TextDocument('select "order" from t')
        assert engine.maybe_capitalize(document, token_of(document, "order")) is (
            Outcome.SKIPPED
        )

    def test_canonical_form_of_different_length(self, tmp_path):
        path = tmp_path / "keywords.yml"
        path.write_text(
            textwrap.dedent(
                """
                schema_version: "1.0"
                dialects:
                  ansi: {keywords: [straße, select]}
                """
            ),
            encoding="utf-8",
        )
        tables = load_keyword_tables(str(path))
        host = RecordingHost(tables)
        engine = build_engine(host, tables)
        document = TextDocument("straße")

        assert engine.maybe_capitalize(document, token_of(document, "straße")) is (
            Outcome.SKIPPED
        )
        assert host.replacements == []

    def test_key_value_document_ignores_sql_keywords(self, engine):
        document = TextDocument("get from", mode=DocumentMode.KEY_VALUE)
        assert engine.maybe_capitalize(document, token_of(document, "from")) is (
            Outcome.SKIPPED
        )
        assert engine.maybe_capitalize(document, token_of(document, "get")) is (
            Outcome.CAPITALIZED
        )
        assert document.text == "GET from"


@pytest.mark.unit
class TestBlacklistSnapshot:
    def test_default_is_empty(self, engine):
        assert len(engine.blacklist) == 0

    def test_use_blacklist(self, engine):
        engine.use_blacklist(Blacklist.from_words(["select"]))
        document = TextDocument("select 1")

        assert engine.maybe_capitalize(document, token_of(document, "select")) is (
            Outcome.SKIPPED
        )
        assert engine.blacklist.is_blacklisted("SELECT")
