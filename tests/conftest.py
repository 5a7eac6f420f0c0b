"""Shared pytest fixtures for sql-upcase.

Settings and keyword tables are cached process-wide; every test starts with
empty caches and without ``SQLUP_*`` variables leaking in from the shell.
"""

from __future__ import annotations

import os
from typing import Optional

import pytest

from sql_upcase.config.settings import get_settings
from sql_upcase.domain.models import Dialect, DocumentMode
from sql_upcase.infrastructure.host.text_document import InMemoryHost, TextDocument
from sql_upcase.infrastructure.keywords.blacklist import Blacklist
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable
from sql_upcase.infrastructure.keywords.tables import (
    clear_keyword_table_cache,
    load_keyword_tables,
)
from sql_upcase.orchestration.session import CapitalizationSession


@pytest.fixture(autouse=True)
def _isolated_configuration(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith("SQLUP_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    clear_keyword_table_cache()
    yield
    get_settings.cache_clear()
    clear_keyword_table_cache()


@pytest.fixture
def tables():
    """Packaged dialect keyword tables."""
    return load_keyword_tables()


@pytest.fixture
def host(tables):
    return InMemoryHost(tables)


@pytest.fixture
def session(host, tables):
    """Session over the in-memory host with an empty blacklist."""
    return CapitalizationSession(host, EvalKeywordTable.from_tables(tables))


@pytest.fixture
def make_document():
    """Factory for TextDocument instances."""

    def _make(
        text: str = "",
        dialect: Optional[Dialect] = None,
        mode: DocumentMode = DocumentMode.QUERY,
        name: str = "test.sql",
    ) -> TextDocument:
        return TextDocument(text=text, name=name, mode=mode, dialect=dialect)

    return _make


@pytest.fixture
def blacklist_name():
    return Blacklist.from_words(["name"])
