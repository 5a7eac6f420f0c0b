"""
Schema validation and loading for the dialect keyword tables.

The packaged ``settings/dialect_keywords.yml`` is the source of truth for
keyword lists, built-in names, eval prefixes and Redis commands. It is
validated with Pydantic once per path and cached; any problem surfaces as
``KeywordTableError`` at load time rather than during capitalization.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from sql_upcase.domain.errors import KeywordTableError
from sql_upcase.domain.models import Dialect
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TABLES_PATH = Path(__file__).resolve().parent / "settings" / "dialect_keywords.yml"


def _check_words(words: List[str]) -> List[str]:
    cleaned = []
    for word in words:
        word = word.strip()
        if not word:
            raise ValueError("Keyword entries must be non-empty strings")
        cleaned.append(word)
    return cleaned


class DialectTable(BaseModel):
    """Schema for one dialect entry."""

    extends: Optional[str] = Field(None, description="Parent dialect name")
    keywords: List[str] = Field(default_factory=list, description="Reserved words")
    builtins: List[str] = Field(
        default_factory=list, description="Types and functions exposed natively"
    )
    eval_prefixes: List[str] = Field(
        default_factory=list, description="Prefixes introducing eval strings"
    )

    @field_validator("keywords", "builtins")
    @classmethod
    def _validate_words(cls, value: List[str]) -> List[str]:
        return [w.lower() for w in _check_words(value)]

    @field_validator("eval_prefixes")
    @classmethod
    def _validate_prefixes(cls, value: List[str]) -> List[str]:
        # Trailing whitespace is optional in source text, so it is never stored
        return [p.rstrip() for p in _check_words(value)]


class KeywordTablesConfig(BaseModel):
    """Schema for the complete dialect_keywords.yml structure."""

    schema_version: str = Field(..., description="Schema version")
    dialects: Dict[str, DialectTable] = Field(..., min_length=1)
    redis_commands: List[str] = Field(default_factory=list)

    @field_validator("redis_commands")
    @classmethod
    def _validate_commands(cls, value: List[str]) -> List[str]:
        return [w.lower() for w in _check_words(value)]

    @model_validator(mode="after")
    def _validate_dialect_names(self) -> "KeywordTablesConfig":
        known = {d.value for d in Dialect}
        for name, table in self.dialects.items():
            if name not in known:
                raise ValueError(f"Unknown dialect '{name}' in keyword tables")
            if table.extends is not None and table.extends not in self.dialects:
                raise ValueError(
                    f"Dialect '{name}' extends undefined dialect '{table.extends}'"
                )
            self._chain(name)
        if Dialect.ANSI.value not in self.dialects:
            raise ValueError("Keyword tables must define the 'ansi' dialect")
        return self

    def _chain(self, name: str) -> List[DialectTable]:
        """Dialect table followed by its ancestors."""
        chain: List[DialectTable] = []
        seen = set()
        current: Optional[str] = name
        while current is not None and current in self.dialects:
            if current in seen:
                raise ValueError(f"Cyclic 'extends' involving dialect '{current}'")
            seen.add(current)
            table = self.dialects[current]
            chain.append(table)
            current = table.extends
        return chain

    def keywords_for(self, dialect: Dialect) -> List[str]:
        """Reserved words of ``dialect`` including inherited ones, in file order."""
        words: List[str] = []
        for table in reversed(self._chain(dialect.value)):
            words.extend(table.keywords)
        return list(dict.fromkeys(words))

    def builtins_for(self, dialect: Dialect) -> List[str]:
        words: List[str] = []
        for table in reversed(self._chain(dialect.value)):
            words.extend(table.builtins)
        return list(dict.fromkeys(words))

    def eval_prefixes_for(self, dialect: Dialect) -> Tuple[str, ...]:
        """Eval prefixes declared directly by ``dialect`` (not inherited)."""
        table = self.dialects.get(dialect.value)
        return tuple(table.eval_prefixes) if table else ()

    def has_dialect(self, dialect: Dialect) -> bool:
        return dialect.value in self.dialects


@lru_cache(maxsize=8)
def _load_cached(path_str: str) -> KeywordTablesConfig:
    config_path = Path(path_str)
    if not config_path.exists():
        raise KeywordTableError(f"Keyword table file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(
            "configuration.keyword_tables_yaml_error",
            config_path=str(config_path),
            error=str(e),
        )
        raise KeywordTableError(f"Invalid YAML in keyword table file: {e}") from e

    if not isinstance(raw, dict):
        raise KeywordTableError(
            f"Keyword table file must contain a mapping, got {type(raw).__name__}"
        )

    try:
        tables = KeywordTablesConfig(**raw)
    except ValidationError as e:
        logger.error(
            "configuration.keyword_tables_invalid",
            config_path=str(config_path),
            error=str(e),
        )
        raise KeywordTableError(f"Keyword table validation failed: {e}") from e

    logger.debug(
        "configuration.keyword_tables_loaded",
        config_path=str(config_path),
        dialects=sorted(tables.dialects),
        redis_commands=len(tables.redis_commands),
    )
    return tables


def load_keyword_tables(path: Optional[str] = None) -> KeywordTablesConfig:
    """
    Load and validate the dialect keyword tables.

    Args:
        path: YAML file to load; the packaged table when omitted

    Returns:
        Validated KeywordTablesConfig (cached per resolved path)

    Raises:
        KeywordTableError: If the file is missing, not YAML, or fails validation
    """
    resolved = Path(path).expanduser().resolve() if path else DEFAULT_TABLES_PATH
    return _load_cached(str(resolved))


def clear_keyword_table_cache() -> None:
    """Forget loaded tables (tests, or after editing an override file)."""
    _load_cached.cache_clear()
