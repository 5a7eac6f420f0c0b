"""
Configuration management for sql-upcase.

Environment-based configuration using Pydantic BaseSettings. Values are read
from ``SQLUP_*`` environment variables and an optional ``.env`` file at the
project root (``SQLUP_ENV_FILE`` points elsewhere).

Malformed values (non-string blacklist entries, unknown dialect names) are
rejected here, at configuration-load time, so that the capitalization path
never sees them.
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from sql_upcase.domain.models import (
    DEFAULT_EXTRA_WORD_CONSTITUENTS,
    TRIGGER_CHARACTERS,
    Dialect,
)


# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SQLUP_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the SQLUP_ prefix, e.g.
    SQLUP_DEFAULT_DIALECT=postgres. LOG_LEVEL is read without prefix so that
    it is shared with the logging framework.

    SQLUP_BLACKLIST accepts either a JSON list (``["name", "user"]``) or a
    comma-separated string (``name,user``).
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    default_dialect: str = Field(
        default=Dialect.default().value,
        description="Dialect used when a document does not declare one",
    )
    blacklist: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Words never capitalized (literal, case-insensitive)",
    )
    blacklist_file: Optional[str] = Field(
        default=None,
        description="Optional YAML file holding a list of blacklisted words",
    )
    extra_word_constituents: str = Field(
        default=DEFAULT_EXTRA_WORD_CONSTITUENTS,
        description="Characters treated as part of a word besides letters, digits and _",
    )
    keyword_tables_file: Optional[str] = Field(
        default=None,
        description="Override for the packaged dialect keyword table YAML",
    )

    @field_validator("blacklist", mode="before")
    @classmethod
    def _split_blacklist(cls, value: Any) -> Any:
        """Accept JSON or comma-separated strings from the environment."""
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return []
            if stripped.startswith("["):
                return json.loads(stripped)
            return [part for part in (p.strip() for p in stripped.split(",")) if part]
        return value

    @field_validator("blacklist")
    @classmethod
    def _normalize_blacklist(cls, value: List[str]) -> List[str]:
        normalized = []
        for word in value:
            word = word.strip()
            if not word:
                raise ValueError("Blacklist entries must be non-empty strings")
            normalized.append(word.lower())
        return normalized

    @field_validator("default_dialect")
    @classmethod
    def _validate_dialect(cls, value: str) -> str:
        key = value.strip().lower()
        known = [d.value for d in Dialect]
        if key not in known:
            raise ValueError(f"Unknown dialect '{value}'. Available: {known}")
        return key

    @field_validator("extra_word_constituents")
    @classmethod
    def _validate_constituents(cls, value: str) -> str:
        clashes = sorted(
            ch for ch in value if ch.isspace() or ch in TRIGGER_CHARACTERS
        )
        if clashes:
            raise ValueError(
                f"Word constituents may not include whitespace or trigger characters: {clashes!r}"
            )
        return value

    @property
    def dialect(self) -> Dialect:
        return Dialect.from_name(self.default_dialect)

    model_config = SettingsConfigDict(
        env_prefix="SQLUP_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
