"""
User blacklist of words that are never capitalized.

Entries are literal words compared case-insensitively against the whole
token. Nothing is interpreted as a pattern. The blacklist is an immutable
snapshot; editing it means building a new one and handing it to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, Iterable, List, Optional

import yaml

from sql_upcase.config.settings import Settings
from sql_upcase.domain.errors import BlacklistConfigError
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Blacklist:
    """Read-only set of lowercase exempt words."""

    words: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_words(cls, words: Iterable[Any]) -> "Blacklist":
        """
        Build a blacklist, rejecting anything that is not a non-empty string.

        Raises:
            BlacklistConfigError: If an entry is not a string or is blank
        """
        normalized = set()
        for word in words:
            if not isinstance(word, str):
                raise BlacklistConfigError(
                    f"Blacklist entries must be strings, got {type(word).__name__}: {word!r}"
                )
            stripped = word.strip()
            if not stripped:
                raise BlacklistConfigError("Blacklist entries must be non-empty strings")
            normalized.add(stripped.lower())
        return cls(words=frozenset(normalized))

    def is_blacklisted(self, word: str) -> bool:
        return word.lower() in self.words

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(sorted(self.words))


def load_blacklist_file(path: str) -> List[Any]:
    """
    Read blacklisted words from a YAML file.

    The file holds either a plain list or a mapping with a ``blacklist`` list.

    Raises:
        BlacklistConfigError: If the file is missing, not YAML, or malformed
    """
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise BlacklistConfigError(f"Blacklist file not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(
            "configuration.blacklist_yaml_error",
            config_path=str(config_path),
            error=str(e),
        )
        raise BlacklistConfigError(f"Invalid YAML in blacklist file: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("blacklist") or []
    if not isinstance(data, list):
        raise BlacklistConfigError(
            f"Blacklist file must contain a list of words, got {type(data).__name__}"
        )
    return data


def load_blacklist(
    settings: Settings, extra_words: Optional[Iterable[Any]] = None
) -> Blacklist:
    """
    Combine settings, the optional blacklist file and ``extra_words``.

    Raises:
        BlacklistConfigError: If any source contains a malformed entry
    """
    words: List[Any] = list(settings.blacklist)
    if settings.blacklist_file:
        words.extend(load_blacklist_file(settings.blacklist_file))
    if extra_words:
        words.extend(extra_words)

    try:
        blacklist = Blacklist.from_words(words)
    except BlacklistConfigError as e:
        logger.error("configuration.blacklist_invalid", error=str(e))
        raise

    logger.debug("configuration.blacklist_loaded", size=len(blacklist))
    return blacklist
