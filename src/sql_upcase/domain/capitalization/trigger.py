"""Incremental capitalization as characters arrive."""

from __future__ import annotations

from typing import FrozenSet, Hashable, Iterable, Optional

from sql_upcase.domain.capitalization.engine import CapitalizationEngine
from sql_upcase.domain.capitalization.tokens import TokenLocator
from sql_upcase.domain.models import TRIGGER_CHARACTERS, Outcome


class TriggerController:
    """
    Reacts to single-character insertions.

    When the inserted character is a trigger character, the token directly
    behind it is handed to the engine once. The scan only reads text, so the
    host cursor stays where the user left it.
    """

    def __init__(
        self,
        locator: TokenLocator,
        engine: CapitalizationEngine,
        triggers: Iterable[str] = TRIGGER_CHARACTERS,
    ) -> None:
        self._locator = locator
        self._engine = engine
        self.triggers: FrozenSet[str] = frozenset(triggers)

    def on_insert(self, document: Hashable, char: str, offset: int) -> Optional[Outcome]:
        """
        Handle the insertion of ``char`` at ``offset``.

        Returns:
            The engine outcome, or None when ``char`` is not a trigger or no
            token precedes it
        """
        if char not in self.triggers:
            return None
        return self.capitalize_before(document, offset + len(char))

    def capitalize_before(self, document: Hashable, offset: int) -> Optional[Outcome]:
        """Locate the token behind ``offset`` and run the engine on it."""
        token = self._locator.token_before(document, offset)
        if token is None:
            return None
        return self._engine.maybe_capitalize(document, token)
