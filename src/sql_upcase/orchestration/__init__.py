"""Wiring of the capitalization components into per-host sessions."""

from sql_upcase.orchestration.session import CapitalizationSession

__all__ = ["CapitalizationSession"]
