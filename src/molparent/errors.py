"""Error hierarchy for molparent."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class StandardizationError(Exception):
    """Base exception for standardization failures."""

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class RuleParseError(StandardizationError, ValueError):
    """A rule record has the wrong number of fields or cannot be read."""


class PatternError(RuleParseError):
    """A configured SMARTS/SMIRKS pattern does not compile."""


class ConfigError(StandardizationError, ValueError):
    """Cleanup parameters are out of range or contain unknown keys."""


class SanitizeError(StandardizationError):
    """A molecule violates valence or aromaticity rules."""


class NoFragmentsRemainError(StandardizationError):
    """Fragment removal or selection left nothing to return."""


__all__ = [
    "StandardizationError",
    "RuleParseError",
    "PatternError",
    "ConfigError",
    "SanitizeError",
    "NoFragmentsRemainError",
]
