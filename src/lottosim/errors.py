"""Exceptions raised by the simulation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class LottoError(Exception):
    """Base engine error."""

    code: str
    message: str
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class SequenceError(LottoError):
    """Operation invoked in the wrong game state."""

    def __init__(self, message: str = "Operation out of sequence", details: Any | None = None) -> None:
        super().__init__(code="out_of_sequence", message=message, details=details)


class AlreadyDrawnError(SequenceError):
    def __init__(self, message: str = "already drawn", details: Any | None = None) -> None:
        super().__init__(message=message, details=details)
        self.code = "already_drawn"


class NotDrawnError(SequenceError):
    def __init__(self, message: str = "lottery not yet drawn", details: Any | None = None) -> None:
        super().__init__(message=message, details=details)
        self.code = "not_drawn"


class InvalidPickError(LottoError, ValueError):
    """Externally supplied numbers failed a part's constraints.

    ``details`` maps pick index -> part index -> list of reasons.
    """

    def __init__(self, message: str = "Invalid pick", details: Any | None = None) -> None:
        super().__init__(code="invalid_pick", message=message, details=details)


class ConfigurationError(LottoError, ValueError):
    """Game configuration cannot be used. Raised at construction time."""

    def __init__(self, message: str = "Invalid configuration", details: Any | None = None) -> None:
        super().__init__(code="configuration_error", message=message, details=details)


class UnconfiguredOutcomeError(ConfigurationError, KeyError):
    def __init__(self, key: Any) -> None:
        super().__init__(message=f"no outcome configured for {key!r}", details={"key": key})
        self.code = "unconfigured_outcome"
