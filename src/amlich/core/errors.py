from __future__ import annotations

from typing import Any, Dict, Optional


class AmlichError(Exception):
    """Base error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class InvalidDateError(AmlichError, ValueError):
    """Raised for a malformed solar or lunar date (month=13, Feb 30, leap flag on a regular month)."""


class OutOfRangeError(AmlichError, ValueError):
    """Raised when a year lies outside the engine's validated range."""


class EngineUnavailableError(AmlichError):
    """Raised when an optional extra (numpy, matplotlib, skyfield) is not installed."""
