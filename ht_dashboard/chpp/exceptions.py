"""Exceptions raised by the CHPP feed client.

Every subclass is fatal to a sync run.
"""

from __future__ import annotations


class ChppError(RuntimeError):
    """Base class for CHPP feed failures."""


class ChppTransportError(ChppError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChppAuthError(ChppError):
    """Missing credentials or the CHPP endpoint rejected the OAuth signature."""


class ChppParseError(ChppError):
    """The response body is not a usable HattrickData document."""


class ChppApiError(ChppError):
    """CHPP answered with its own error document (chpperror.xml)."""

    def __init__(self, message: str, error_code: int | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code
