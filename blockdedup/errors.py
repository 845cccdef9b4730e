"""
Exceptions raised by the dedup engine.
"""

from __future__ import annotations

from typing import Optional


class ConfigurationError(ValueError):
    """
    Invalid engine configuration (e.g. a preserve pattern that does not compile,
    a NaN threshold). Raised before any block is processed.
    """

    def __init__(self, message: str, *, pattern: Optional[str] = None, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.pattern = pattern
        self.reason = reason
