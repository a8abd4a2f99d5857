"""Exceptions raised by the aggregator and the entrypoint layer."""

from __future__ import annotations

from typing import Any, Optional


class ScoreboardError(Exception):
    """Base class for every error this package raises."""


class UpstreamError(ScoreboardError):
    """The sports data API could not be reached or returned an unusable response."""

    def __init__(
        self,
        message: str,
        *,
        league: Optional[str] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.league = league
        self.status_code = status_code
        self.url = url


class ValidationError(ScoreboardError):
    """Entrypoint input was malformed."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class UnknownEntrypointError(ScoreboardError):
    def __init__(self, key: str):
        super().__init__(f"Unknown entrypoint: {key}")
        self.key = key
