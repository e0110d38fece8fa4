"""Application error types.

Every failure that reaches the command line is an AppError subclass
carrying a stable machine-readable code. Library exceptions (sqlite3,
requests, json) are translated into these at the module that calls the
library.
"""

from __future__ import annotations

__all__ = [
    "AppError",
    "DatabaseError",
    "InternalError",
    "InvalidArgumentError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "UnauthorizedError",
    "UpstreamSchemaError",
]


class AppError(Exception):
    """Base class for all steam-cli errors.

    Attributes:
        code: Stable upper-case error code used in the JSON error envelope.
        prefix: Human-readable label prepended to the message.
    """

    code: str = "INTERNAL"
    prefix: str = "internal error"

    def __init__(self, message: str) -> None:
        """Initializes the error.

        Args:
            message: Detail message describing the failure.
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class InvalidArgumentError(AppError):
    """Caller-supplied input is malformed."""

    code = "INVALID_ARGUMENT"
    prefix = "invalid argument"


class NetworkError(AppError):
    """Transport failure while talking to Steam."""

    code = "NETWORK"
    prefix = "network error"


class UpstreamSchemaError(AppError):
    """Remote or scraped data does not have the expected shape."""

    code = "UPSTREAM_SCHEMA"
    prefix = "upstream schema changed"


class NotFoundError(AppError):
    """A well-formed response says the entity does not exist."""

    code = "NOT_FOUND"
    prefix = "not found"


class UnauthorizedError(AppError):
    """Missing or rejected Steam Web API key."""

    code = "UNAUTHORIZED"
    prefix = "unauthorized"


class RateLimitError(AppError):
    """Steam answered with HTTP 429."""

    code = "RATE_LIMIT"
    prefix = "rate limit"


class DatabaseError(AppError):
    """Local SQLite read or write failure."""

    code = "DATABASE"
    prefix = "database error"


class InternalError(AppError):
    """Unexpected local failure (filesystem, missing resources)."""

    code = "INTERNAL"
    prefix = "internal error"
