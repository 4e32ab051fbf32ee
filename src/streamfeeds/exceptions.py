"""Exception hierarchy for streamfeeds.

All exceptions inherit from :class:`StreamError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`streamfeeds.exit_codes`. Library callers branch on the exception
type (or on :attr:`ApiError.status_code`); the CLI entry point catches
``StreamError`` and exits with the matching code.

Subclass hierarchy::

    StreamError (exit 1)
    +-- ConfigurationError  (exit 7)
    +-- TransportError      (exit 6)
    +-- ApiError            (exit 1)
        +-- AuthError       (exit 3)
        +-- NotFoundError   (exit 4)
        +-- RateLimitError  (exit 8)
        +-- ServerError     (exit 5)

Nothing in this package retries on any of these. Whether a failure is
worth retrying is the caller's decision.
"""

from __future__ import annotations

from typing import Optional

from streamfeeds.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_SERVER_ERROR,
)


class StreamError(Exception):
    """Base exception for all streamfeeds errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigurationError(StreamError):
    """Raised for missing or invalid credentials and settings (e.g. an empty API secret)."""

    exit_code = EXIT_CONFIG_ERROR


class TransportError(StreamError):
    """Raised on network-level failures before a status code is received.

    Covers DNS resolution, TLS, connect and read errors, and timeouts. The
    underlying :mod:`httpx` exception is chained as ``__cause__``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ApiError(StreamError):
    """Raised when the API answers with a non-2xx status code.

    Instances are immutable records of the failed exchange: the caller can
    branch on :attr:`status_code` or inspect :attr:`raw_body` directly.

    Args:
        message: Human-readable description, usually taken from the body.
        status_code: The HTTP status code.
        raw_body: The undecoded response body text.
        code: The vendor's numeric error code, when the body carries one.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        raw_body: str,
        code: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.raw_body = raw_body
        self.code = code

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code!r}, "
            f"message={self.message!r})"
        )


class AuthError(ApiError):
    """Raised on HTTP 401 / 403 (bad API key, bad signature, expired token)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(ApiError):
    """Raised on HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class RateLimitError(ApiError):
    """Raised on HTTP 429."""

    exit_code = EXIT_RATE_LIMITED


class ServerError(ApiError):
    """Raised on HTTP 5xx."""

    exit_code = EXIT_SERVER_ERROR
