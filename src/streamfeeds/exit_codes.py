"""Numeric process exit codes used by the ``streamfeeds`` command line.

Each constant maps to an error category and is referenced by the
corresponding :class:`~streamfeeds.exceptions.StreamError` subclass.
Shell scripts can branch on the exit code without parsing stderr.

Example::

    $ streamfeeds activity get does-not-exist
    $ echo $?
    4   # EXIT_NOT_FOUND
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""The API rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The API returned an HTTP 5xx error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred before a status code was received."""

EXIT_CONFIG_ERROR = 7
"""Credentials or settings are missing or invalid."""

EXIT_RATE_LIMITED = 8
"""The API throttled the request (HTTP 429)."""
