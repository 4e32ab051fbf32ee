"""Asynchronous request executor -- the core every endpoint method calls.

:class:`AsyncClient` turns a
:class:`~streamfeeds.client.request.RequestDescriptor` into one HTTP call
and a typed :class:`~streamfeeds.models.StreamResponse`:

1. **URL** -- base URL + path template, placeholders substituted, query
   parameters percent-encoded, ``api_key`` always present exactly once.
2. **Body** -- camelCase JSON, or ``multipart/form-data`` for bodies that
   implement :class:`~streamfeeds.client.request.MultipartBody`.
3. **Auth** -- a freshly signed token plus the ``stream-auth-type`` and
   ``X-Stream-Client`` headers, via
   :class:`~streamfeeds.auth.base.ServerSideAuth`.
4. **Transport** -- one :class:`httpx.AsyncClient` request, no retries.
5. **Mapping** -- non-2xx raises :class:`~streamfeeds.exceptions.ApiError`;
   2xx decodes leniently (see :mod:`streamfeeds.client.response`).

The executor keeps no per-call state. Any number of calls may run
concurrently on one instance; they share only the read-only configuration
and the httpx connection pool. Cancelling the awaiting task raises
:class:`asyncio.CancelledError` out of :meth:`AsyncClient.execute` and no
envelope is produced.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, TypeVar

import httpx

from streamfeeds.auth.base import ServerSideAuth
from streamfeeds.client.request import RequestDescriptor, build_body, build_url, close_files
from streamfeeds.client.response import decode_response, raise_for_status
from streamfeeds.exceptions import TransportError
from streamfeeds.models import ClientConfig, StreamResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncClient:
    """Asynchronous request executor for the Stream REST API.

    Can be used as an async context manager, or created directly and closed
    with :meth:`aclose`. The underlying :class:`httpx.AsyncClient` is opened
    lazily on the first request.

    Args:
        config: Immutable credentials and transport settings.
        auth: Credential builder. Defaults to :class:`ServerSideAuth` over
            *config*, signing a new token per request.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        async with AsyncClient(config) as client:
            resp = await client.request(
                "GET", "/api/v2/feeds/activities/{id}",
                response_type=GetActivityResponse,
                path_params={"id": "abc123"},
            )
    """

    def __init__(
        self,
        config: ClientConfig,
        auth: Optional[ServerSideAuth] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._auth = auth or ServerSideAuth(config)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        self._ensure_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pool. The client reopens it if used again."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: dict[str, Any] = {
                "timeout": self._config.timeout,
                "verify": self._config.verify_ssl,
            }
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def request(
        self,
        method: str,
        path: str,
        response_type: type[T],
        path_params: Optional[Mapping[str, str]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> StreamResponse[T]:
        """Build a :class:`RequestDescriptor` and :meth:`execute` it.

        Args:
            method: HTTP method.
            path: Path template with ``{name}`` placeholders.
            response_type: Type the 2xx body is decoded into.
            path_params: Placeholder values.
            query_params: Query-string parameters.
            body: Optional body (pydantic model, dict/list, or multipart body).
        """
        descriptor = RequestDescriptor(
            method=method.upper(),
            path=path,
            path_params=dict(path_params or {}),
            query_params=dict(query_params or {}),
            body=body,
        )
        return await self.execute(descriptor, response_type)

    async def execute(
        self,
        descriptor: RequestDescriptor,
        response_type: type[T],
    ) -> StreamResponse[T]:
        """Perform one API call described by *descriptor*.

        Returns:
            The decoded envelope. ``data`` is ``None`` when a 2xx body
            could not be decoded.

        Raises:
            ConfigurationError: If the API secret cannot sign a token.
            ApiError: On any non-2xx status (subclass by status code).
            TransportError: On network failures and timeouts.
            FileNotFoundError: If an upload body points at a missing file.
            asyncio.CancelledError: If the awaiting task is cancelled.
        """
        # 1. Auth (sync, CPU only)
        auth = self._auth.authenticate()

        # 2. URL and body
        url = build_url(
            self._config.base_url,
            descriptor.path,
            descriptor.path_params,
            descriptor.query_params,
            auth.params,
        )
        body_kwargs = build_body(descriptor.body)

        # 3. Transport; upload handles are closed whatever the outcome
        try:
            client = self._ensure_client()
            response = await client.request(
                descriptor.method,
                url,
                headers=auth.headers,
                **body_kwargs,
            )
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", descriptor.method, descriptor.path, exc)
            raise TransportError(
                f"{descriptor.method} {descriptor.path} failed: {str(exc) or type(exc).__name__}"
            ) from exc
        finally:
            close_files(body_kwargs)

        logger.debug(
            "%s %s -> %s", descriptor.method, descriptor.path, response.status_code
        )

        # 4. Mapping
        raise_for_status(response)
        return decode_response(response_type, response.text)
