"""The :class:`StreamClient` facade.

One ``StreamClient`` owns one request executor and exposes every endpoint
group on top of it. It is safe to share a single instance across any
number of concurrent tasks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import httpx

from streamfeeds.auth.base import ServerSideAuth
from streamfeeds.auth.signer import CachingTokenSigner
from streamfeeds.client.async_client import AsyncClient
from streamfeeds.config import load_config
from streamfeeds.endpoints.common import CommonClient
from streamfeeds.endpoints.feeds import Feed, FeedsClient
from streamfeeds.endpoints.moderation import ModerationClient
from streamfeeds.models import DEFAULT_BASE_URL, ClientConfig


class StreamClient(CommonClient):
    """Entry point to the API: common endpoints plus ``.feeds`` and ``.moderation``.

    Args:
        api_key: Public API key.
        api_secret: API secret used to sign server tokens.
        base_url: API origin.
        timeout: Request timeout in seconds.
        cache_tokens: Reuse a signed token until shortly before it expires
            instead of signing one per request.
        transport: Optional httpx transport (tests).

    Raises:
        ConfigurationError: If the key or secret is empty.

    Example::

        async with StreamClient("key", "secret") as client:
            await client.feeds.get_activity("a1")
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        cache_tokens: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        config = load_config(
            api_key=api_key,
            api_secret=api_secret,
            base_url=base_url,
            timeout=timeout,
            load_env=False,
        )
        self._init_from_config(config, cache_tokens=cache_tokens, transport=transport)

    def _init_from_config(
        self,
        config: ClientConfig,
        cache_tokens: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        signer = CachingTokenSigner() if cache_tokens else None
        executor = AsyncClient(config, auth=ServerSideAuth(config, signer), transport=transport)
        super().__init__(executor)
        self.feeds = FeedsClient(executor)
        self.moderation = ModerationClient(executor)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        cache_tokens: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> StreamClient:
        client = cls.__new__(cls)
        client._init_from_config(config, cache_tokens=cache_tokens, transport=transport)
        return client

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[str, Path]] = None,
        cache_tokens: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **overrides: object,
    ) -> StreamClient:
        """Build a client from ``STREAM_*`` variables and an optional ``.env`` file.

        Keyword *overrides* (``api_key``, ``api_secret``, ``base_url``,
        ``timeout``) take precedence over the environment.

        Raises:
            ConfigurationError: If the key or secret cannot be resolved.
        """
        config = load_config(env_file=env_file, **overrides)  # type: ignore[arg-type]
        return cls.from_config(config, cache_tokens=cache_tokens, transport=transport)

    @property
    def executor(self) -> AsyncClient:
        """The shared request executor, for calls without a dedicated method."""
        return self._client

    @property
    def config(self) -> ClientConfig:
        return self._client.config

    def feed(self, feed_group_id: str, feed_id: str) -> Feed:
        return self.feeds.feed(feed_group_id, feed_id)

    async def __aenter__(self) -> StreamClient:
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()
