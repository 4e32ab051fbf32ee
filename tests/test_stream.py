"""Tests for the StreamClient facade."""

from __future__ import annotations

import json

import httpx
import pytest

from streamfeeds import StreamClient
from streamfeeds.endpoints import CommonClient, FeedsClient, ModerationClient
from streamfeeds.exceptions import ConfigurationError
from streamfeeds.models import DEFAULT_BASE_URL


class TestConstruction:
    def test_direct(self) -> None:
        client = StreamClient("k", "s")
        assert isinstance(client, CommonClient)
        assert isinstance(client.feeds, FeedsClient)
        assert isinstance(client.moderation, ModerationClient)
        assert client.config.base_url == DEFAULT_BASE_URL

    def test_endpoint_groups_share_executor(self) -> None:
        client = StreamClient("k", "s")
        assert client.feeds._client is client.executor
        assert client.moderation._client is client.executor

    @pytest.mark.parametrize(("key", "secret"), [("", "s"), ("k", "")])
    def test_empty_credentials_rejected(self, key: str, secret: str) -> None:
        with pytest.raises(ConfigurationError):
            StreamClient(key, secret)

    def test_direct_ignores_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAM_BASE_URL", "https://env.example.com")
        assert StreamClient("k", "s").config.base_url == DEFAULT_BASE_URL

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAM_API_KEY", "env-key")
        monkeypatch.setenv("STREAM_API_SECRET", "env-secret")
        client = StreamClient.from_env(timeout=3)
        assert client.config.api_key == "env-key"
        assert client.config.timeout == 3.0

    def test_from_env_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="STREAM_API_KEY"):
            StreamClient.from_env()


class TestTokenCaching:
    @pytest.mark.asyncio
    async def test_cached_tokens_reused(self, make_client) -> None:
        tokens: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            tokens.append(request.headers["Authorization"])
            return httpx.Response(200, content=json.dumps({}).encode())

        async with make_client(handler, cache_tokens=True) as client:
            await client.feeds.list_feed_groups()
            await client.feeds.list_feed_groups()
        assert len(tokens) == 2
        assert tokens[0] == tokens[1]

    @pytest.mark.asyncio
    async def test_feed_shortcut(self, make_client) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, content=b"{}")

        async with make_client(handler) as client:
            await client.feed("user", "john").get_or_create()
        assert paths == ["/api/v2/feeds/feed_groups/user/feeds/john"]
