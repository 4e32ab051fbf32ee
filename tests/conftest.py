"""Shared test fixtures for streamfeeds.

Provides a ready-made client configuration, a helper for building clients
over :class:`httpx.MockTransport`, and isolation of the process
environment from any real ``STREAM_*`` credentials or ``.env`` file.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx
import pytest

from streamfeeds.models import ClientConfig
from streamfeeds.output import reset_output
from streamfeeds.stream import StreamClient


API_KEY = "test-key"
API_SECRET = "test-secret-with-enough-bytes-for-hs256"
BASE_URL = "https://feeds.example.com"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and CLI log handler after every test.

    Typer's CliRunner swaps sys.stdout/sys.stderr during a test; a manager
    created then would keep references to closed streams.
    """
    yield
    reset_output()
    logger = logging.getLogger("streamfeeds")
    for handler in list(logger.handlers):
        if getattr(handler, "_streamfeeds_cli", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Strip STREAM_* variables and run from an empty directory.

    Keeps a developer's real credentials or ``.env`` file from leaking into
    configuration tests.
    """
    for name in ("STREAM_API_KEY", "STREAM_API_SECRET", "STREAM_BASE_URL", "STREAM_TIMEOUT"):
        # setenv first so monkeypatch also removes values a .env file loads later
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Configuration and clients
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key=API_KEY, api_secret=API_SECRET, base_url=BASE_URL)


@pytest.fixture
def make_client(config: ClientConfig) -> Callable[..., StreamClient]:
    """Factory: ``make_client(handler)`` returns a StreamClient over a MockTransport."""

    def _make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> StreamClient:
        return StreamClient.from_config(config, transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def recorder() -> dict[str, Any]:
    """Mutable dict a mock handler can stash the last request into."""
    return {}
