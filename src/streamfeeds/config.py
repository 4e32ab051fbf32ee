"""Credential and settings resolution.

:func:`load_config` produces the immutable
:class:`~streamfeeds.models.ClientConfig` a client is built from. Values
are resolved in precedence order:

1. Explicit arguments.
2. Process environment (``STREAM_API_KEY``, ``STREAM_API_SECRET``,
   ``STREAM_BASE_URL``, ``STREAM_TIMEOUT``).
3. A ``.env`` file -- either the path passed as *env_file* or the first one
   found walking up from the working directory. Variables already present in
   the environment are never overwritten by the file.

A missing key or secret raises :class:`~streamfeeds.exceptions.ConfigurationError`
naming the variable to set.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from streamfeeds.exceptions import ConfigurationError
from streamfeeds.models import DEFAULT_BASE_URL, ClientConfig

logger = logging.getLogger(__name__)

ENV_API_KEY = "STREAM_API_KEY"
ENV_API_SECRET = "STREAM_API_SECRET"
ENV_BASE_URL = "STREAM_BASE_URL"
ENV_TIMEOUT = "STREAM_TIMEOUT"


def load_env_file(env_file: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Load a ``.env`` file into the process environment without overriding it.

    Args:
        env_file: Explicit file path. When ``None``, search upward from the
            current working directory.

    Returns:
        The path that was loaded, or ``None`` if no file was found.

    Raises:
        ConfigurationError: If an explicit *env_file* does not exist.
    """
    if env_file is not None:
        path = Path(env_file)
        if not path.is_file():
            raise ConfigurationError(f"Env file not found: {path}")
    else:
        found = find_dotenv(".env", usecwd=True)
        if not found:
            return None
        path = Path(found)
    load_dotenv(path, override=False)
    logger.debug("Loaded environment from %s", path)
    return path


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name, "")
    return value or None


def load_config(
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    env_file: Optional[Union[str, Path]] = None,
    load_env: bool = True,
) -> ClientConfig:
    """Resolve credentials and settings into a :class:`ClientConfig`.

    Args:
        api_key: Explicit API key (highest precedence).
        api_secret: Explicit API secret.
        base_url: Explicit API origin.
        timeout: Explicit request timeout in seconds.
        env_file: ``.env`` file to load; discovered automatically when ``None``.
        load_env: When ``False``, neither the environment nor any ``.env``
            file is consulted.

    Raises:
        ConfigurationError: If the key or secret is missing, or a value fails
            validation.

    Example::

        config = load_config(env_file="/srv/app/.env")
    """
    if load_env:
        load_env_file(env_file)
        api_key = api_key or _env(ENV_API_KEY)
        api_secret = api_secret or _env(ENV_API_SECRET)
        base_url = base_url or _env(ENV_BASE_URL)
        if timeout is None and _env(ENV_TIMEOUT):
            timeout_value = _env(ENV_TIMEOUT)
            try:
                timeout = float(timeout_value)  # type: ignore[arg-type]
            except ValueError as exc:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be a number, got {timeout_value!r}"
                ) from exc

    if not api_key:
        raise ConfigurationError(
            f"API key not provided. Set {ENV_API_KEY} or pass api_key."
        )
    if not api_secret:
        raise ConfigurationError(
            f"API secret not provided. Set {ENV_API_SECRET} or pass api_secret."
        )

    values: dict[str, object] = {
        "api_key": api_key,
        "api_secret": api_secret,
        "base_url": base_url or DEFAULT_BASE_URL,
    }
    if timeout is not None:
        values["timeout"] = timeout
    try:
        return ClientConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid client configuration: {exc}") from exc
