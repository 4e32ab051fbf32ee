"""Built-in CLI sub-commands for streamfeeds.

* :mod:`~streamfeeds.commands.api` -- ``token`` and the raw ``request``
  command that drives the executor directly.
* :mod:`~streamfeeds.commands.activity` -- ``activity get`` / ``activity add``.

Commands build their :class:`~streamfeeds.stream.StreamClient` through
:func:`client_from_context`, which honours the root ``--env-file`` flag.
"""

from __future__ import annotations

import typer

from streamfeeds.stream import StreamClient


def client_from_context(ctx: typer.Context) -> StreamClient:
    """Build a client from the environment and the root ``--env-file`` option."""
    obj = ctx.obj or {}
    return StreamClient.from_env(env_file=obj.get("env_file"))


def parse_pairs(values: list[str] | None, option: str) -> dict[str, str]:
    """Turn repeated ``key=value`` option values into a dict.

    Raises:
        typer.BadParameter: If an item has no ``=``.
    """
    pairs: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint=option)
        pairs[key] = value
    return pairs
