"""Low-level commands -- mint a server token, or send one raw API call.

``streamfeeds request`` exposes the request executor directly: any path
template, path parameters, query parameters, and JSON body. The signed
token and ``api_key`` are added automatically.

Example::

    streamfeeds token --ttl 600
    streamfeeds request GET /api/v2/feeds/activities/{id} -p id=abc123
    streamfeeds request POST /api/v2/feeds/activities/query --body '{"limit": 5}'
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import typer

from streamfeeds.commands import client_from_context, parse_pairs
from streamfeeds.output import debug, format_response, print_data, warning


def token_command(
    ctx: typer.Context,
    ttl: int = typer.Option(3600, "--ttl", min=1, help="Token lifetime in seconds."),
) -> None:
    """Print a signed server-side token for the configured secret."""
    from streamfeeds.auth.signer import TokenSigner
    from streamfeeds.config import load_config

    obj = ctx.obj or {}
    config = load_config(env_file=obj.get("env_file"))
    token = TokenSigner(ttl=ttl).sign(config.api_secret.get_secret_value())
    print_data(token)


def request_command(
    ctx: typer.Context,
    method: str = typer.Argument(help="HTTP method, e.g. GET or POST."),
    path: str = typer.Argument(help="Path template, e.g. /api/v2/feeds/activities/{id}."),
    query: Optional[list[str]] = typer.Option(
        None, "--query", "-q", help="Query parameter as key=value (repeatable)."
    ),
    path_param: Optional[list[str]] = typer.Option(
        None, "--path-param", "-p", help="Path placeholder value as key=value (repeatable)."
    ),
    body: Optional[str] = typer.Option(None, "--body", "-d", help="JSON request body."),
) -> None:
    """Send one API call and print the decoded data."""
    query_params = parse_pairs(query, "--query")
    path_params = parse_pairs(path_param, "--path-param")
    json_body: Any = None
    if body is not None:
        try:
            json_body = json.loads(body)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"not valid JSON: {exc}", param_hint="--body") from None

    client = client_from_context(ctx)

    async def _run() -> Any:
        async with client:
            return await client.executor.request(
                method,
                path,
                Any,  # type: ignore[arg-type]
                path_params=path_params,
                query_params=query_params,
                body=json_body,
            )

    resp = asyncio.run(_run())
    duration = resp.duration
    if duration is None and isinstance(resp.data, dict):
        # untyped bodies keep duration inside the data
        duration = resp.data.get("duration")
    if duration:
        debug(f"Server duration: {duration}")
    if resp.data is None:
        warning("Response carried no data.")
        return
    format_response(resp.data)
