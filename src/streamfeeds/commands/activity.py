"""Activity commands -- fetch and post activities from the shell."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from streamfeeds.commands import client_from_context
from streamfeeds.output import format_response, success, warning

activity_app = typer.Typer(no_args_is_help=True)


@activity_app.command("get")
def activity_get(
    ctx: typer.Context,
    activity_id: str = typer.Argument(help="Activity id."),
) -> None:
    """Fetch one activity by id.

    Example::

        streamfeeds activity get abc123 --json
    """
    client = client_from_context(ctx)

    async def _run():  # noqa: ANN202
        async with client:
            return await client.feeds.get_activity(activity_id)

    resp = asyncio.run(_run())
    if resp.data is None or resp.data.activity is None:
        warning(f"No activity returned for {activity_id}")
        return
    format_response(resp.data.activity.to_wire())


@activity_app.command("add")
def activity_add(
    ctx: typer.Context,
    activity_type: str = typer.Option("post", "--type", "-t", help="Activity type."),
    text: Optional[str] = typer.Option(None, "--text", help="Activity text."),
    user_id: str = typer.Option(..., "--user", "-u", help="Acting user id."),
    feeds: list[str] = typer.Option(
        ..., "--feed", "-f", help="Target feed id as group:id (repeatable)."
    ),
) -> None:
    """Post an activity to one or more feeds.

    Example::

        streamfeeds activity add -u john -f user:john --text "hello"
    """
    from streamfeeds.models import AddActivityRequest

    request = AddActivityRequest(type=activity_type, text=text, user_id=user_id, feeds=feeds)
    client = client_from_context(ctx)

    async def _run():  # noqa: ANN202
        async with client:
            return await client.feeds.add_activity(request)

    resp = asyncio.run(_run())
    if resp.data is None or resp.data.activity is None:
        warning("Activity accepted but the response carried no activity.")
        return
    success(f"Created activity {resp.data.activity.id}")
    format_response(resp.data.activity.to_wire())
