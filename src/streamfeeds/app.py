"""Typer application and CLI entry point for streamfeeds.

The :func:`main` function is the ``streamfeeds`` console script declared in
``pyproject.toml``. It registers the built-in sub-commands, installs a
SIGINT handler, and maps :class:`~streamfeeds.exceptions.StreamError`
subclasses to their exit codes.

See Also:
    :mod:`streamfeeds.config`: how ``--env-file`` and ``STREAM_*`` variables
    are resolved.
    :mod:`streamfeeds.output`: output formatting set up in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import typer

from streamfeeds import __version__
from streamfeeds.commands.activity import activity_app
from streamfeeds.commands.api import request_command, token_command
from streamfeeds.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="streamfeeds",
    help="Call the Stream activity feeds API from the shell.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("token")(token_command)
app.command("request")(request_command)
app.add_typer(activity_app, name="activity", help="Fetch and post activities.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"streamfeeds {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    env_file: Optional[str] = typer.Option(
        None, "--env-file", "-e", help="Load STREAM_* variables from this .env file."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~streamfeeds.output.OutputManager`, routes
    library log records to stderr, and stores ``env_file`` in ``ctx.obj``
    for the sub-commands.
    """
    from streamfeeds.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    output.install_log_handler()

    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``streamfeeds`` console script.

    :class:`~streamfeeds.exceptions.StreamError` instances exit with their
    ``exit_code``; a missing upload file exits with the generic failure code.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app(standalone_mode=False)
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        import click

        from streamfeeds.exceptions import StreamError
        from streamfeeds.output import error

        if isinstance(exc, click.exceptions.ClickException):
            exc.show()
            sys.exit(exc.exit_code)
        if isinstance(exc, click.exceptions.Abort):
            sys.stderr.write("\nAborted.\n")
            sys.exit(EXIT_GENERIC_FAILURE)
        if isinstance(exc, StreamError):
            error(str(exc))
            sys.exit(exc.exit_code)
        if isinstance(exc, FileNotFoundError):
            error(str(exc))
            sys.exit(EXIT_GENERIC_FAILURE)
        raise
    sys.exit(0)
