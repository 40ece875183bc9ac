"""Command-line interface for stackconf.

Provides commands for:
- Setting and unsetting component config values
- Removing subcomponent configs
- Reading single values and showing whole config trees
"""

from __future__ import annotations

# Load .env file BEFORE reading any STACKCONF_* variables
from dotenv import load_dotenv

load_dotenv()

# ruff: noqa: E402 - imports must come after load_dotenv()
import os
from pathlib import Path
from typing import Annotated

import typer

from stackconf import __version__
from stackconf.cli.display import console, print_error
from stackconf.constants import VERBOSITY_ENV
from stackconf.exceptions import ConfigError
from stackconf.logging import VerbosityType, setup_logging

app = typer.Typer(
    name="stackconf",
    help="Manage nested component configuration across environments",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"stackconf v{__version__}")
        raise typer.Exit()


def _resolve_verbosity(verbose: bool, quiet: bool) -> VerbosityType:
    """Flags > STACKCONF_VERBOSITY > user config ui.verbosity."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    env_value = os.environ.get(VERBOSITY_ENV, "").lower()
    if env_value in ("quiet", "normal", "verbose"):
        return env_value  # type: ignore[return-value]

    from stackconf.config.user_config import load_user_config

    return load_user_config().ui.verbosity


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable full logs with timestamps")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Minimal output (warnings only)")
    ] = False,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Also write DEBUG logs to this file")
    ] = None,
) -> None:
    """Manage nested component configuration across environments."""
    try:
        verbosity = _resolve_verbosity(verbose, quiet)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    setup_logging(verbosity=verbosity, log_file=str(log_file) if log_file else None)


def version_cmd() -> None:
    """Show the stackconf version."""
    console.print(f"stackconf v{__version__}")


def _register_commands() -> None:
    """Register all commands with the app.

    Done in a function to control import order and avoid circular imports.
    """
    from stackconf.cli import get_cmd, set_cmd, show_cmd, unset_cmd

    app.command("set")(set_cmd.set_cmd)
    app.command("unset")(unset_cmd.unset_cmd)
    app.command("get")(get_cmd.get_cmd)
    app.command("show")(show_cmd.show_cmd)
    app.command("version")(version_cmd)


_register_commands()


__all__ = ["app", "console", "main"]

if __name__ == "__main__":
    app()
