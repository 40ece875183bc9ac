"""stackconf get -- print a single config value."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml

from stackconf._api import get_config
from stackconf.cli.display import print_error
from stackconf.cli.utils import resolve_defaults
from stackconf.core.settings import SettingsTree
from stackconf.exceptions import StackconfError


def get_cmd(
    key: Annotated[str, typer.Argument(help="Dotted key path to read")],
    environment: Annotated[
        str | None,
        typer.Option("--environment", "-e", help="Environment to read (default: common)"),
    ] = None,
    subcomponent: Annotated[
        str,
        typer.Option("--subcomponent", "-s", help="Dotted subcomponent path to read"),
    ] = "",
    component_path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Component directory (default: current directory)"),
    ] = None,
) -> None:
    """Print one config value. Maps are printed as YAML."""
    try:
        env, location, _ = resolve_defaults(environment, component_path)
        value = get_config(key, location=location, environment=env, subcomponent=subcomponent)
    except (StackconfError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    # Plain output so the value can be captured by scripts
    if isinstance(value, SettingsTree):
        typer.echo(yaml.safe_dump(value.to_dict(), sort_keys=False).rstrip("\n"))
    elif isinstance(value, str):
        typer.echo(value)
    else:
        typer.echo(json.dumps(value))
