"""stackconf show -- render a component's config tree."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from stackconf._api import load_component
from stackconf.cli.display import build_component_tree, console, print_error
from stackconf.cli.utils import resolve_defaults
from stackconf.exceptions import StackconfError


def show_cmd(
    environment: Annotated[
        str | None,
        typer.Option("--environment", "-e", help="Environment to show (default: common)"),
    ] = None,
    component_path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Component directory (default: current directory)"),
    ] = None,
) -> None:
    """Show the config tree of a component and its subcomponents."""
    try:
        env, location, default_format = resolve_defaults(environment, component_path)
        node = load_component(location, env, default_format=default_format)
    except StackconfError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print(build_component_tree(node, f"{location} [{env}]"))
    if not node.to_dict():
        console.print(f"[dim]No '{env}' config found at {location}[/dim]")
