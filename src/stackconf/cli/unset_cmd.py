"""stackconf unset -- remove config keys or whole subcomponents."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from stackconf._api import remove_component, unset_config
from stackconf.cli.display import console, print_error
from stackconf.cli.utils import resolve_defaults
from stackconf.exceptions import StackconfError


def unset_cmd(
    keys: Annotated[
        list[str] | None,
        typer.Argument(help="One or more dotted key paths to remove"),
    ] = None,
    environment: Annotated[
        str | None,
        typer.Option("--environment", "-e", help="Environment to modify (default: common)"),
    ] = None,
    subcomponent: Annotated[
        str,
        typer.Option("--subcomponent", "-s", help="Dotted subcomponent path to modify"),
    ] = "",
    remove_subcomponent: Annotated[
        bool,
        typer.Option(
            "--remove-component",
            help="Remove the subcomponent given by --subcomponent entirely",
        ),
    ] = False,
    component_path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Component directory (default: current directory)"),
    ] = None,
) -> None:
    """Unset config values for a component, deleting the keys.

    Examples:

        stackconf unset --environment prod data.replicas username

        stackconf unset --subcomponent myapp --remove-component
    """
    try:
        env, location, _ = resolve_defaults(environment, component_path)

        if remove_subcomponent:
            if not subcomponent:
                raise ValueError("--remove-component requires --subcomponent")
            written = remove_component(subcomponent, location=location, environment=env)
        else:
            if not keys:
                raise ValueError("'unset' takes one or more key paths to remove")
            written = unset_config(
                keys, location=location, environment=env, subcomponent=subcomponent
            )
    except (StackconfError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print(f"[dim]Config written to {written}[/dim]", soft_wrap=True)
