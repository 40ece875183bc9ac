"""stackconf set -- set config values for a component or subcomponent."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from stackconf._api import set_config
from stackconf.cli.display import console, print_error
from stackconf.cli.utils import parse_assignment, read_assignments_file, resolve_defaults
from stackconf.exceptions import StackconfError


def set_cmd(
    assignments: Annotated[
        list[str] | None,
        typer.Argument(help="One or more <key.path>=<value> pairs"),
    ] = None,
    environment: Annotated[
        str | None,
        typer.Option("--environment", "-e", help="Environment to modify (default: common)"),
    ] = None,
    subcomponent: Annotated[
        str,
        typer.Option("--subcomponent", "-s", help="Dotted subcomponent path to modify"),
    ] = "",
    no_new_config_keys: Annotated[
        bool,
        typer.Option(
            "--no-new-config-keys",
            "-n",
            help="Fail instead of creating subcomponents or keys that do not exist yet",
        ),
    ] = False,
    input_file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="YAML file of values to set (empty maps are set as empty maps)"),
    ] = None,
    component_path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Component directory (default: current directory)"),
    ] = None,
) -> None:
    """Set config values for a component.

    Examples:

        stackconf set --environment prod data.replicas=4 username=ops

        stackconf set --subcomponent myapp.db endpoint=db.internal
    """
    try:
        env, location, default_format = resolve_defaults(environment, component_path)

        pairs = []
        if input_file is not None:
            pairs.extend(read_assignments_file(input_file))
        pairs.extend(parse_assignment(text) for text in assignments or [])
        if not pairs:
            raise ValueError("'set' takes one or more <key.path>=<value> pairs or --file")

        written = set_config(
            pairs,
            location=location,
            environment=env,
            subcomponent=subcomponent,
            no_new_config_keys=no_new_config_keys,
            default_format=default_format,
        )
    except (StackconfError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print(f"[dim]Config written to {written}[/dim]", soft_wrap=True)
