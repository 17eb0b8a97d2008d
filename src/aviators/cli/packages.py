"""
Package commands for the aviators CLI.

One create verb and one delete verb per package kind:
- component, hook, util, store, context, partial
- delete-component, delete-hook, ... (also reachable as delete:<kind>)

Commands are built per kind and registered on the root app in main.py.
"""

from typing import Callable, Optional

import typer

from aviators.scaffold import PACKAGE_KINDS
from aviators.templates import KIND_DIRS
from .config import CLIConfig
from .output import handle_errors, success


def create_command(kind: str) -> Callable[..., None]:
    """Build the create verb for one package kind."""

    def command(
        name: Optional[str] = typer.Argument(None, help=f"{kind.capitalize()} name", show_default=False),
    ):
        with handle_errors():
            artifact = CLIConfig.facade().create_package(kind, name)
        success(f"{kind.capitalize()} created → {artifact.rendered_name}")

    command.__name__ = kind
    return command


def delete_command(kind: str) -> Callable[..., None]:
    """Build the delete verb for one package kind."""

    def command(
        name: Optional[str] = typer.Argument(None, help=f"{kind.capitalize()} name", show_default=False),
    ):
        with handle_errors():
            artifact = CLIConfig.facade().delete_package(kind, name)
        success(f"{kind.capitalize()} deleted → {artifact.rendered_name}")

    command.__name__ = f"delete_{kind}"
    return command


def register(app: typer.Typer) -> None:
    for kind in PACKAGE_KINDS:
        kind_dir = KIND_DIRS[kind]
        app.command(name=kind, help=f"Create a {kind} in packages/{kind_dir} and export it from the barrel.")(
            create_command(kind)
        )
        delete = delete_command(kind)
        app.command(name=f"delete-{kind}", help=f"Delete a {kind} and its barrel export.")(delete)
        app.command(name=f"delete:{kind}", hidden=True)(delete)
