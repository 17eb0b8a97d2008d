"""
Route commands for the aviators CLI.

Roles own a route registry; modules and pages are scaffolded under a role
and registered in it.
"""

from typing import Optional

import typer

from aviators.user_config import DIALECTS
from .config import CLIConfig
from .output import handle_errors, success, warning


def role(
    name: Optional[str] = typer.Argument(None, help="Role name", show_default=False),
    dialect: Optional[str] = typer.Option(
        None,
        "--dialect",
        "-d",
        help=f"Registry dialect ({' | '.join(DIALECTS)}). Defaults to registry.default_dialect.",
    ),
):
    """
    Create a role with its asset, api, module and route folders.
    """
    with handle_errors():
        artifact = CLIConfig.facade().create_role(name, dialect)
    success(f"Role created → {artifact.rendered_name}")


def delete_role(
    name: Optional[str] = typer.Argument(None, help="Role name", show_default=False),
):
    """
    Delete a role and everything under it.
    """
    with handle_errors():
        artifact = CLIConfig.facade().delete_role(name)
    success(f"Role deleted → {artifact.rendered_name}")


def module(
    role_name: Optional[str] = typer.Argument(None, metavar="ROLE", help="Owning role", show_default=False),
    name: Optional[str] = typer.Argument(None, metavar="MODULE", help="Module name", show_default=False),
):
    """
    Create a module under a role and register its route.
    """
    with handle_errors():
        artifact = CLIConfig.facade().create_module(role_name, name)
    success(f"Module created → {_module_label(role_name, name)}")
    _report_unregistered(artifact.registered)


def delete_module(
    role_name: Optional[str] = typer.Argument(None, metavar="ROLE", help="Owning role", show_default=False),
    name: Optional[str] = typer.Argument(None, metavar="MODULE", help="Module name", show_default=False),
):
    """
    Unregister a module's route, then delete its folder.
    """
    with handle_errors():
        CLIConfig.facade().delete_module(role_name, name)
    success(f"Module deleted → {_module_label(role_name, name)}")


def page(
    role_name: Optional[str] = typer.Argument(None, metavar="ROLE", help="Owning role", show_default=False),
    module_name: Optional[str] = typer.Argument(None, metavar="MODULE", help="Owning module", show_default=False),
    name: Optional[str] = typer.Argument(None, metavar="PAGE", help="Page name", show_default=False),
):
    """
    Create a page under a module and register it in the module's route slot.
    """
    with handle_errors():
        artifact = CLIConfig.facade().create_page(role_name, module_name, name)
    success(f"Page created → {_module_label(role_name, module_name)}/{artifact.rendered_name}")
    _report_unregistered(artifact.registered)


def delete_page(
    role_name: Optional[str] = typer.Argument(None, metavar="ROLE", help="Owning role", show_default=False),
    module_name: Optional[str] = typer.Argument(None, metavar="MODULE", help="Owning module", show_default=False),
    name: Optional[str] = typer.Argument(None, metavar="PAGE", help="Page name", show_default=False),
):
    """
    Unregister a page's route, then delete its file.
    """
    with handle_errors():
        artifact = CLIConfig.facade().delete_page(role_name, module_name, name)
    success(f"Page deleted → {_module_label(role_name, module_name)}/{artifact.rendered_name}")


def _module_label(role_name: str, name: str) -> str:
    return f"{role_name}/{name}"


def _report_unregistered(registered: Optional[bool]) -> None:
    if registered is False:
        warning("Registry already contained this entry; left unchanged")
