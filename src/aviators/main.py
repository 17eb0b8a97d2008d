from pathlib import Path
from typing import Optional

import click
import typer
from typer.core import TyperGroup

from aviators.logging_config import logger, setup_logging
from aviators.cli import packages, routes, project
from aviators.cli.config import CLIConfig
from aviators.cli.output import echo, failure, handle_errors, warning


class AviatorsGroup(TyperGroup):
    """Root command group: an unknown verb is a failure like any other (exit 1)."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            failure(e.format_message())
            echo("Run 'aviators --help' for usage.")
            raise typer.Exit(code=1)


app = typer.Typer(
    cls=AviatorsGroup,
    help="Scaffold packages, roles, modules and pages and keep role route registries in sync.",
    add_completion=False,
)

# Verbs that must run even when intents are pending
_NO_PENDING_CHECK = ("recover", "init")


# Global CLI callback for flags that apply to all commands
@app.callback(invoke_without_command=True)
def global_options(
    ctx: typer.Context,
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-C",
        help="Project root (defaults to the current directory).",
        file_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every mutation step (DEBUG)."),
):
    """
    Aviators: scaffold generator for role-based React projects.
    """
    CLIConfig.set_project_root(root)
    if verbose:
        setup_logging(level="DEBUG", force=True)

    if ctx.invoked_subcommand is None:
        echo(ctx.get_help())
        raise typer.Exit(code=1)

    logger.debug(f"Running '{ctx.invoked_subcommand}' in {CLIConfig.project_root()}")
    if ctx.invoked_subcommand not in _NO_PENDING_CHECK:
        _warn_pending()


def _warn_pending() -> None:
    with handle_errors():
        pending = CLIConfig.facade().pending_intents()
    if pending:
        warning(
            f"{len(pending)} interrupted command(s) pending; "
            "run 'aviators recover --list' to inspect or 'aviators recover' to fix"
        )


packages.register(app)

app.command(name="role")(routes.role)
app.command(name="delete-role")(routes.delete_role)
app.command(name="module")(routes.module)
app.command(name="delete-module")(routes.delete_module)
app.command(name="page")(routes.page)
app.command(name="delete-page")(routes.delete_page)
app.command(name="delete:role", hidden=True)(routes.delete_role)
app.command(name="delete:module", hidden=True)(routes.delete_module)
app.command(name="delete:page", hidden=True)(routes.delete_page)

app.command(name="init")(project.init)
app.command(name="recover")(project.recover)


if __name__ == "__main__":
    app()
