"""
Project-level commands for the aviators CLI.

- init: create the package barrels and the roles folder
- recover: roll back or resume commands that stopped midway
"""

from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from aviators.schemas import Intent
from .config import CLIConfig
from .output import echo, handle_errors, print_table, success


def init():
    """
    Create src/packages/<kind>/index.ts for every package kind and src/Roles.
    """
    with handle_errors():
        facade = CLIConfig.facade()
        created = facade.init_project()
    for path in created:
        echo(f"   {path.relative_to(facade.paths.project_root)}")
    success(f"Project initialized → {facade.paths.src_root} ({len(created)} new)")


def recover(
    intent_id: Optional[str] = typer.Argument(
        None, help="Intent to recover. All pending intents when omitted.", show_default=False
    ),
    list_only: bool = typer.Option(False, "--list", "-l", help="Show pending intents and exit."),
    discard: bool = typer.Option(
        False, "--discard", help="Forget the intent without touching any file."
    ),
):
    """
    Roll back interrupted creations and finish interrupted deletions.
    """
    with handle_errors():
        facade = CLIConfig.facade()
        if intent_id:
            intents = [facade.journal.get(intent_id)]
        else:
            intents = facade.pending_intents()

        if list_only:
            _print_intents(intents)
            return
        if not intents:
            success("Nothing to recover")
            return

        for intent in intents:
            if discard:
                facade.journal.discard(intent)
                success(f"Intent discarded → {intent.intent_id}")
                continue
            for action in facade.recover(intent):
                echo(f"   {action}")
            success(f"Recovered → {intent.verb} {' '.join(intent.args)}")


def _print_intents(intents: List[Intent]) -> None:
    if not intents:
        echo("No pending intents.")
        return

    table = Table(title="Pending intents")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Command", style="magenta")
    table.add_column("Mode")
    table.add_column("Error", style="red")
    for intent in intents:
        table.add_row(
            intent.intent_id,
            escape(f"{intent.verb} {' '.join(intent.args)}"),
            intent.mode,
            escape(intent.error or ""),
        )
    print_table(table)
