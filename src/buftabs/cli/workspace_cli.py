# src/buftabs/cli/workspace_cli.py
"""
CLI commands to inspect the workspaces in a state snapshot.
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from buftabs.cli import load_manager

workspace_app = typer.Typer(help="Commands to inspect workspaces.")
console = Console()


@workspace_app.command("list")
def list_workspaces_cmd(
    state_file: Optional[Path] = typer.Option(
        None, "--state", "-s",
        help="Path to the workspace state JSON file (defaults to BUFTABS_STATE_FILE)"
    ),
):
    """
    List workspaces with their member counts.
    """
    manager = load_manager(state_file)
    workspaces = manager.list_workspaces()
    if not workspaces:
        typer.echo("No workspaces found.")
        return

    active = manager.active
    table = Table(title="Workspaces")
    table.add_column("", style="yellow", width=1)
    table.add_column("Name", style="green")
    table.add_column("Members", style="magenta", justify="right")
    for ws in workspaces:
        # Duplicate member references count once
        members = {doc.id for doc in manager.members_of(ws)}
        table.add_row(
            "*" if active is not None and active.name == ws.name else "",
            ws.name,
            str(len(members)),
        )
    console.print(table)
