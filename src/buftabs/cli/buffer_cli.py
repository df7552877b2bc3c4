"""
CLI commands for viewing the buffer list with workspace awareness.

This module provides commands to list open documents narrowed, grouped and
sorted by workspace, inspect a document's workspaces, and run the two row
actions (open-and-switch, narrow-by-clicked).
"""

from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console

from buftabs.cli import load_manager
from buftabs.core.settings import NAME_SORTER, WORKSPACE_GROUPING, WORKSPACE_SORTER
from buftabs.listing.adapter import WorkspaceListAdapter
from buftabs.listing.render import Chooser, RichBufferList
from buftabs.schemas.objects import Document
from buftabs.workspaces.manager import WorkspaceManager

buffer_app = typer.Typer(help="Commands to view the buffer list by workspace.")
console = Console()

STATE_OPTION = typer.Option(
    None, "--state", "-s",
    help="Path to the workspace state JSON file (defaults to BUFTABS_STATE_FILE)"
)


def build_buffer_list(
    manager: WorkspaceManager,
    chooser: Optional[Chooser] = None,
) -> Tuple[RichBufferList, WorkspaceListAdapter]:
    """Wire a rich buffer list to the manager's workspaces."""
    host = RichBufferList(manager.documents, visitor=manager.visit, chooser=chooser)
    adapter = WorkspaceListAdapter(manager, switcher=manager)
    adapter.install(host)
    return host, adapter


def _find_document(manager: WorkspaceManager, key: str) -> Document:
    doc = manager.find_document(key)
    if doc is None:
        typer.echo(f"Error: no open document '{key}'.")
        raise typer.Exit(code=1)
    return doc


def _split_names(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


@buffer_app.command("list")
def list_buffers_cmd(
    state_file: Optional[Path] = STATE_OPTION,
    narrow: Optional[str] = typer.Option(
        None, "--narrow", "-n",
        help="Comma separated workspace names to narrow to"
    ),
    active_only: bool = typer.Option(
        False, "--active",
        help="Narrow to the active workspace"
    ),
    group: bool = typer.Option(
        True, "--group/--no-group",
        help="Group rows by workspace"
    ),
    sort: Optional[str] = typer.Option(
        WORKSPACE_SORTER, "--sort",
        help="Sort order: workspace or name"
    ),
):
    """
    List open documents with their workspace columns.
    """
    manager = load_manager(state_file)
    host, adapter = build_buffer_list(manager)

    names = _split_names(narrow)
    if names:
        adapter.narrow_by(names)
    if active_only and not adapter.narrow_to_active():
        typer.echo("No active workspace; showing all documents.")

    try:
        host.set_grouping(WORKSPACE_GROUPING if group else None)
        host.set_sorter(sort)
    except ValueError as e:
        typer.echo(f"Error: {str(e)}")
        raise typer.Exit(code=1)

    if not host.visible_documents():
        typer.echo("No documents found.")
        return
    host.render(console)


@buffer_app.command("show")
def show_buffer_cmd(
    document: str = typer.Argument(..., help="Document id or name"),
    state_file: Optional[Path] = STATE_OPTION,
):
    """
    Show the workspaces a document belongs to.
    """
    manager = load_manager(state_file)
    _, adapter = build_buffer_list(manager)
    doc = _find_document(manager, document)

    workspaces = adapter.index.all_workspaces_of(doc)
    if not workspaces:
        typer.echo(f"{doc.name} is not in any workspace.")
        return
    typer.echo(f"{doc.name}: {', '.join(ws.name for ws in workspaces)}")


@buffer_app.command("open")
def open_buffer_cmd(
    document: str = typer.Argument(..., help="Document id or name"),
    state_file: Optional[Path] = STATE_OPTION,
    collapse: Optional[bool] = typer.Option(
        None, "--collapse/--no-collapse",
        help="Collapse to a single view after opening (defaults to BUFTABS_COLLAPSE_ON_OPEN)"
    ),
):
    """
    Open a document and switch to its workspace.
    """
    manager = load_manager(state_file)
    host, adapter = build_buffer_list(manager)
    doc = _find_document(manager, document)

    workspace = adapter.index.first_workspace_of(doc)
    adapter.open_and_switch(doc, collapse=collapse)
    if workspace is None:
        typer.echo(f"Opened {doc.name} (no workspace).")
        return

    typer.echo(f"Opened {doc.name} in workspace {workspace.name}.")
    if host.single_view:
        return
    adapter.narrow_to_active()
    host.set_grouping(None)
    host.set_sorter(NAME_SORTER)
    host.render(console)


@buffer_app.command("narrow")
def narrow_buffer_cmd(
    document: str = typer.Argument(..., help="Document id or name"),
    state_file: Optional[Path] = STATE_OPTION,
):
    """
    Narrow the list to the workspace(s) of a document, asking when there are several.
    """
    manager = load_manager(state_file)
    host, adapter = build_buffer_list(manager)
    doc = _find_document(manager, document)

    if not adapter.filter_by_clicked(doc):
        typer.echo("No change.")
        return
    host.set_grouping(WORKSPACE_GROUPING)
    host.set_sorter(WORKSPACE_SORTER)
    host.render(console)
