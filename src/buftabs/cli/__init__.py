"""
Initialize the CLI package. Contains shared CLI utilities and configuration.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from buftabs.core.config import settings
from buftabs.workspaces.manager import WorkspaceManager
from buftabs.workspaces.state import StateFileError, load_state

logger = logging.getLogger(__name__)


def resolve_state_file(state_file: Optional[Path]) -> Path:
    path = state_file or settings.state_file
    if path is None:
        typer.echo("Error: no state file given (use --state or set BUFTABS_STATE_FILE).")
        raise typer.Exit(code=1)
    return path


def load_manager(state_file: Optional[Path]) -> WorkspaceManager:
    """Load the workspace snapshot for a command, exiting with an error message on failure."""
    path = resolve_state_file(state_file)
    try:
        return load_state(path)
    except (StateFileError, ValidationError) as e:
        logger.debug("Failed to load %s", path, exc_info=True)
        typer.echo(f"Error: {str(e)}")
        raise typer.Exit(code=1)
