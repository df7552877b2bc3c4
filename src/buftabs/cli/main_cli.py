"""
Top-level CLI that aggregates the buffer and workspace sub-apps.
"""

import logging
import typer

from buftabs.cli.buffer_cli import buffer_app
from buftabs.cli.workspace_cli import workspace_app
from buftabs.core.config import settings


logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(levelname)s %(name)s - %(message)s"
)

main_app = typer.Typer(help="buftabs CLI")

# Add subcommands as Typer sub-apps:
main_app.add_typer(buffer_app, name="buffers")
main_app.add_typer(workspace_app, name="workspaces")


def main():
    main_app()

if __name__ == "__main__":
    main()
