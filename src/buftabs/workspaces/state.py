"""
Load a workspace manager from a JSON state snapshot.

Example file::

    {
      "documents": [
        {"id": "b1", "name": "main.py", "path": "src/main.py", "mode": "python"},
        {"name": "README.md"}
      ],
      "workspaces": [
        {"name": "code", "members": ["b1"]},
        {"name": "docs", "members": ["b1", "README.md"]}
      ],
      "active": "code"
    }

A document declared without an ``id`` uses its name as the id. Member lists
refer to documents by id. The snapshot is only read; nothing is written back.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from buftabs.schemas.objects import Document
from buftabs.workspaces.manager import WorkspaceManager
from buftabs.workspaces.schemas import WorkspaceStateSchema

logger = logging.getLogger(__name__)


class StateFileError(ValueError):
    """Raised when a state snapshot is unreadable or inconsistent."""


def build_manager(state: WorkspaceStateSchema) -> WorkspaceManager:
    """Populate a fresh manager from a validated snapshot."""
    manager = WorkspaceManager()
    by_id: Dict[str, Document] = {}

    for entry in state.documents:
        doc_id = entry.id or entry.name
        if doc_id in by_id:
            raise StateFileError(f"Duplicate document id '{doc_id}'")
        doc = Document(
            id=doc_id,
            name=entry.name,
            path=entry.path,
            mode=entry.mode,
            size=entry.size,
            modified=entry.modified,
        )
        by_id[doc_id] = doc
        manager.open_document(doc)

    for ws in state.workspaces:
        missing = [member for member in ws.members if member not in by_id]
        if missing:
            raise StateFileError(
                f"Workspace '{ws.name}' refers to unknown documents: {', '.join(missing)}"
            )
        try:
            manager.create_workspace(
                ws.name,
                members=[by_id[member] for member in ws.members],
                meta_info=ws.meta_info,
            )
        except ValueError as e:
            raise StateFileError(str(e)) from e

    if state.active:
        if manager.get_workspace(state.active) is None:
            raise StateFileError(f"Active workspace '{state.active}' is not defined")
        manager.switch_to(state.active)

    return manager


def load_state_dict(data: Dict[str, Any]) -> WorkspaceManager:
    return build_manager(WorkspaceStateSchema.model_validate(data))


def load_state(path: Union[str, Path]) -> WorkspaceManager:
    """
    Read a JSON snapshot from ``path`` and build a manager from it.

    Raises:
        StateFileError: if the file is missing, unreadable, not JSON, or inconsistent
        pydantic.ValidationError: if the JSON does not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise StateFileError(f"State file {path} does not exist.")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise StateFileError(f"State file {path} is not valid JSON: {e}") from e
    except (UnicodeDecodeError, OSError) as e:
        raise StateFileError(f"State file {path} could not be read: {e}") from e

    manager = load_state_dict(data)
    logger.info(
        "Loaded %d documents and %d workspaces from %s",
        len(manager.documents()), len(manager.list_workspaces()), path,
    )
    return manager
