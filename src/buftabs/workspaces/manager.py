# buftabs/src/buftabs/workspaces/manager.py
"""
In-memory workspace manager.

This is the owner of the workspace collection: it creates and closes
workspaces, adds and removes member documents and tracks which workspace is
active. The membership index only ever reads from it through
``list_workspaces`` and ``members_of``.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from buftabs.schemas.objects import Document, Workspace

logger = logging.getLogger(__name__)


class WorkspaceManager:
    def __init__(self):
        self._workspaces: List[Workspace] = []
        self._documents: List[Document] = []
        self._active: Optional[str] = None
        self._current: Optional[Document] = None

    # ------------------------------------------------------------------
    # Read side (WorkspaceSource)
    # ------------------------------------------------------------------

    def list_workspaces(self) -> List[Workspace]:
        # Hand out a copy of the list so callers iterating it are not
        # disturbed by a workspace being closed mid-iteration.
        return list(self._workspaces)

    def members_of(self, workspace: Workspace) -> Sequence[Document]:
        return workspace.members

    def get_workspace(self, name: str) -> Optional[Workspace]:
        for workspace in self._workspaces:
            if workspace.name == name:
                return workspace
        return None

    def documents(self) -> List[Document]:
        """Every open document, in the order it was opened."""
        return list(self._documents)

    def find_document(self, key: str) -> Optional[Document]:
        """Find an open document by id, falling back to the first one with that name."""
        for doc in self._documents:
            if doc.id == key:
                return doc
        for doc in self._documents:
            if doc.name == key:
                return doc
        return None

    @property
    def active(self) -> Optional[Workspace]:
        if self._active is None:
            return None
        return self.get_workspace(self._active)

    @property
    def current_document(self) -> Optional[Document]:
        return self._current

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def _require(self, name: str) -> Workspace:
        workspace = self.get_workspace(name)
        if workspace is None:
            raise ValueError(f"Workspace {name} not found.")
        return workspace

    def create_workspace(self, name: str, members: Optional[List[Document]] = None,
                         meta_info: Optional[Dict[str, Any]] = None) -> Workspace:
        if self.get_workspace(name) is not None:
            raise ValueError(f"Workspace {name} already exists.")
        workspace = Workspace(name=name, members=[], meta_info=meta_info or {})
        self._workspaces.append(workspace)
        for doc in members or []:
            self.add_document(name, doc)
        logger.debug("Created workspace %s with %d members", name, len(workspace.members))
        return workspace

    def close_workspace(self, name: str) -> bool:
        """Close a workspace. Its documents stay open."""
        workspace = self._require(name)
        self._workspaces.remove(workspace)
        if self._active == name:
            self._active = None
        logger.info("Closed workspace %s", name)
        return True

    def rename_workspace(self, name: str, new_name: str) -> Workspace:
        workspace = self._require(name)
        if new_name != name and self.get_workspace(new_name) is not None:
            raise ValueError(f"Workspace {new_name} already exists.")
        workspace.name = new_name
        if self._active == name:
            self._active = new_name
        return workspace

    def open_document(self, doc: Document) -> Document:
        """Register an open document (no-op if it is already open)."""
        if doc not in self._documents:
            self._documents.append(doc)
        return doc

    def add_document(self, name: str, doc: Document) -> bool:
        """Add a document to a workspace, opening it if needed."""
        workspace = self._require(name)
        self.open_document(doc)
        workspace.members.append(doc)
        return True

    def remove_document(self, name: str, doc: Document) -> bool:
        """Remove every reference to ``doc`` from the named workspace."""
        workspace = self._require(name)
        if doc not in workspace.members:
            raise ValueError(f"Document {doc.name} not found in workspace {name}.")
        workspace.members[:] = [member for member in workspace.members if member != doc]
        return True

    def switch_to(self, name: str) -> None:
        self._require(name)
        if self._active != name:
            logger.info("Switching to workspace %s", name)
        self._active = name

    def visit(self, doc: Document) -> None:
        self.open_document(doc)
        self._current = doc
