"""
Pydantic schemas for documents and workspaces.

Notable features:
1. A Document is identified by its opaque ``id`` handle. Two documents with
   the same name are still different documents, and a renamed document stays
   the same one, so equality and hashing look at ``id`` only.
2. A Workspace's ``members`` is an ordered list owned by whoever manages the
   workspace. It may contain the same document twice; readers must cope.
3. ``WorkspaceSource`` is the read-only boundary the membership queries use.
   Implementations are re-invoked on every query and never snapshotted.
"""

import uuid
from typing import Any, Dict, List, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field


def _new_handle() -> str:
    return uuid.uuid4().hex


class Document(BaseModel):
    """An open item tracked by the buffer list (typically a file buffer)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_handle)
    name: str
    path: Optional[str] = None
    mode: Optional[str] = None
    size: int = 0
    modified: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name


class Workspace(BaseModel):
    """A named grouping with a live, externally owned list of member documents."""
    name: str
    members: List[Document] = Field(default_factory=list)
    meta_info: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.name


class WorkspaceSource(Protocol):
    """Read-only view of the live workspace collection."""

    def list_workspaces(self) -> Sequence[Workspace]:
        ...

    def members_of(self, workspace: Workspace) -> Sequence[Document]:
        ...


class WorkspaceSwitcher(Protocol):
    """Whatever owns the active workspace selection."""

    @property
    def active(self) -> Optional[Workspace]:
        ...

    def switch_to(self, name: str) -> None:
        ...
