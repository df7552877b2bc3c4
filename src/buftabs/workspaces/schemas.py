# buftabs/src/buftabs/workspaces/schemas.py

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class DocumentSchema(BaseModel):
    id: Optional[str] = None
    name: str
    path: Optional[str] = None
    mode: Optional[str] = None
    size: int = 0
    modified: bool = False


class WorkspaceSchema(BaseModel):
    name: str
    # Document ids (or names, when a document was declared without an id)
    members: List[str] = Field(default_factory=list)
    meta_info: Optional[Dict[str, Any]] = None


class WorkspaceStateSchema(BaseModel):
    """Snapshot of open documents and the workspaces grouping them."""
    documents: List[DocumentSchema] = Field(default_factory=list)
    workspaces: List[WorkspaceSchema] = Field(default_factory=list)
    active: Optional[str] = None
