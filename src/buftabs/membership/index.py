"""
Membership index: document <-> workspace queries over a live workspace source.

Every call reads the source afresh. Nothing is cached between calls, so a
workspace closed (or a member removed) between two queries is reflected by
the second one. The queries run once per visible row on every redraw; keep
them short-circuiting.
"""

import logging
from typing import List, Optional

from buftabs.schemas.objects import Document, Workspace, WorkspaceSource

logger = logging.getLogger(__name__)


class MembershipIndex:
    """
    Query layer over a ``WorkspaceSource``.

    Absence is a normal outcome here: a document in no workspace, or a
    workspace name that no longer exists, yields None / [] / False rather
    than an exception.
    """

    def __init__(self, source: WorkspaceSource):
        self.source = source

    def first_workspace_of(self, doc: Document) -> Optional[Workspace]:
        """
        Return the first workspace, in enumeration order, that contains ``doc``.

        Stops at the first matching workspace; ``in`` stops at the first
        matching member.
        """
        for workspace in self.source.list_workspaces():
            if doc in self.source.members_of(workspace):
                return workspace
        return None

    def all_workspaces_of(self, doc: Document) -> List[Workspace]:
        """
        Return every workspace containing ``doc``, in enumeration order.

        Each workspace appears once even if its member list holds ``doc``
        several times or the source lists the same workspace twice.
        """
        found: List[Workspace] = []
        seen = set()
        for workspace in self.source.list_workspaces():
            if workspace.name in seen:
                continue
            if doc in self.source.members_of(workspace):
                seen.add(workspace.name)
                found.append(workspace)
        return found

    def workspace_named(self, name: str) -> Optional[Workspace]:
        """Look up a live workspace by name."""
        for workspace in self.source.list_workspaces():
            if workspace.name == name:
                return workspace
        return None

    def member_of(self, workspace_name: str, doc: Document) -> bool:
        """True iff the named workspace currently exists and contains ``doc``."""
        workspace = self.workspace_named(workspace_name)
        if workspace is None:
            logger.debug("Workspace %r is gone; treating it as empty", workspace_name)
            return False
        return doc in self.source.members_of(workspace)

    def workspace_names(self) -> List[str]:
        return [workspace.name for workspace in self.source.list_workspaces()]
