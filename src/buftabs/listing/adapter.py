"""
Hook workspace membership into a buffer list.

The adapter registers a filter, a dynamic grouping, a sort order and two
columns with a list host, and implements the two workspace actions a user
can trigger from a row:

* open the document and switch to its workspace
* narrow the list to the clicked document's workspace(s)
"""

import functools
import logging
from typing import Any, Callable, Iterable, List, Optional, Protocol, Sequence

from buftabs.core.config import settings
from buftabs.core.settings import (
    TAB_COLUMN, TAB_COUNT_COLUMN, WORKSPACE_FILTER, WORKSPACE_GROUPING, WORKSPACE_SORTER,
)
from buftabs.membership.index import MembershipIndex
from buftabs.membership.views import (
    GroupSpec, compare_by_first_workspace, group_specs, matches_any_of,
    workspace_count, workspace_label,
)
from buftabs.schemas.objects import Document, WorkspaceSource, WorkspaceSwitcher

logger = logging.getLogger(__name__)


class ListHost(Protocol):
    """The parts of a buffer list UI the workspace integration relies on."""

    def define_filter(self, name: str, predicate: Callable[[Document, Any], bool],
                      description: str = "") -> None: ...

    def define_grouping(self, name: str, generator: Callable[[], List[GroupSpec]]) -> None: ...

    def define_sorter(self, name: str, comparator: Callable[[Document, Document], int]) -> None: ...

    def define_column(self, name: str, producer: Callable[[Document], Any]) -> None: ...

    def push_filter(self, name: str, qualifier: Any) -> None: ...

    def choose(self, prompt: str, options: Sequence[str]) -> Optional[List[str]]: ...

    def visit(self, doc: Document) -> None: ...

    def collapse(self) -> None: ...


class WorkspaceListAdapter:
    """
    Glue between the membership queries and a ``ListHost``.

    Args:
        source: live workspace collection (read only)
        switcher: owner of the active workspace selection; usually the same
            object as ``source``
    """

    def __init__(self, source: WorkspaceSource, switcher: Optional[WorkspaceSwitcher] = None):
        self.index = MembershipIndex(source)
        self.switcher = switcher
        self.host: Optional[ListHost] = None

    def install(self, host: ListHost) -> None:
        index = self.index
        host.define_filter(
            WORKSPACE_FILTER,
            functools.partial(matches_any_of, index),
            description="workspace in",
        )
        host.define_grouping(WORKSPACE_GROUPING, functools.partial(group_specs, index))
        host.define_sorter(WORKSPACE_SORTER, functools.partial(compare_by_first_workspace, index))
        host.define_column(TAB_COLUMN, lambda doc: workspace_label(index, doc))
        host.define_column(TAB_COUNT_COLUMN, functools.partial(workspace_count, index))
        self.host = host

    def _require_host(self) -> ListHost:
        if self.host is None:
            raise RuntimeError("WorkspaceListAdapter.install() has not been called")
        return self.host

    def narrow_by(self, names: Iterable[str]) -> None:
        """Narrow the list to documents in any of the named workspaces."""
        names = frozenset(names)
        logger.debug("Narrowing to workspaces %s", sorted(names))
        self._require_host().push_filter(WORKSPACE_FILTER, names)

    def narrow_to_active(self) -> bool:
        """Narrow to the active workspace. Returns False when none is active."""
        if self.switcher is None:
            return False
        active = self.switcher.active
        if active is None:
            return False
        self.narrow_by([active.name])
        return True

    def open_and_switch(self, doc: Document, collapse: Optional[bool] = None) -> None:
        """
        Visit ``doc`` and make its first workspace the active one.

        A document outside every workspace is still visited; the active
        workspace is left alone.
        """
        host = self._require_host()
        workspace = self.index.first_workspace_of(doc)
        if workspace is not None and self.switcher is not None:
            self.switcher.switch_to(workspace.name)
        host.visit(doc)
        if collapse is None:
            collapse = settings.collapse_on_open
        if collapse:
            host.collapse()

    def filter_by_clicked(self, doc: Document) -> bool:
        """
        Narrow to the workspace(s) of ``doc``.

        With a single workspace the list is narrowed at once. With several,
        the user picks a subset; cancelling leaves the list untouched.
        Returns True if a filter was applied.
        """
        host = self._require_host()
        names = [workspace.name for workspace in self.index.all_workspaces_of(doc)]
        if not names:
            logger.info("%s is not in any workspace; nothing to narrow to", doc.name)
            return False
        if len(names) == 1:
            self.narrow_by(names)
            return True

        chosen = host.choose(f"Narrow to workspaces of {doc.name}", names) or []
        chosen = [name for name in chosen if name in names]
        if not chosen:
            logger.debug("Workspace choice for %s cancelled", doc.name)
            return False
        self.narrow_by(chosen)
        return True
