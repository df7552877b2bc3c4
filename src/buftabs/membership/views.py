"""
View derivations built on the membership index.

These are the pieces a buffer list consumes: a filter predicate, the group
specs for "group by workspace", a sort comparator and two column values.
All of them are pure functions of the live workspace state and their
arguments; nothing here keeps state between calls.
"""

import functools
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence

from buftabs.core.config import settings
from buftabs.membership.index import MembershipIndex
from buftabs.schemas.objects import Document


class GroupSpec(NamedTuple):
    """One section of the grouped list: a label and the predicate selecting its rows."""
    label: str
    predicate: Callable[[Document], bool]


def matches_any_of(index: MembershipIndex, doc: Document, names: Iterable[str]) -> bool:
    """
    True iff ``doc`` belongs to at least one workspace named in ``names``.

    Narrowing to a single workspace is the singleton case. An empty set of
    names matches nothing.
    """
    wanted = set(names)
    if not wanted:
        return False
    for workspace in index.source.list_workspaces():
        if workspace.name in wanted and doc in index.source.members_of(workspace):
            return True
    return False


def narrow(index: MembershipIndex, docs: Sequence[Document], names: Iterable[str]) -> List[Document]:
    """Keep the documents matching any of ``names``, preserving their order."""
    wanted = set(names)
    return [doc for doc in docs if matches_any_of(index, doc, wanted)]


def group_specs(index: MembershipIndex) -> List[GroupSpec]:
    """
    Build one group per live workspace, in enumeration order.

    The list host assigns each row to the first group whose predicate
    accepts it, so a document in several workspaces shows up only under the
    first of them. That is a known limitation of single-assignment grouping.
    """
    specs = []
    for name in index.workspace_names():
        specs.append(GroupSpec(name, functools.partial(index.member_of, name)))
    return specs


def compare_by_first_workspace(index: MembershipIndex, a: Document, b: Document) -> int:
    """
    Compare two documents by the name of their first workspace.

    Documents in no workspace sort after every named workspace and compare
    equal among themselves, whatever label the UI displays for them.
    """
    first_a = index.first_workspace_of(a)
    first_b = index.first_workspace_of(b)
    if first_a is None and first_b is None:
        return 0
    if first_a is None:
        return 1
    if first_b is None:
        return -1
    if first_a.name < first_b.name:
        return -1
    if first_a.name > first_b.name:
        return 1
    return 0


def first_workspace_sort_key(index: MembershipIndex):
    """Key function for ``sorted`` equivalent to ``compare_by_first_workspace``."""
    return functools.cmp_to_key(functools.partial(compare_by_first_workspace, index))


def sort_by_first_workspace(index: MembershipIndex, docs: Sequence[Document]) -> List[Document]:
    # sorted() is stable: ties keep their incoming order
    return sorted(docs, key=first_workspace_sort_key(index))


def workspace_label(index: MembershipIndex, doc: Document, none_label: Optional[str] = None) -> str:
    """Short label column: the first workspace's name, or ``none_label``."""
    workspace = index.first_workspace_of(doc)
    if workspace is None:
        return settings.none_label if none_label is None else none_label
    return workspace.name


def workspace_count(index: MembershipIndex, doc: Document) -> int:
    """Count column: how many workspaces hold ``doc``."""
    return len(index.all_workspaces_of(doc))
