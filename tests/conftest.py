"""
Shared fixtures: two workspaces A = {doc1, doc2} and B = {doc2, doc3}, plus
doc4 which is open but in no workspace.
"""

import pytest

from buftabs.membership.index import MembershipIndex
from buftabs.schemas.objects import Document
from buftabs.workspaces.manager import WorkspaceManager


@pytest.fixture
def docs():
    return {
        "doc1": Document(id="b1", name="doc1", path="/src/doc1.py", mode="python"),
        "doc2": Document(id="b2", name="doc2", path="/src/doc2.py", mode="python"),
        "doc3": Document(id="b3", name="doc3", path="/notes/doc3.md", mode="markdown"),
        "doc4": Document(id="b4", name="doc4"),
    }


@pytest.fixture
def manager(docs):
    manager = WorkspaceManager()
    for doc in docs.values():
        manager.open_document(doc)
    manager.create_workspace("A", members=[docs["doc1"], docs["doc2"]])
    manager.create_workspace("B", members=[docs["doc2"], docs["doc3"]])
    return manager


@pytest.fixture
def index(manager):
    return MembershipIndex(manager)
