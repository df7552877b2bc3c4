"""
Tests for the rich buffer list host.
"""

import io

import pytest
from rich.console import Console

from buftabs.core.config import settings
from buftabs.core.settings import NAME_SORTER, WORKSPACE_GROUPING, WORKSPACE_SORTER
from buftabs.listing.adapter import WorkspaceListAdapter
from buftabs.listing.render import RichBufferList, prompt_choice
from buftabs.schemas.objects import Document


@pytest.fixture
def host(manager):
    host = RichBufferList(manager.documents, visitor=manager.visit, chooser=lambda p, o: None)
    WorkspaceListAdapter(manager, switcher=manager).install(host)
    return host


def names(docs):
    return [doc.name for doc in docs]


def test_unfiltered_list_keeps_document_order(host):
    assert names(host.visible_documents()) == ["doc1", "doc2", "doc3", "doc4"]


def test_filters_stack(host):
    host.push_filter("workspace", frozenset({"B"}))
    assert names(host.visible_documents()) == ["doc2", "doc3"]
    host.push_filter("workspace", frozenset({"A"}))
    assert names(host.visible_documents()) == ["doc2"]
    host.pop_filter()
    assert names(host.visible_documents()) == ["doc2", "doc3"]
    host.clear_filters()
    assert len(host.visible_documents()) == 4


def test_unknown_filter_rejected(host):
    with pytest.raises(ValueError):
        host.push_filter("mode", "python")


def test_sorters(host):
    host.set_sorter(WORKSPACE_SORTER)
    assert names(host.visible_documents()) == ["doc1", "doc2", "doc3", "doc4"]
    host.set_sorter(NAME_SORTER)
    assert names(host.visible_documents()) == ["doc1", "doc2", "doc3", "doc4"]
    with pytest.raises(ValueError):
        host.set_sorter("size")


def test_grouping_assigns_first_matching_group(host):
    host.set_grouping(WORKSPACE_GROUPING)
    sections = [(label, names(docs)) for label, docs in host.sections()]
    # doc2 is in A and B but only appears under A
    assert sections == [
        ("A", ["doc1", "doc2"]),
        ("B", ["doc3"]),
        (settings.default_group_label, ["doc4"]),
    ]


def test_grouping_tracks_closed_workspaces(manager, host):
    host.set_grouping(WORKSPACE_GROUPING)
    manager.close_workspace("A")
    labels = [label for label, _ in host.sections()]
    assert labels == ["B", settings.default_group_label]


def test_no_grouping_is_single_section(host):
    assert [label for label, _ in host.sections()] == [None]


def test_render_shows_workspace_columns(host):
    host.set_grouping(WORKSPACE_GROUPING)
    host.push_filter("workspace", frozenset({"A", "B"}))
    buf = io.StringIO()
    host.render(Console(file=buf, width=200))
    output = buf.getvalue()
    assert "#Tabs" in output
    assert "doc3" in output
    assert "doc4" not in output
    assert "workspace in: A, B" in output


def test_visit_and_collapse(manager, host, docs):
    host.visit(docs["doc3"])
    assert host.visited == docs["doc3"]
    assert manager.current_document == docs["doc3"]
    host.collapse()
    assert host.single_view


def test_prompt_choice(monkeypatch):
    monkeypatch.setattr("typer.prompt", lambda *a, **k: "B, nope")
    assert prompt_choice("Pick", ["A", "B"]) == ["B"]
    monkeypatch.setattr("typer.prompt", lambda *a, **k: "")
    assert prompt_choice("Pick", ["A", "B"]) is None


def test_render_keeps_bracketed_names_literal(manager, host):
    manager.create_workspace("[red]ops", members=[])
    manager.add_document("A", Document(id="m1", name="[bold]notes.md", path="x[/b]"))
    manager.add_document("[red]ops", Document(id="m2", name="x[/b]"))
    host.set_grouping(WORKSPACE_GROUPING)
    host.push_filter("workspace", frozenset({"A", "[red]ops"}))
    buf = io.StringIO()
    host.render(Console(file=buf, width=200))
    output = buf.getvalue()
    assert "[bold]notes.md" in output
    assert "x[/b]" in output
    assert "[ [red]ops ]" in output
    assert "workspace in: A, [red]ops" in output
