"""
Tests for the workspace list adapter and its two row actions.
"""

from unittest.mock import MagicMock

import pytest

from buftabs.core.config import settings
from buftabs.core.settings import (
    TAB_COLUMN, TAB_COUNT_COLUMN, WORKSPACE_FILTER, WORKSPACE_GROUPING, WORKSPACE_SORTER,
)
from buftabs.listing.adapter import WorkspaceListAdapter


class TestWorkspaceListAdapter:
    """Exercise the adapter against a mocked list host."""

    @pytest.fixture(autouse=True)
    def wire_adapter(self, manager, docs):
        self.manager = manager
        self.docs = docs
        self.host = MagicMock()
        self.adapter = WorkspaceListAdapter(manager, switcher=manager)
        self.adapter.install(self.host)

    def _registered(self, method):
        return {c.args[0]: c.args[1] for c in getattr(self.host, method).call_args_list}

    def test_install_registers_everything(self):
        assert WORKSPACE_FILTER in self._registered("define_filter")
        assert WORKSPACE_GROUPING in self._registered("define_grouping")
        assert WORKSPACE_SORTER in self._registered("define_sorter")
        columns = self._registered("define_column")
        assert set(columns) == {TAB_COLUMN, TAB_COUNT_COLUMN}

    def test_registered_callables_use_live_state(self):
        predicate = self._registered("define_filter")[WORKSPACE_FILTER]
        columns = self._registered("define_column")
        grouping = self._registered("define_grouping")[WORKSPACE_GROUPING]

        assert predicate(self.docs["doc2"], frozenset({"B"}))
        assert columns[TAB_COLUMN](self.docs["doc3"]) == "B"
        assert columns[TAB_COUNT_COLUMN](self.docs["doc2"]) == 2
        assert [spec.label for spec in grouping()] == ["A", "B"]

        self.manager.close_workspace("B")
        assert not predicate(self.docs["doc2"], frozenset({"B"}))
        assert columns[TAB_COLUMN](self.docs["doc3"]) == settings.none_label
        assert [spec.label for spec in grouping()] == ["A"]

    def test_sorter_compares_first_workspaces(self):
        comparator = self._registered("define_sorter")[WORKSPACE_SORTER]
        assert comparator(self.docs["doc1"], self.docs["doc3"]) < 0

    def test_narrow_by_pushes_filter(self):
        self.adapter.narrow_by(["A", "B"])
        self.host.push_filter.assert_called_once_with(WORKSPACE_FILTER, frozenset({"A", "B"}))

    def test_filter_by_clicked_single_workspace_narrows_without_prompt(self):
        assert self.adapter.filter_by_clicked(self.docs["doc3"])
        self.host.choose.assert_not_called()
        self.host.push_filter.assert_called_once_with(WORKSPACE_FILTER, frozenset({"B"}))

    def test_filter_by_clicked_multiple_workspaces_prompts(self):
        self.host.choose.return_value = ["B"]
        assert self.adapter.filter_by_clicked(self.docs["doc2"])
        prompt, options = self.host.choose.call_args.args
        assert options == ["A", "B"]
        self.host.push_filter.assert_called_once_with(WORKSPACE_FILTER, frozenset({"B"}))

    def test_filter_by_clicked_cancel_is_noop(self):
        self.host.choose.return_value = None
        assert not self.adapter.filter_by_clicked(self.docs["doc2"])
        self.host.push_filter.assert_not_called()

        self.host.choose.return_value = []
        assert not self.adapter.filter_by_clicked(self.docs["doc2"])
        self.host.push_filter.assert_not_called()

    def test_filter_by_clicked_without_workspace_is_noop(self):
        assert not self.adapter.filter_by_clicked(self.docs["doc4"])
        self.host.choose.assert_not_called()
        self.host.push_filter.assert_not_called()

    def test_open_and_switch(self):
        self.adapter.open_and_switch(self.docs["doc3"], collapse=False)
        assert self.manager.active.name == "B"
        self.host.visit.assert_called_once_with(self.docs["doc3"])
        self.host.collapse.assert_not_called()

    def test_open_and_switch_uses_first_workspace(self):
        self.adapter.open_and_switch(self.docs["doc2"], collapse=True)
        assert self.manager.active.name == "A"
        self.host.collapse.assert_called_once()

    def test_open_and_switch_collapse_default_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "collapse_on_open", True)
        self.adapter.open_and_switch(self.docs["doc1"])
        self.host.collapse.assert_called_once()

    def test_open_unassigned_document_keeps_active_workspace(self):
        self.manager.switch_to("B")
        self.adapter.open_and_switch(self.docs["doc4"], collapse=False)
        assert self.manager.active.name == "B"
        self.host.visit.assert_called_once_with(self.docs["doc4"])

    def test_narrow_to_active(self):
        assert not self.adapter.narrow_to_active()
        self.manager.switch_to("A")
        assert self.adapter.narrow_to_active()
        self.host.push_filter.assert_called_once_with(WORKSPACE_FILTER, frozenset({"A"}))


def test_actions_require_install(manager, docs):
    adapter = WorkspaceListAdapter(manager)
    with pytest.raises(RuntimeError):
        adapter.narrow_by(["A"])


def test_narrow_to_active_without_switcher(manager):
    adapter = WorkspaceListAdapter(manager)
    adapter.install(MagicMock())
    assert adapter.narrow_to_active() is False
    adapter.host.push_filter.assert_not_called()


def test_filter_by_clicked_drops_names_outside_document_workspaces(manager, docs):
    host = MagicMock()
    adapter = WorkspaceListAdapter(manager, switcher=manager)
    adapter.install(host)

    host.choose.return_value = ["B", "elsewhere"]
    assert adapter.filter_by_clicked(docs["doc2"])
    host.push_filter.assert_called_once_with(WORKSPACE_FILTER, frozenset({"B"}))

    host.push_filter.reset_mock()
    host.choose.return_value = ["elsewhere"]
    assert not adapter.filter_by_clicked(docs["doc2"])
    host.push_filter.assert_not_called()
