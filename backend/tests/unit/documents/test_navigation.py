"""Tests for NavigationHistory (breadcrumb stack)."""

import pytest

from projectdocs.components.documents import Breadcrumb, NavigationHistory


@pytest.fixture
def history() -> NavigationHistory:
    return NavigationHistory(root_name="New Headquarters")


@pytest.fixture
def deep_history(history, tree) -> NavigationHistory:
    plans = tree.get_folder("fld_001")
    drafts = tree.create_folder("proj_001", plans.id, "Drafts")
    old = tree.create_folder("proj_001", drafts.id, "Old")
    for folder in (plans, drafts, old):
        history.descend(folder)
    return history


class TestNavigationHistory:
    def test_starts_at_root(self, history):
        assert history.entries == [Breadcrumb(folderId=None, name="New Headquarters")]
        assert history.current_folder_id is None
        assert history.depth == 0

    def test_descend_pushes_folder(self, deep_history):
        assert [c.name for c in deep_history.entries] == ["New Headquarters", "Plans", "Drafts", "Old"]
        assert deep_history.current.name == "Old"
        assert deep_history.depth == 3

    def test_ascend_one(self, deep_history):
        crumb = deep_history.ascend_one()

        assert crumb.name == "Drafts"
        assert deep_history.depth == 2

    def test_ascend_never_pops_root(self, history):
        history.ascend_one()
        history.ascend_one()

        assert history.depth == 0
        assert history.current.folderId is None

    def test_jump_to_ancestor(self, deep_history):
        crumb = deep_history.jump_to(1)

        assert crumb.folderId == "fld_001"
        assert [c.name for c in deep_history.entries] == ["New Headquarters", "Plans"]

    def test_jump_to_root(self, deep_history):
        deep_history.jump_to(0)

        assert deep_history.current_folder_id is None
        assert len(deep_history.entries) == 1

    def test_jump_to_current_is_noop(self, deep_history):
        deep_history.jump_to(3)

        assert deep_history.depth == 3

    @pytest.mark.parametrize("index", [-1, 4, 10])
    def test_jump_out_of_range(self, deep_history, index):
        with pytest.raises(IndexError):
            deep_history.jump_to(index)
        assert deep_history.depth == 3

    def test_reset(self, deep_history):
        deep_history.reset()

        assert deep_history.entries == [Breadcrumb(name="New Headquarters")]

    def test_entries_is_a_copy(self, history):
        history.entries.clear()

        assert len(history.entries) == 1

    def test_current_drives_listing(self, deep_history, tree):
        deep_history.jump_to(1)

        listing = tree.list_children("proj_001", deep_history.current_folder_id)

        assert [f.name for f in listing.folders] == ["Drafts"]
