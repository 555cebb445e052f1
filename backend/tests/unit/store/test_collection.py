"""Tests for Collection CRUD and predicate queries.

Test cases:
- create / get_by_id round-trip
- update merges shallowly and keeps other fields
- delete reports whether a record was removed
- find over an empty collection returns an empty list
- duplicate ids are rejected
"""

import pytest

from projectdocs.components.documents.models import AccessRestriction, Folder
from projectdocs.components.store import Collection, MemoryBackend
from projectdocs.errors import DuplicateIdError, ValidationError


def make_folder(folder_id: str, name: str = "Plans", parent_id: str | None = None, project_id: str = "proj_a") -> Folder:
    return Folder(
        id=folder_id,
        projectId=project_id,
        name=name,
        parentId=parent_id,
        order=1,
        restrictions=AccessRestriction.by_area("area_1"),
        createdAt=1000,
        createdBy="usr_1",
    )


@pytest.fixture
def folders() -> Collection[Folder]:
    return Collection("folders", Folder, MemoryBackend())


class TestRoundTrip:
    """create / get / update / delete."""

    def test_create_then_get_returns_equal_record(self, folders):
        folder = make_folder("fld_1")
        folders.create(folder)

        assert folders.get_by_id("fld_1") == folder

    def test_get_unknown_id_returns_none(self, folders):
        assert folders.get_by_id("missing") is None

    def test_update_changes_only_given_fields(self, folders):
        folders.create(make_folder("fld_1", name="Plans"))

        updated = folders.update("fld_1", {"name": "Drawings"})

        assert updated.name == "Drawings"
        stored = folders.get_by_id("fld_1")
        assert stored.name == "Drawings"
        assert stored.projectId == "proj_a"
        assert stored.restrictions.allowedAreas == ["area_1"]
        assert stored.createdBy == "usr_1"

    def test_update_unknown_id_returns_none(self, folders):
        assert folders.update("missing", {"name": "X"}) is None
        assert folders.count() == 0

    def test_update_cannot_change_id(self, folders):
        folders.create(make_folder("fld_1"))

        with pytest.raises(ValidationError):
            folders.update("fld_1", {"id": "fld_2"})

    def test_delete_then_get_returns_none(self, folders):
        folders.create(make_folder("fld_1"))

        assert folders.delete("fld_1") is True
        assert folders.get_by_id("fld_1") is None

    def test_delete_unknown_id_returns_false(self, folders):
        assert folders.delete("missing") is False


class TestQueries:
    """find / find_one / delete_where."""

    def test_find_on_empty_collection_returns_empty_list(self, folders):
        result = folders.find(lambda f: True)

        assert result == []

    def test_find_preserves_insertion_order(self, folders):
        for i in (3, 1, 2):
            folders.create(make_folder(f"fld_{i}", name=f"F{i}"))

        names = [f.name for f in folders.find(lambda f: f.projectId == "proj_a")]

        assert names == ["F3", "F1", "F2"]

    def test_find_is_reevaluated_on_each_call(self, folders):
        folders.create(make_folder("fld_1"))
        first = folders.find(lambda f: True)

        folders.create(make_folder("fld_2"))

        assert len(first) == 1
        assert len(folders.find(lambda f: True)) == 2

    def test_find_one(self, folders):
        folders.create(make_folder("fld_1", name="Plans"))
        folders.create(make_folder("fld_2", name="Contracts"))

        assert folders.find_one(lambda f: f.name == "Contracts").id == "fld_2"
        assert folders.find_one(lambda f: f.name == "Nope") is None

    def test_delete_where_counts_removed(self, folders):
        folders.create(make_folder("fld_1", parent_id=None))
        folders.create(make_folder("fld_2", parent_id="fld_1"))
        folders.create(make_folder("fld_3", parent_id="fld_1"))

        removed = folders.delete_where(lambda f: f.parentId == "fld_1")

        assert removed == 2
        assert [f.id for f in folders.get_all()] == ["fld_1"]


class TestUniqueIds:
    """Every record id is unique within its collection."""

    def test_create_duplicate_id_raises(self, folders):
        folders.create(make_folder("fld_1"))

        with pytest.raises(DuplicateIdError) as exc_info:
            folders.create(make_folder("fld_1", name="Other"))

        assert exc_info.value.collection == "folders"
        assert folders.count() == 1

    def test_duplicate_error_is_a_validation_error(self):
        assert issubclass(DuplicateIdError, ValidationError)

    def test_same_id_allowed_in_different_collections(self):
        backend = MemoryBackend()
        first = Collection("folders", Folder, backend)
        second = Collection("archived-folders", Folder, backend)

        first.create(make_folder("fld_1"))
        second.create(make_folder("fld_1"))

        assert first.count() == 1
        assert second.count() == 1


class TestSnapshot:
    def test_restore_replaces_contents(self, folders):
        folders.create(make_folder("fld_1"))
        snapshot = folders.snapshot()

        folders.create(make_folder("fld_2"))
        folders.restore(snapshot)

        assert [f.id for f in folders.get_all()] == ["fld_1"]

    def test_clear(self, folders):
        folders.create(make_folder("fld_1"))
        folders.clear()

        assert folders.count() == 0
