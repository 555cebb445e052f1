"""Tests for EntityStore: collection registry, transactions, bootstrap."""

import pytest

from projectdocs.components.store import (
    EntityStore,
    JsonFileBackend,
    MemoryBackend,
    get_entity_store,
    initialize,
    reset,
    reset_entity_store,
    set_entity_store,
)
from projectdocs.components.store.provider import create_backend
from projectdocs.components.store.seed import build_seed
from projectdocs.settings import COLLECTION_NAMES, settings


class TestCollections:
    def test_one_collection_per_entity_kind(self, store):
        assert tuple(store.collections) == COLLECTION_NAMES

    def test_collection_lookup_by_name(self, store):
        assert store.collection("activity-log") is store.activity_log

    def test_unknown_collection_raises(self, store):
        with pytest.raises(KeyError):
            store.collection("invoices")


class TestTransaction:
    def test_commit_keeps_changes(self, seeded_store):
        with seeded_store.transaction("folders"):
            seeded_store.folders.delete("fld_001")

        assert seeded_store.folders.get_by_id("fld_001") is None

    def test_failure_restores_every_named_collection(self, seeded_store):
        folders_before = seeded_store.folders.get_all()
        files_before = seeded_store.files.get_all()

        with pytest.raises(RuntimeError):
            with seeded_store.transaction("folders", "files"):
                seeded_store.folders.delete("fld_001")
                seeded_store.files.delete("file_001")
                raise RuntimeError("boom")

        assert seeded_store.folders.get_all() == folders_before
        assert seeded_store.files.get_all() == files_before

    def test_unnamed_collections_are_not_restored(self, seeded_store):
        with pytest.raises(RuntimeError):
            with seeded_store.transaction("folders"):
                seeded_store.files.delete("file_001")
                raise RuntimeError("boom")

        assert seeded_store.files.get_by_id("file_001") is None


class TestBootstrap:
    def test_initialize_seeds_empty_store(self, store):
        assert store.is_empty()

        assert initialize(store) is True

        seed = build_seed(0)
        for name, records in seed.items():
            assert store.collection(name).count() == len(records)

    def test_initialize_skips_when_data_exists(self, seeded_store):
        seeded_store.folders.delete("fld_001")

        assert initialize(seeded_store) is False
        assert seeded_store.folders.get_by_id("fld_001") is None

    def test_initialize_skips_when_any_collection_has_data(self, store):
        seed = build_seed(0)
        store.companies.create(seed["companies"][0])

        assert initialize(store) is False
        assert store.folders.count() == 0

    def test_reset_restores_defaults(self, seeded_store):
        seeded_store.folders.delete("fld_001")
        seeded_store.projects.delete("proj_002")

        reset(seeded_store)

        assert seeded_store.folders.get_by_id("fld_001") is not None
        assert seeded_store.projects.get_by_id("proj_002") is not None
        assert seeded_store.activity_log.count() == 3

    def test_seed_tree_is_well_formed(self, tree):
        assert tree.check_integrity("proj_001") == []


class TestProvider:
    def teardown_method(self):
        reset_entity_store()

    def test_singleton(self):
        reset_entity_store()

        assert get_entity_store() is get_entity_store()

    def test_set_entity_store(self):
        store = EntityStore(MemoryBackend())
        set_entity_store(store)

        assert get_entity_store() is store

    def test_create_backend_follows_settings(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "storage_type", "file")
        monkeypatch.setattr(settings, "data_dir", str(tmp_path))

        backend = create_backend()

        assert isinstance(backend, JsonFileBackend)
        assert backend.data_dir == tmp_path

    def test_default_backend_is_memory(self, monkeypatch):
        monkeypatch.setattr(settings, "storage_type", "memory")

        assert isinstance(create_backend(), MemoryBackend)
