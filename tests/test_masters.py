"""Tests for the master template store."""

import pytest

from shootplan.checklists import KIT, TASK, MasterTemplateStore
from shootplan.checklists.store import master_path
from shootplan.core.errors import StoreError
from shootplan.models import MasterTemplate


class TestGetOrCreate:
    def test_seeds_from_catalog_when_absent(self, store):
        masters = MasterTemplateStore(store, KIT)
        template = masters.get_or_create("u1")

        assert [c.id for c in template.categories][0] == "cat_camera_bodies"
        assert all(item.is_predefined for item in template.items)
        assert store.inner.get(master_path("u1", "kit")) == template.to_document()

    def test_seeding_is_idempotent(self, store):
        masters = MasterTemplateStore(store, KIT)
        first = masters.get_or_create("u1")
        second = masters.get_or_create("u1")

        assert first == second
        assert len(store.writes("set")) == 1

    def test_returns_existing_without_writing(self, store, small_template: MasterTemplate):
        masters = MasterTemplateStore(store, KIT)
        masters.overwrite("u1", small_template)
        store.calls.clear()

        assert masters.get_or_create("u1") == small_template
        assert store.writes() == []

    def test_masters_are_per_user_and_domain(self, store, small_template: MasterTemplate):
        MasterTemplateStore(store, KIT).overwrite("u1", small_template)

        assert MasterTemplateStore(store, KIT).get("u2") is None
        assert MasterTemplateStore(store, TASK).get("u1") is None

    def test_store_failure_propagates(self, store):
        store.fail_on.add("get")
        with pytest.raises(StoreError):
            MasterTemplateStore(store, KIT).get_or_create("u1")


class TestOverwriteAndReset:
    def test_overwrite_replaces_wholesale(self, store, small_template: MasterTemplate):
        masters = MasterTemplateStore(store, KIT)
        masters.get_or_create("u1")
        masters.overwrite("u1", small_template)

        assert masters.get("u1") == small_template

    def test_reset_to_default_regenerates(self, store, small_template: MasterTemplate, ids):
        masters = MasterTemplateStore(store, TASK, ids)
        masters.overwrite("u1", small_template)

        template = masters.reset_to_default("u1")

        assert [c.id for c in template.categories] == [c.id for c in TASK.catalog]
        assert masters.get("u1") == template

    def test_reset_on_batch_waits_for_commit(self, store, small_template: MasterTemplate):
        masters = MasterTemplateStore(store, TASK)
        masters.overwrite("u1", small_template)
        batch = store.batch()

        template = masters.reset_to_default("u1", batch=batch)
        assert masters.get("u1") == small_template

        batch.commit()
        assert masters.get("u1") == template

    def test_overwrite_failure_raises(self, store, small_template: MasterTemplate):
        store.fail_on.add("set")
        with pytest.raises(StoreError):
            MasterTemplateStore(store, KIT).overwrite("u1", small_template)
