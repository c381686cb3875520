"""Tests for the project instance store."""

import pytest

from shootplan.checklists import KIT, TASK, ProjectInstanceStore
from shootplan.core.errors import NotFoundError, StoreError
from shootplan.models import InstanceItem, MasterTemplate


class TestGetInstance:
    def test_empty_when_never_cloned(self, store):
        assert ProjectInstanceStore(store, KIT).get_instance("p1") == []


class TestCloneFromMaster:
    def test_clones_every_item_not_done(self, store, small_template: MasterTemplate, ids):
        instances = ProjectInstanceStore(store, KIT, ids)
        instances.clone_from_master("p1", small_template.items)

        items = instances.get_instance("p1")
        assert [item.id for item in items] == ["A", "B", "E"]
        assert [item.name for item in items] == ["Telephoto Lens", "Macro Lens", "Camera Batteries"]
        assert all(item.done is False for item in items)
        assert items[1].notes == "For ring shots"
        assert items[2].quantity == 4

    def test_instance_ids_differ_from_template_ids(self, store, small_template: MasterTemplate):
        instances = ProjectInstanceStore(store, KIT)
        created = instances.clone_from_master("p1", small_template.items)
        assert all(item.instance_id != item.id for item in created)

    def test_clone_is_one_batch(self, store, small_template: MasterTemplate):
        ProjectInstanceStore(store, KIT).clone_from_master("p1", small_template.items)
        assert store.writes() == [("commit", "")]

    def test_failed_clone_writes_nothing(self, store, small_template: MasterTemplate):
        store.fail_on.add("commit")
        instances = ProjectInstanceStore(store, KIT)
        with pytest.raises(StoreError):
            instances.clone_from_master("p1", small_template.items)
        assert instances.get_instance("p1") == []

    def test_replace_drops_existing_items(self, store, small_template: MasterTemplate):
        instances = ProjectInstanceStore(store, KIT)
        instances.clone_from_master("p1", small_template.items)
        instances.clone_from_master("p1", small_template.items[:1], replace=True)

        items = instances.get_instance("p1")
        assert [item.id for item in items] == ["A"]

    def test_clone_on_caller_batch_waits_for_commit(self, store, small_template: MasterTemplate):
        instances = ProjectInstanceStore(store, KIT)
        batch = store.batch()

        created = instances.clone_from_master("p1", small_template.items, batch=batch)
        assert instances.get_instance("p1") == []

        batch.commit()
        assert instances.get_instance("p1") == created

    def test_projects_and_domains_are_isolated(self, store, small_template: MasterTemplate):
        ProjectInstanceStore(store, KIT).clone_from_master("p1", small_template.items)

        assert ProjectInstanceStore(store, KIT).get_instance("p2") == []
        assert ProjectInstanceStore(store, TASK).get_instance("p1") == []


class TestUpdateItem:
    def test_set_state_persists_under_state_field(self, store, small_template: MasterTemplate):
        instances = ProjectInstanceStore(store, KIT)
        created = instances.clone_from_master("p1", small_template.items)

        instances.set_state("p1", created[0].instance_id, True)

        items = instances.get_instance("p1")
        assert items[0].done is True
        assert items[1].done is False

    def test_update_missing_item_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            ProjectInstanceStore(store, KIT).update_item("p1", "missing", {"packed": True})

    def test_add_and_delete_item(self, store):
        instances = ProjectInstanceStore(store, TASK)
        item = InstanceItem(id="t1", name="Pack snacks", category_id="cat_morningof", instance_id="i1")

        instances.add_item("p1", item)
        assert instances.get_instance("p1") == [item]

        instances.delete_item("p1", "i1")
        assert instances.get_instance("p1") == []
