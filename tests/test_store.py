"""Tests for the SQL-backed document store."""

from typing import get_type_hints

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from shootplan.checklists import SqlDocumentStore
from shootplan.core.errors import NotFoundError, StoreError


class TestSqlDocumentStore:
    def test_get_missing_returns_none(self, sql_store: SqlDocumentStore):
        assert sql_store.get("users/1/masters/kit") is None

    def test_set_then_get(self, sql_store: SqlDocumentStore):
        sql_store.set("users/1/masters/kit", {"categories": [], "items": []})
        assert sql_store.get("users/1/masters/kit") == {"categories": [], "items": []}

    def test_set_overwrites(self, sql_store: SqlDocumentStore):
        sql_store.set("doc", {"a": 1, "b": 2})
        sql_store.set("doc", {"a": 3})
        assert sql_store.get("doc") == {"a": 3}

    def test_update_merges_fields(self, sql_store: SqlDocumentStore):
        sql_store.set("doc", {"name": "Tripod", "packed": False})
        sql_store.update("doc", {"packed": True})
        assert sql_store.get("doc") == {"name": "Tripod", "packed": True}

    def test_update_missing_raises_not_found(self, sql_store: SqlDocumentStore):
        with pytest.raises(NotFoundError):
            sql_store.update("missing", {"packed": True})

    def test_delete(self, sql_store: SqlDocumentStore):
        sql_store.set("doc", {"a": 1})
        sql_store.delete("doc")
        assert sql_store.get("doc") is None

    def test_delete_missing_is_noop(self, sql_store: SqlDocumentStore):
        sql_store.delete("missing")

    def test_list_by_prefix(self, sql_store: SqlDocumentStore):
        sql_store.set("projects/p1/checklists/kit/items/b", {"n": 2})
        sql_store.set("projects/p1/checklists/kit/items/a", {"n": 1})
        sql_store.set("projects/p1/checklists/task/items/c", {"n": 3})
        sql_store.set("projects/p10/checklists/kit/items/d", {"n": 4})

        listed = sql_store.list("projects/p1/checklists/kit/items/")
        assert listed == [
            ("projects/p1/checklists/kit/items/a", {"n": 1}),
            ("projects/p1/checklists/kit/items/b", {"n": 2}),
        ]

    def test_list_prefix_with_wildcard_characters(self, sql_store: SqlDocumentStore):
        sql_store.set("projects/p_1/x", {"n": 1})
        sql_store.set("projects/pa1/x", {"n": 2})
        assert [path for path, _ in sql_store.list("projects/p_1/")] == ["projects/p_1/x"]

    def test_batch_applies_sets_and_deletes_on_commit(self, sql_store: SqlDocumentStore):
        sql_store.set("old", {"n": 0})
        batch = sql_store.batch()
        batch.delete("old")
        batch.set("new/1", {"n": 1})
        batch.set("new/2", {"n": 2})
        assert sql_store.get("new/1") is None

        batch.commit()

        assert sql_store.get("old") is None
        assert [path for path, _ in sql_store.list("new/")] == ["new/1", "new/2"]

    def test_database_failure_raises_store_error(self, session: Session, monkeypatch):
        store = SqlDocumentStore(session)

        def broken_get(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "get", broken_get)
        with pytest.raises(StoreError):
            store.get("users/1/masters/kit")
        with pytest.raises(StoreError):
            store.set("users/1/masters/kit", {})

    def test_write_annotations_resolve_to_builtin_list(self):
        hints = get_type_hints(SqlDocumentStore._apply)
        assert hints["writes"].__origin__ is list
