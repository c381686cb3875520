"""Document store used by the master and project checklist stores.

Documents are JSON objects addressed by slash-separated paths. The store is
treated as remote: every call is a live round trip, nothing is cached, and
failures surface as ``StoreError``.
"""
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from shootplan.core.errors import NotFoundError, StoreError
from shootplan.models import StoredDocument

logger = logging.getLogger(__name__)

Document = dict[str, Any]


def master_path(user_id: str, domain_name: str) -> str:
    return f"users/{user_id}/masters/{domain_name}"


def instance_prefix(project_id: str, domain_name: str) -> str:
    return f"projects/{project_id}/checklists/{domain_name}/items/"


def instance_path(project_id: str, domain_name: str, instance_id: str) -> str:
    return instance_prefix(project_id, domain_name) + instance_id


class WriteBatch(Protocol):
    def set(self, path: str, document: Document) -> None:
        ...

    def delete(self, path: str) -> None:
        ...

    def commit(self) -> None:
        ...


class DocumentStore(Protocol):
    def get(self, path: str) -> Document | None:
        ...

    def set(self, path: str, document: Document) -> None:
        ...

    def update(self, path: str, fields: Document) -> None:
        ...

    def delete(self, path: str) -> None:
        ...

    def list(self, prefix: str) -> list[tuple[str, Document]]:
        ...

    def batch(self) -> WriteBatch:
        ...


class SqlWriteBatch:
    """Queued writes applied in a single transaction on commit."""

    def __init__(self, store: "SqlDocumentStore") -> None:
        self._store = store
        self._writes: list[tuple[str, Document | None]] = []

    def set(self, path: str, document: Document) -> None:
        self._writes.append((path, dict(document)))

    def delete(self, path: str) -> None:
        self._writes.append((path, None))

    def commit(self) -> None:
        self._store._apply(self._writes)
        self._writes = []


class SqlDocumentStore:
    """Document store persisted in the ``storeddocument`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, path: str) -> Document | None:
        try:
            row = self.session.get(StoredDocument, path)
        except SQLAlchemyError as e:
            raise self._failed("get", path, e) from e
        if row is None:
            return None
        return dict(row.data)

    def set(self, path: str, document: Document) -> None:
        self._apply([(path, dict(document))])

    def update(self, path: str, fields: Document) -> None:
        """Merge top-level fields into an existing document."""
        try:
            row = self.session.get(StoredDocument, path)
            if row is None:
                raise NotFoundError(f"Document not found: {path}")
            # Assign a new dict so SQLAlchemy sees the JSON column change
            row.data = {**row.data, **fields}
            row.updated_at = datetime.now(UTC)
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._failed("update", path, e) from e

    def delete(self, path: str) -> None:
        self._apply([(path, None)])

    def list(self, prefix: str) -> list[tuple[str, Document]]:
        """Return every document whose path starts with prefix, ordered by path."""
        statement = (
            select(StoredDocument)
            .where(col(StoredDocument.path).startswith(prefix, autoescape=True))
            .order_by(StoredDocument.path)
        )
        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise self._failed("list", prefix, e) from e
        return [(row.path, dict(row.data)) for row in rows]

    def batch(self) -> SqlWriteBatch:
        return SqlWriteBatch(self)

    def _apply(self, writes: list[tuple[str, Document | None]]) -> None:
        """Apply sets (document) and deletes (None) in one transaction."""
        try:
            for path, document in writes:
                row = self.session.get(StoredDocument, path)
                if document is None:
                    if row is not None:
                        self.session.delete(row)
                    continue
                if row is None:
                    row = StoredDocument(path=path, data=document)
                else:
                    row.data = document
                    row.updated_at = datetime.now(UTC)
                self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._failed("write", writes[0][0] if writes else "", e) from e

    @staticmethod
    def _failed(operation: str, path: str, error: Exception) -> StoreError:
        logger.error(f"Document store {operation} failed for {path}: {error}")
        return StoreError(f"Document store {operation} failed for {path}")
