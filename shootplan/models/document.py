"""Document row backing the checklist document store.

Each master template and each project checklist item is stored as one JSON
document addressed by a slash-separated path, in the manner of a remote
document database (``users/{user_id}/masters/kit``,
``projects/{project_id}/checklists/kit/items/{instance_id}``).
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class StoredDocument(SQLModel, table=True):
    """A single JSON document keyed by its path.

    Attributes:
        path: Full document path; unique and the primary key.
        data: Document body. Always a JSON object.
        updated_at: Timestamp of the last write to this document.
    """
    path: str = Field(primary_key=True)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
