"""Shared dependencies for checklist routes."""
from fastapi import Depends, Header
from sqlmodel import Session

from shootplan.checklists import ChecklistEngine, SqlDocumentStore, get_domain
from shootplan.core.config import settings
from shootplan.core.database import get_session


def get_store(session: Session = Depends(get_session)) -> SqlDocumentStore:
    """Dependency for the document store bound to the request's session."""
    return SqlDocumentStore(session)


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Resolve the acting user; sign-in happens upstream of this service."""
    return x_user_id or settings.default_user_id


def get_engine(domain_name: str, store: SqlDocumentStore = Depends(get_store)) -> ChecklistEngine:
    """Build the checklist engine for the domain named in the path."""
    return ChecklistEngine.for_store(store, get_domain(domain_name))
