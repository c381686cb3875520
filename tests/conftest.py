"""Shared test fixtures."""

import itertools
from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from shootplan.checklists import (
    KIT,
    TASK,
    ChecklistEngine,
    ChecklistState,
    MasterTemplateStore,
    ProjectInstanceStore,
    SqlDocumentStore,
)
from shootplan.core.database import get_session
from shootplan.core.errors import StoreError
from shootplan.main import app
from shootplan.models import Category, MasterTemplate, TemplateItem


class FlakyBatch:
    def __init__(self, store: "FlakyStore", inner) -> None:
        self.store = store
        self.inner = inner

    def set(self, path, document):
        self.inner.set(path, document)

    def delete(self, path):
        self.inner.delete(path)

    def commit(self):
        self.store._call("commit", "")
        self.inner.commit()


class FlakyStore:
    """Document store wrapper that records calls and fails on demand.

    ``fail_on`` fails every call of the named operations; ``fail_next``
    fails the next N calls of an operation. ``before`` runs after the
    failure decision and before the call is forwarded or rejected.
    """

    def __init__(self, inner: SqlDocumentStore) -> None:
        self.inner = inner
        self.fail_on: set[str] = set()
        self.fail_next: dict[str, int] = {}
        self.calls: list[tuple[str, str]] = []
        self.before: Callable[[str, str], None] | None = None

    def writes(self, op: str | None = None) -> list[tuple[str, str]]:
        write_ops = {op} if op else {"set", "update", "delete", "commit"}
        return [call for call in self.calls if call[0] in write_ops]

    def _call(self, op: str, path: str) -> None:
        self.calls.append((op, path))
        fail = op in self.fail_on
        if self.fail_next.get(op, 0) > 0:
            self.fail_next[op] -= 1
            fail = True
        if self.before is not None:
            self.before(op, path)
        if fail:
            raise StoreError(f"Simulated {op} failure")

    def get(self, path):
        self._call("get", path)
        return self.inner.get(path)

    def set(self, path, document):
        self._call("set", path)
        self.inner.set(path, document)

    def update(self, path, fields):
        self._call("update", path)
        self.inner.update(path, fields)

    def delete(self, path):
        self._call("delete", path)
        self.inner.delete(path)

    def list(self, prefix):
        self._call("list", prefix)
        return self.inner.list(prefix)

    def batch(self):
        return FlakyBatch(self, self.inner.batch())


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="sql_store")
def sql_store_fixture(session: Session) -> SqlDocumentStore:
    return SqlDocumentStore(session)


@pytest.fixture(name="store")
def store_fixture(sql_store: SqlDocumentStore) -> FlakyStore:
    return FlakyStore(sql_store)


@pytest.fixture(name="ids")
def ids_fixture() -> Callable[[], str]:
    """Deterministic id generator: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture(name="kit_engine")
def kit_engine_fixture(store: FlakyStore, ids) -> ChecklistEngine:
    return ChecklistEngine(
        KIT,
        MasterTemplateStore(store, KIT, ids),
        ProjectInstanceStore(store, KIT, ids),
        ids,
    )


@pytest.fixture(name="task_engine")
def task_engine_fixture(store: FlakyStore, ids) -> ChecklistEngine:
    return ChecklistEngine(
        TASK,
        MasterTemplateStore(store, TASK, ids),
        ProjectInstanceStore(store, TASK, ids),
        ids,
    )


@pytest.fixture(name="small_template")
def small_template_fixture() -> MasterTemplate:
    """Two categories: C holds items A and B, D holds item E."""
    return MasterTemplate(
        categories=[
            Category(id="C", display_name="Lenses", is_predefined=True),
            Category(id="D", display_name="Power"),
        ],
        items=[
            TemplateItem(id="A", name="Telephoto Lens", category_id="C", is_predefined=True, quantity=1),
            TemplateItem(id="B", name="Macro Lens", category_id="C", quantity=1, notes="For ring shots"),
            TemplateItem(id="E", name="Camera Batteries", category_id="D", quantity=4),
        ],
    )


@pytest.fixture(name="ready_state")
def ready_state_fixture(kit_engine: ChecklistEngine, small_template: MasterTemplate) -> ChecklistState:
    """A loaded kit checklist for project p1 cloned from small_template."""
    kit_engine.masters.overwrite("u1", small_template)
    state = ChecklistState()
    kit_engine.load(state, "u1", "p1")
    return state
