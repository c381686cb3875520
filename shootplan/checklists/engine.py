"""Checklist sync engine.

Coordinates a user's master template with a project's working checklist for
one domain:

    1. ``load`` gets (or seeds) the master template, then clones its items into
       the project the first time the project is opened.
    2. ``toggle_state`` flips an item's done flag optimistically and restores
       the exact prior value if the store write fails.
    3. ``apply_master_update`` saves an edited master template. Existing
       project checklists are never touched.
    4. ``reset`` restores the catalog defaults and re-clones the project.

The engine keeps no per-user context. Callers hold a ``ChecklistState`` and
pass it, with the user and project ids, into every call.
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from shootplan.checklists.catalog import IdFactory, new_id
from shootplan.checklists.domains import ChecklistDomain
from shootplan.checklists.instances import ProjectInstanceStore
from shootplan.checklists.masters import MasterTemplateStore
from shootplan.checklists.store import DocumentStore
from shootplan.core.errors import ChecklistError, NotFoundError, StateError, ValidationError
from shootplan.models import Category, InstanceItem, MasterTemplate, TemplateItem

logger = logging.getLogger(__name__)


class EngineStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class ChecklistState:
    """Caller-held view of one (user, project, domain) checklist.

    Attributes:
        status: Where the checklist is in its load lifecycle.
        master_categories: Categories of the user's master template.
        master_items: Items of the user's master template.
        instance_items: The project's working checklist.
        error: Reason for the last failed load, if status is ERROR.
    """
    status: EngineStatus = EngineStatus.UNINITIALIZED
    master_categories: list[Category] = field(default_factory=list)
    master_items: list[TemplateItem] = field(default_factory=list)
    instance_items: list[InstanceItem] = field(default_factory=list)
    error: str | None = None

    def find_item(self, instance_id: str) -> InstanceItem | None:
        for item in self.instance_items:
            if item.instance_id == instance_id:
                return item
        return None

    @property
    def master(self) -> MasterTemplate:
        return MasterTemplate(categories=self.master_categories, items=self.master_items)


@dataclass(frozen=True)
class ChecklistProgress:
    done: int
    total: int

    @property
    def all_done(self) -> bool:
        return self.total > 0 and self.done == self.total


class ChecklistEngine:
    """Single entry point for checklist reads and writes in one domain."""

    def __init__(
        self,
        domain: ChecklistDomain,
        masters: MasterTemplateStore,
        instances: ProjectInstanceStore,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.domain = domain
        self.masters = masters
        self.instances = instances
        self.id_factory = id_factory

    @classmethod
    def for_store(cls, store: DocumentStore, domain: ChecklistDomain) -> "ChecklistEngine":
        return cls(domain, MasterTemplateStore(store, domain), ProjectInstanceStore(store, domain))

    def load(self, state: ChecklistState, user_id: str, project_id: str) -> ChecklistState:
        """
        Load the master template and the project's checklist into state.

        The project checklist is cloned from the master only when the project
        has no items yet, so loading again never duplicates items. On failure
        the state moves to ERROR with the reason recorded, previously loaded
        data is kept, and the error is re-raised.
        """
        if state.status == EngineStatus.LOADING:
            raise StateError("Checklist is already loading")

        state.status = EngineStatus.LOADING
        try:
            master = self.masters.get_or_create(user_id)
            items = self.instances.get_instance(project_id)
            if not items and master.items:
                self.instances.clone_from_master(project_id, master.items)
                items = self.instances.get_instance(project_id)
        except ChecklistError as e:
            state.status = EngineStatus.ERROR
            state.error = str(e)
            logger.error(f"Failed to load {self.domain.name} checklist for project {project_id}: {e}")
            raise

        state.master_categories = master.categories
        state.master_items = master.items
        state.instance_items = items
        state.status = EngineStatus.READY
        state.error = None
        return state

    def toggle_state(self, state: ChecklistState, project_id: str, instance_id: str) -> bool:
        """
        Flip an item's done flag, optimistically.

        The new value is visible in ``state`` before the store call. If the
        write fails the item is restored to its exact prior value, provided no
        later toggle of the same item has replaced the optimistic value, and
        the error is re-raised with the state still READY.

        Returns:
            The new done value.
        """
        self._require_ready(state)
        item = state.find_item(instance_id)
        if item is None:
            raise NotFoundError(f"Checklist item not found: {instance_id}")

        prior = item.done
        optimistic = not prior
        item.done = optimistic
        try:
            self.instances.set_state(project_id, instance_id, optimistic)
        except ChecklistError as e:
            self._rollback_state(state, instance_id, prior, optimistic)
            logger.warning(
                f"Rolled back {self.domain.state_field}={optimistic} on item {instance_id}: {e}"
            )
            raise
        return optimistic

    def apply_master_update(
        self,
        state: ChecklistState,
        user_id: str,
        categories: Sequence[Category],
        items: Sequence[TemplateItem],
    ) -> None:
        """
        Save an edited master template and update state on success.

        Project checklists are independent copies and are left untouched.
        Valid in any state except LOADING, so a master can be edited before
        any project is opened.
        """
        if state.status == EngineStatus.LOADING:
            raise StateError("Checklist is still loading")
        template = MasterTemplate(
            categories=[category.model_copy() for category in categories],
            items=[item.model_copy() for item in items],
        )
        orphans = template.orphaned_items()
        if orphans:
            raise ValidationError(
                f"{len(orphans)} items reference missing categories, e.g. {orphans[0].category_id}"
            )

        self.masters.overwrite(user_id, template)
        state.master_categories = template.categories
        state.master_items = template.items

    def reset(self, state: ChecklistState, user_id: str, project_id: str) -> ChecklistState:
        """
        Restore catalog defaults and replace the project's checklist with a fresh clone.

        The master and the project's items are written in one batch, so a
        failed reset leaves both the store and ``state`` as they were.
        """
        if state.status == EngineStatus.LOADING:
            raise StateError("Checklist is still loading")

        batch = self.instances.store.batch()
        master = self.masters.reset_to_default(user_id, batch=batch)
        self.instances.clone_from_master(project_id, master.items, replace=True, batch=batch)
        batch.commit()
        items = self.instances.get_instance(project_id)

        state.master_categories = master.categories
        state.master_items = master.items
        state.instance_items = items
        state.status = EngineStatus.READY
        state.error = None
        logger.info(f"Reset {self.domain.name} checklist for project {project_id}")
        return state

    def add_instance_item(
        self, state: ChecklistState, project_id: str, category_id: str, name: str
    ) -> InstanceItem:
        """Add an item to the project checklist only, removing it again if the write fails."""
        self._require_ready(state)
        name = name.strip()
        if not name:
            raise ValidationError("Item name cannot be empty")
        known = {c.id for c in state.master_categories}
        known.update(i.category_id for i in state.instance_items)
        if category_id not in known:
            raise NotFoundError(f"Category not found: {category_id}")

        item = InstanceItem(
            id=self.id_factory(),
            name=name,
            category_id=category_id,
            quantity=1 if self.domain.has_quantity else None,
            instance_id=self.id_factory(),
            done=self.domain.default_state,
            position=max((i.position for i in state.instance_items), default=-1) + 1,
        )
        state.instance_items.append(item)
        try:
            self.instances.add_item(project_id, item)
        except ChecklistError:
            state.instance_items = [
                i for i in state.instance_items if i.instance_id != item.instance_id
            ]
            raise
        return item

    def delete_instance_item(self, state: ChecklistState, project_id: str, instance_id: str) -> None:
        """Remove an item from the project checklist, restoring it if the write fails."""
        self._require_ready(state)
        item = state.find_item(instance_id)
        if item is None:
            raise NotFoundError(f"Checklist item not found: {instance_id}")

        index = state.instance_items.index(item)
        state.instance_items.remove(item)
        try:
            self.instances.delete_item(project_id, instance_id)
        except ChecklistError:
            if state.find_item(instance_id) is None:
                state.instance_items.insert(min(index, len(state.instance_items)), item)
            raise

    @staticmethod
    def progress(state: ChecklistState) -> ChecklistProgress:
        done = sum(1 for item in state.instance_items if item.done)
        return ChecklistProgress(done=done, total=len(state.instance_items))

    @staticmethod
    def _rollback_state(
        state: ChecklistState, instance_id: str, prior: bool, optimistic: bool
    ) -> None:
        item = state.find_item(instance_id)
        # A later toggle owns the item now; its own outcome decides the value
        if item is not None and item.done == optimistic:
            item.done = prior

    @staticmethod
    def _require_ready(state: ChecklistState) -> None:
        if state.status != EngineStatus.READY:
            raise StateError(f"Checklist is not ready (status: {state.status.value})")
