"""Draft-then-commit editing of a master template.

A ``TemplateEditor`` works on a private copy of the master template. Nothing
is written until ``commit``; ``discard`` throws every edit away. Item and
category ids are generated locally, so edits never need the store.
"""
import logging
from collections.abc import Callable

from shootplan.checklists.catalog import IdFactory, new_category_id, new_id
from shootplan.checklists.domains import ChecklistDomain
from shootplan.checklists.engine import ChecklistEngine, ChecklistState
from shootplan.core.errors import NotFoundError, StateError, ValidationError
from shootplan.models import Category, MasterTemplate, TemplateItem

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[Category], bool]


class TemplateEditor:
    """
    An editing session over a snapshot of one master template.

    Typical use::

        editor = TemplateEditor.open(state.master, KIT)
        editor.add_item("cat_lenses", "Tilt-Shift Lens")
        editor.commit(engine, state, user_id)

    A failed commit keeps the working copy so it can be retried as is. After
    a successful commit the session is closed and rejects further calls.
    """

    def __init__(
        self,
        template: MasterTemplate,
        domain: ChecklistDomain,
        id_factory: IdFactory = new_id,
        category_id_factory: IdFactory = new_category_id,
    ) -> None:
        self.domain = domain
        self.id_factory = id_factory
        self.category_id_factory = category_id_factory
        self._original = template.deep_copy()
        self._working = template.deep_copy()
        self.closed = False

    @classmethod
    def open(cls, template: MasterTemplate, domain: ChecklistDomain, **kwargs) -> "TemplateEditor":
        return cls(template, domain, **kwargs)

    @property
    def working_categories(self) -> list[Category]:
        return self._working.categories

    @property
    def working_items(self) -> list[TemplateItem]:
        return self._working.items

    @property
    def working_copy(self) -> MasterTemplate:
        return self._working.deep_copy()

    @property
    def is_dirty(self) -> bool:
        return self._working != self._original

    def items_by_category(self) -> dict[str, list[TemplateItem]]:
        """Group working items by category id, in category order."""
        groups: dict[str, list[TemplateItem]] = {c.id: [] for c in self._working.categories}
        for item in self._working.items:
            groups.setdefault(item.category_id, []).append(item)
        return groups

    def add_item(self, category_id: str, name: str) -> TemplateItem:
        self._require_open()
        name = name.strip()
        if not name:
            raise ValidationError("Please enter an item name")
        if self._find_category(category_id) is None:
            raise NotFoundError(f"Category not found: {category_id}")

        item = TemplateItem(
            id=self.id_factory(),
            name=name,
            category_id=category_id,
            is_predefined=False,
            quantity=1 if self.domain.has_quantity else None,
        )
        self._working.items.append(item)
        return item

    def delete_item(self, item_id: str) -> None:
        self._require_open()
        self._working.items = [item for item in self._working.items if item.id != item_id]

    def set_quantity(self, item_id: str, quantity: int) -> TemplateItem:
        """Set how many of a kit item to pack; negative values clamp to 0."""
        self._require_open()
        if not self.domain.has_quantity:
            raise ValidationError(f"{self.domain.label} items have no quantity")
        for item in self._working.items:
            if item.id == item_id:
                item.quantity = max(0, quantity)
                return item
        raise NotFoundError(f"Item not found: {item_id}")

    def add_category(self, name: str) -> Category:
        self._require_open()
        name = name.strip()
        if not name:
            raise ValidationError("Please enter a category name")

        category = Category(id=self.category_id_factory(), display_name=name, is_predefined=False)
        self._working.categories.append(category)
        return category

    def delete_category(self, category_id: str, confirm: ConfirmDelete) -> bool:
        """
        Delete a category and every working item in it.

        ``confirm`` is asked first and nothing changes unless it answers
        True. Predefined categories can be deleted like any other.

        Returns:
            True if the category was deleted.
        """
        self._require_open()
        category = self._find_category(category_id)
        if category is None:
            raise NotFoundError(f"Category not found: {category_id}")
        if not confirm(category):
            return False

        self._working.categories = [c for c in self._working.categories if c.id != category_id]
        self._working.items = [i for i in self._working.items if i.category_id != category_id]
        return True

    def commit(self, engine: ChecklistEngine, state: ChecklistState, user_id: str) -> None:
        """Save the working copy through the engine and end the session."""
        self._require_open()
        logger.info(
            f"Committing {self.domain.name} master for user {user_id}: "
            f"{len(self._working.categories)} categories, {len(self._working.items)} items"
        )
        engine.apply_master_update(
            state, user_id, self._working.categories, self._working.items
        )
        self._original = self._working.deep_copy()
        self.closed = True

    def discard(self) -> None:
        """Restore the working copy to the snapshot taken at open."""
        self._require_open()
        self._working = self._original.deep_copy()

    def _require_open(self) -> None:
        if self.closed:
            raise StateError("Editor session has already been committed")

    def _find_category(self, category_id: str) -> Category | None:
        for category in self._working.categories:
            if category.id == category_id:
                return category
        return None
