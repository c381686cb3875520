"""Per-project checklist instances cloned from a master template."""
import logging
from collections.abc import Sequence
from typing import Any

from shootplan.checklists.catalog import IdFactory, new_id
from shootplan.checklists.domains import ChecklistDomain
from shootplan.checklists.store import DocumentStore, WriteBatch, instance_path, instance_prefix
from shootplan.models import InstanceItem, TemplateItem

logger = logging.getLogger(__name__)


class ProjectInstanceStore:
    """
    Stores a project's working checklist for one domain.

    Each instance item is its own document under
    ``projects/{project_id}/checklists/{domain}/items/``. Items are copies:
    later edits to the master template never reach them.
    """

    def __init__(
        self,
        store: DocumentStore,
        domain: ChecklistDomain,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.store = store
        self.domain = domain
        self.id_factory = id_factory

    def get_instance(self, project_id: str) -> list[InstanceItem]:
        """Return the project's items in checklist order; empty if never cloned."""
        documents = self.store.list(instance_prefix(project_id, self.domain.name))
        items = [InstanceItem.from_document(doc, self.domain) for _, doc in documents]
        items.sort(key=lambda item: item.position)
        return items

    def clone_from_master(
        self,
        project_id: str,
        template_items: Sequence[TemplateItem],
        replace: bool = False,
        batch: WriteBatch | None = None,
    ) -> list[InstanceItem]:
        """
        Create one instance item per template item in a single batch.

        Only call this when ``get_instance`` returned nothing, unless
        ``replace`` is set, in which case the existing items are deleted in
        the same batch. When ``batch`` is given the writes are queued on it
        and the caller commits.

        Returns:
            The created instance items.
        """
        owns_batch = batch is None
        if owns_batch:
            batch = self.store.batch()
        if replace:
            prefix = instance_prefix(project_id, self.domain.name)
            for path, _ in self.store.list(prefix):
                batch.delete(path)

        created = []
        for position, template_item in enumerate(template_items):
            item = InstanceItem(
                **template_item.model_dump(),
                instance_id=self.id_factory(),
                done=self.domain.default_state,
                position=position,
            )
            batch.set(
                instance_path(project_id, self.domain.name, item.instance_id),
                item.to_document(self.domain),
            )
            created.append(item)
        if not owns_batch:
            return created

        batch.commit()
        logger.info(
            f"Cloned {len(created)} {self.domain.name} items into project {project_id}"
            + (" (replacing existing)" if replace else "")
        )
        return created

    def update_item(self, project_id: str, instance_id: str, fields: dict[str, Any]) -> None:
        """
        Patch stored fields of a single instance item.

        Raises:
            NotFoundError: No item with this instance_id exists.
            StoreError: The store rejected the write.
        """
        self.store.update(instance_path(project_id, self.domain.name, instance_id), fields)

    def set_state(self, project_id: str, instance_id: str, done: bool) -> None:
        """Persist the done flag under the domain's state field name."""
        self.update_item(project_id, instance_id, {self.domain.state_field: done})

    def add_item(self, project_id: str, item: InstanceItem) -> None:
        """Store a new item created directly on the project checklist."""
        self.store.set(
            instance_path(project_id, self.domain.name, item.instance_id),
            item.to_document(self.domain),
        )

    def delete_item(self, project_id: str, instance_id: str) -> None:
        self.store.delete(instance_path(project_id, self.domain.name, instance_id))
