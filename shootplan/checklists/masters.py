"""Per-user master templates, one per checklist domain."""
import logging

from shootplan.checklists.catalog import IdFactory, default_categories, generate_predefined, new_id
from shootplan.checklists.domains import ChecklistDomain
from shootplan.checklists.store import DocumentStore, WriteBatch, master_path
from shootplan.models import MasterTemplate

logger = logging.getLogger(__name__)


def build_default_template(
    domain: ChecklistDomain, id_factory: IdFactory = new_id
) -> MasterTemplate:
    """Build a fresh master template from the domain's catalog."""
    return MasterTemplate(
        categories=default_categories(domain.catalog),
        items=generate_predefined(domain, id_factory),
    )


class MasterTemplateStore:
    """
    Reads and writes a user's master template for one domain.

    The whole template (categories and items) lives in a single document, so
    every write replaces it wholesale. Store failures propagate as
    ``StoreError``.
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

    def get(self, user_id: str) -> MasterTemplate | None:
        """Return the stored master template, or None if it was never created."""
        document = self.store.get(master_path(user_id, self.domain.name))
        if document is None:
            return None
        return MasterTemplate.from_document(document)

    def get_or_create(self, user_id: str) -> MasterTemplate:
        """
        Return the user's master template, seeding it from the catalog if absent.

        The seed is written once; later calls read it back. Two concurrent
        first-time calls can both seed, in which case the last write wins.
        """
        existing = self.get(user_id)
        if existing is not None:
            return existing

        template = build_default_template(self.domain, self.id_factory)
        self.store.set(master_path(user_id, self.domain.name), template.to_document())
        logger.info(
            f"Seeded default {self.domain.name} master for user {user_id} "
            f"({len(template.categories)} categories, {len(template.items)} items)"
        )
        return template

    def overwrite(self, user_id: str, template: MasterTemplate) -> None:
        """Replace the stored categories and items with the given template."""
        self.store.set(master_path(user_id, self.domain.name), template.to_document())
        logger.info(
            f"Saved {self.domain.name} master for user {user_id} "
            f"({len(template.categories)} categories, {len(template.items)} items)"
        )

    def reset_to_default(self, user_id: str, batch: WriteBatch | None = None) -> MasterTemplate:
        """
        Regenerate the template from the catalog and overwrite the stored copy.

        When ``batch`` is given the write is only queued on it and the caller
        commits, so the reset can land together with other writes.
        """
        template = build_default_template(self.domain, self.id_factory)
        path = master_path(user_id, self.domain.name)
        if batch is not None:
            batch.set(path, template.to_document())
            return template

        self.store.set(path, template.to_document())
        logger.info(f"Reset {self.domain.name} master to defaults for user {user_id}")
        return template
