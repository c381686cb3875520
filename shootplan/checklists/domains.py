"""Descriptors for the four checklist domains.

Kit, task, group-shot and couple-shot checklists behave identically; they
differ only in the name of the done flag, whether items carry a quantity,
and which built-in catalog seeds them.
"""

from dataclasses import dataclass

from shootplan.checklists.catalog import (
    COUPLE_SHOT_CATALOG,
    GROUP_SHOT_CATALOG,
    KIT_CATALOG,
    TASK_CATALOG,
    CatalogCategory,
)
from shootplan.core.errors import NotFoundError


@dataclass(frozen=True)
class ChecklistDomain:
    """Everything that distinguishes one checklist domain from another.

    Attributes:
        name: URL-safe identifier, also used in document paths.
        label: Human-readable name.
        state_field: Stored name of the done flag ("packed" or "completed").
        default_state: Value of the done flag on freshly cloned items.
        catalog: Built-in categories and entries used for seeding.
        has_quantity: True when items carry a quantity (kit only).
    """
    name: str
    label: str
    state_field: str
    catalog: tuple[CatalogCategory, ...]
    default_state: bool = False
    has_quantity: bool = False


KIT = ChecklistDomain(
    name="kit",
    label="Photography Kit",
    state_field="packed",
    catalog=KIT_CATALOG,
    has_quantity=True,
)
TASK = ChecklistDomain(
    name="task",
    label="Preparation Tasks",
    state_field="completed",
    catalog=TASK_CATALOG,
)
GROUP_SHOT = ChecklistDomain(
    name="group-shot",
    label="Group Shots",
    state_field="completed",
    catalog=GROUP_SHOT_CATALOG,
)
COUPLE_SHOT = ChecklistDomain(
    name="couple-shot",
    label="Couple Shots",
    state_field="completed",
    catalog=COUPLE_SHOT_CATALOG,
)

DOMAINS: dict[str, ChecklistDomain] = {
    domain.name: domain for domain in (KIT, TASK, GROUP_SHOT, COUPLE_SHOT)
}


def get_domain(name: str) -> ChecklistDomain:
    """Look up a domain by name, raising NotFoundError if unknown."""
    try:
        return DOMAINS[name]
    except KeyError:
        raise NotFoundError(f"Unknown checklist domain: {name}") from None
