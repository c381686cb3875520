"""Checklist value types shared by every checklist domain.

A user's master template is a set of categories plus template items. Each
project gets its own copy of the template items as instance items, carrying
a done flag that the domain names ``packed`` (kit) or ``completed``
(tasks, group shots, couple shots).

These are plain pydantic models (SQLModel without ``table=True``): they
compare by value, and copying one never shares lists with the original.
"""

from typing import TYPE_CHECKING, Any

from sqlmodel import Field, SQLModel

if TYPE_CHECKING:
    from shootplan.checklists.domains import ChecklistDomain


class Category(SQLModel):
    """A grouping of checklist items within a master template.

    Attributes:
        id: Stable well-known id for predefined categories (``cat_lenses``),
            generated for user-created ones.
        display_name: Human-readable name.
        is_predefined: True when the category ships in the built-in catalog.
    """
    id: str
    display_name: str
    is_predefined: bool = False


class TemplateItem(SQLModel):
    """An entry in a user's master template.

    Attributes:
        id: Unique item id.
        name: Display text.
        category_id: Id of the owning category in the same template.
        is_predefined: True when seeded from the built-in catalog.
        quantity: How many to pack. Only set for domains with quantities.
        notes: Free-form notes, empty when unset.
    """
    id: str
    name: str
    category_id: str
    is_predefined: bool = False
    quantity: int | None = None
    notes: str = ""

    def to_document(self) -> dict[str, Any]:
        doc = {
            "id": self.id,
            "name": self.name,
            "categoryId": self.category_id,
            "isPredefined": self.is_predefined,
            "notes": self.notes,
        }
        if self.quantity is not None:
            doc["quantity"] = self.quantity
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "TemplateItem":
        return cls(
            id=doc["id"],
            name=doc["name"],
            category_id=doc["categoryId"],
            is_predefined=doc.get("isPredefined", False),
            quantity=doc.get("quantity"),
            notes=doc.get("notes") or "",
        )


class InstanceItem(TemplateItem):
    """A project's working copy of a template item.

    The instance is a copy, not the template row: ``instance_id`` addresses
    the stored document and is distinct from the logical ``id`` inherited
    from the template item.

    Attributes:
        instance_id: Store identifier of this project item.
        done: Packed/completed state. Persisted under the domain's state
            field name.
        position: Order of the item within the project checklist.
    """
    instance_id: str
    done: bool = False
    position: int = 0

    def to_document(self, domain: "ChecklistDomain") -> dict[str, Any]:
        doc = super().to_document()
        doc["instanceId"] = self.instance_id
        doc["position"] = self.position
        doc[domain.state_field] = self.done
        return doc

    @classmethod
    def from_document(
        cls, doc: dict[str, Any], domain: "ChecklistDomain"
    ) -> "InstanceItem":
        template = TemplateItem.from_document(doc)
        return cls(
            **template.model_dump(),
            instance_id=doc["instanceId"],
            done=doc.get(domain.state_field, domain.default_state),
            position=doc.get("position", 0),
        )


class MasterTemplate(SQLModel):
    """A user's source-of-truth categories and items for one domain."""
    categories: list[Category] = Field(default_factory=list)
    items: list[TemplateItem] = Field(default_factory=list)

    def orphaned_items(self) -> list[TemplateItem]:
        """Items whose category_id matches no category in this template."""
        category_ids = {category.id for category in self.categories}
        return [item for item in self.items if item.category_id not in category_ids]

    def deep_copy(self) -> "MasterTemplate":
        return self.model_copy(deep=True)

    def to_document(self) -> dict[str, Any]:
        return {
            "categories": [
                {
                    "id": category.id,
                    "displayName": category.display_name,
                    "isPredefined": category.is_predefined,
                }
                for category in self.categories
            ],
            "items": [item.to_document() for item in self.items],
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "MasterTemplate":
        return cls(
            categories=[
                Category(
                    id=raw["id"],
                    display_name=raw["displayName"],
                    is_predefined=raw.get("isPredefined", False),
                )
                for raw in doc.get("categories", [])
            ],
            items=[TemplateItem.from_document(raw) for raw in doc.get("items", [])],
        )
