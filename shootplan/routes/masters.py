"""Master template routes.

Each edit opens a template editor on the stored master, applies one change
and commits it, so a single request is a complete draft/commit session.
"""
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, Form

from shootplan.checklists import ChecklistEngine, ChecklistState, TemplateEditor
from shootplan.core.errors import ValidationError
from shootplan.models import MasterTemplate
from shootplan.routes.deps import get_engine, get_user_id

router = APIRouter(prefix="/masters/{domain_name}", tags=["masters"])


def serialize_master(engine: ChecklistEngine, template: MasterTemplate) -> dict[str, Any]:
    return {
        "domain": engine.domain.name,
        "label": engine.domain.label,
        "categories": [category.model_dump() for category in template.categories],
        "items": [item.model_dump() for item in template.items],
    }


def edit_master(
    engine: ChecklistEngine,
    user_id: str,
    change: Callable[[TemplateEditor], Any],
) -> dict[str, Any]:
    """Run one change in an editor session over the user's master and commit it."""
    state = ChecklistState()
    editor = TemplateEditor.open(engine.masters.get_or_create(user_id), engine.domain)
    change(editor)
    if editor.is_dirty:
        editor.commit(engine, state, user_id)
    return serialize_master(engine, editor.working_copy)


@router.get("")
async def get_master(
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Get the user's master template, seeding it from defaults on first use."""
    return serialize_master(engine, engine.masters.get_or_create(user_id))


@router.post("/reset")
async def reset_master(
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Reset the master template to defaults. Project checklists are unchanged."""
    return serialize_master(engine, engine.masters.reset_to_default(user_id))


@router.post("/items")
async def add_master_item(
    category_id: str = Form(...),
    name: str = Form(...),
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Add a user-defined item to a category of the master template."""
    return edit_master(engine, user_id, lambda editor: editor.add_item(category_id, name))


@router.post("/items/{item_id}/delete")
async def delete_master_item(
    item_id: str,
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Delete an item from the master template."""
    return edit_master(engine, user_id, lambda editor: editor.delete_item(item_id))


@router.post("/items/{item_id}/quantity")
async def set_master_item_quantity(
    item_id: str,
    quantity: int = Form(...),
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Set how many of a kit item to pack."""
    return edit_master(engine, user_id, lambda editor: editor.set_quantity(item_id, quantity))


@router.post("/categories")
async def add_master_category(
    name: str = Form(...),
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Add a user-defined category to the master template."""
    return edit_master(engine, user_id, lambda editor: editor.add_category(name))


@router.post("/categories/{category_id}/delete")
async def delete_master_category(
    category_id: str,
    confirm: bool = Form(False),
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """
    Delete a category and all of its items from the master template.

    Destructive, so the client must send confirm=true after asking the user.
    """
    if not confirm:
        raise ValidationError("Deleting a category requires confirmation")
    return edit_master(
        engine, user_id, lambda editor: editor.delete_category(category_id, lambda _: confirm)
    )
