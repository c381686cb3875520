"""Project checklist routes: load, toggle, add, delete and reset items."""
from typing import Any

from fastapi import APIRouter, Depends, Form

from shootplan.checklists import ChecklistEngine, ChecklistState
from shootplan.models import InstanceItem
from shootplan.routes.deps import get_engine, get_user_id

router = APIRouter(prefix="/checklists/{domain_name}/projects/{project_id}", tags=["checklists"])


def serialize_item(engine: ChecklistEngine, item: InstanceItem) -> dict[str, Any]:
    """Render an instance item with its done flag under the domain's field name."""
    data = item.model_dump(exclude={"done"})
    data[engine.domain.state_field] = item.done
    return data


def serialize_state(engine: ChecklistEngine, state: ChecklistState) -> dict[str, Any]:
    progress = engine.progress(state)
    return {
        "domain": engine.domain.name,
        "label": engine.domain.label,
        "status": state.status.value,
        "state_field": engine.domain.state_field,
        "categories": [category.model_dump() for category in state.master_categories],
        "items": [serialize_item(engine, item) for item in state.instance_items],
        "done_count": progress.done,
        "total_count": progress.total,
        "all_done": progress.all_done,
    }


def load_state(engine: ChecklistEngine, user_id: str, project_id: str) -> ChecklistState:
    return engine.load(ChecklistState(), user_id, project_id)


@router.get("")
async def get_checklist(
    project_id: str,
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """
    Load a project's checklist.

    The first load for a project clones the user's master template into it
    (seeding the master from the built-in catalog if needed). Later loads
    return the project's own copy.
    """
    state = load_state(engine, user_id, project_id)
    return serialize_state(engine, state)


@router.post("/items/{instance_id}/toggle")
async def toggle_item(
    project_id: str,
    instance_id: str,
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """
    Toggle an item's packed/completed state.

    Returns the new state together with updated progress counts.
    """
    state = load_state(engine, user_id, project_id)
    new_value = engine.toggle_state(state, project_id, instance_id)
    progress = engine.progress(state)
    return {
        "success": True,
        "instance_id": instance_id,
        engine.domain.state_field: new_value,
        "done_count": progress.done,
        "total_count": progress.total,
        "all_done": progress.all_done,
    }


@router.post("/items", status_code=201)
async def create_item(
    project_id: str,
    category_id: str = Form(...),
    name: str = Form(...),
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Add an item to this project's checklist only; the master is unchanged."""
    state = load_state(engine, user_id, project_id)
    item = engine.add_instance_item(state, project_id, category_id, name)
    return serialize_item(engine, item)


@router.post("/items/{instance_id}/delete")
async def delete_item(
    project_id: str,
    instance_id: str,
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """Remove an item from this project's checklist."""
    state = load_state(engine, user_id, project_id)
    engine.delete_instance_item(state, project_id, instance_id)
    return serialize_state(engine, state)


@router.post("/reset")
async def reset_checklist(
    project_id: str,
    engine: ChecklistEngine = Depends(get_engine),
    user_id: str = Depends(get_user_id),
):
    """
    Reset to catalog defaults.

    Overwrites the user's master template with the built-in defaults and
    replaces this project's checklist with a fresh clone of it.
    """
    state = engine.reset(ChecklistState(), user_id, project_id)
    return serialize_state(engine, state)
