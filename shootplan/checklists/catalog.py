"""Built-in default categories and entries for each checklist domain.

The catalogs are data: they seed a user's master template the first time it
is requested and again whenever the user resets it to defaults.
"""

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shootplan.models import Category, TemplateItem

if TYPE_CHECKING:
    from shootplan.checklists.domains import ChecklistDomain

IdFactory = Callable[[], str]


def new_id() -> str:
    """Generate a unique id for an item or instance document."""
    return str(uuid.uuid4())


def new_category_id() -> str:
    """Generate a unique id for a user-created category."""
    return f"cat_{uuid.uuid4()}"


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    quantity: int | None = None
    notes: str = ""


@dataclass(frozen=True)
class CatalogCategory:
    id: str
    display_name: str
    entries: tuple[CatalogEntry, ...] = field(default_factory=tuple)


def _entries(*names: str) -> tuple[CatalogEntry, ...]:
    return tuple(CatalogEntry(name) for name in names)


KIT_CATALOG: tuple[CatalogCategory, ...] = (
    CatalogCategory("cat_camera_bodies", "Camera Bodies", (
        CatalogEntry("Primary Camera Body", 1),
        CatalogEntry("Backup Camera Body", 1),
    )),
    CatalogCategory("cat_lenses", "Lenses", (
        CatalogEntry("Wide-Angle Lens", notes="e.g., 24mm or 35mm"),
        CatalogEntry("Standard Zoom Lens", notes="e.g., 24-70mm"),
        CatalogEntry("Telephoto Lens", notes="e.g., 70-200mm"),
        CatalogEntry("Prime/Portrait Lens", notes="e.g., 50mm or 85mm"),
        CatalogEntry("Macro Lens", notes="For ring shots"),
    )),
    CatalogCategory("cat_lighting", "Lighting", (
        CatalogEntry("On-Camera Flash (Speedlite)", 2),
        CatalogEntry("Off-Camera Flash Strobe", 2),
        CatalogEntry("Flash Triggers/Receiver", 1),
        CatalogEntry("Light Stands", 2),
        CatalogEntry("Umbrellas or Softboxes", 2),
        CatalogEntry("Gels & Grids", 1),
    )),
    CatalogCategory("cat_power", "Power", (
        CatalogEntry("Camera Batteries", 4),
        CatalogEntry("Flash Batteries (AA)", 16),
        CatalogEntry("Strobe Battery Packs", 2),
        CatalogEntry("Battery Chargers", 3),
        CatalogEntry("Portable Power Bank", 1),
    )),
    CatalogCategory("cat_media", "Memory Cards", (
        CatalogEntry("Primary Memory Cards (High Capacity)", 4),
        CatalogEntry("Backup Memory Cards", 4),
        CatalogEntry("Memory Card Holder/Case", 1),
    )),
    CatalogCategory("cat_support", "Support Gear", (
        CatalogEntry("Tripod / Monopod", 1),
        CatalogEntry("Camera Straps/Harness", 1),
    )),
    CatalogCategory("cat_bags", "Bags & Cases", (
        CatalogEntry("Main Camera Bag (Roller or Backpack)", 1),
        CatalogEntry("Light Stand Bag", 1),
    )),
    CatalogCategory("cat_data_management", "Data Management", (
        CatalogEntry("Laptop or Tablet", 1),
        CatalogEntry("Portable SSD/Hard Drive", notes="For on-site backup"),
        CatalogEntry("Card Reader", 1),
    )),
    CatalogCategory("cat_documents", "Documents", (
        CatalogEntry("Printed Timeline & Shot List", 1),
        CatalogEntry("Contact Sheet (Couple, Vendors)", 1),
        CatalogEntry("Copy of Contract & Insurance", 1),
    )),
    CatalogCategory("cat_essentials", "Day Essentials", (
        CatalogEntry("Comfortable Shoes", 1),
        CatalogEntry("Water Bottle & Snacks", 1),
        CatalogEntry("Painkillers & Plasters", 1),
        CatalogEntry("Business Cards", 20),
        CatalogEntry("Rain Cover for Bag/Camera", 1),
    )),
)

TASK_CATALOG: tuple[CatalogCategory, ...] = (
    CatalogCategory("cat_weekbefore", "Week Before", _entries(
        "Finalize and confirm timeline with the couple",
        "Check in with videographer/other key vendors",
        "Prepare and print the group shot list",
        "Check long-range weather forecast",
        "Confirm second shooter/assistant and share info",
    )),
    CatalogCategory("cat_nightbefore", "Night Before", _entries(
        "Charge ALL batteries (cameras, flashes, triggers)",
        "Format all memory cards in-camera",
        "Clean lenses, filters, and camera sensors",
        "Synchronize time and date on all camera bodies",
        "Pack camera bag according to the packing list",
        "Review wedding day timeline and shot list again",
        "Download offline maps of venues",
        "Prepare snacks, water, and any meals",
        "Lay out wedding day clothes and comfortable shoes",
        "Set multiple alarms",
    )),
    CatalogCategory("cat_morningof", "Morning Of", _entries(
        "Check the latest weather forecast and traffic",
        "Eat a substantial breakfast and hydrate",
        "Load all gear into the car",
        "Do a final mental walkthrough of the day",
        "Leave with plenty of buffer time",
        "Put phone on silent before arriving",
    )),
    CatalogCategory("cat_afterwedding", "After Wedding", _entries(
        "Immediately back up all memory cards (2-3 locations)",
        "Verify backup integrity before formatting cards",
        "Send a sneak peek gallery to the couple (1-5 images)",
        "Put all batteries back on to charge",
        "Clean gear before storing it away",
    )),
)

GROUP_SHOT_CATALOG: tuple[CatalogCategory, ...] = (
    CatalogCategory("cat_family", "Immediate Family", _entries(
        "Couple with Partner 1's parents",
        "Couple with Partner 2's parents",
        "Couple with both sets of parents",
        "Couple with Partner 1's immediate family (parents & siblings)",
        "Couple with Partner 2's immediate family (parents & siblings)",
        "Couple with all immediate family (both sides)",
        "Couple with siblings (both sides combined)",
        "Couple with grandparents (each side separately)",
        "Generations shot (e.g., couple, parent, grandparent)",
    )),
    CatalogCategory("cat_weddingparty", "Wedding Party", _entries(
        "Couple with full wedding party",
        "Partner 1 with their attendants",
        "Partner 2 with their attendants",
        "Partner 1 with Maid of Honour / Partner 2 with Best Man",
        "All attendants together",
        "Couple with flower girls / ring bearers",
        "Couple with ushers",
    )),
    CatalogCategory("cat_extendedfamily", "Extended Family", _entries(
        "Couple with Partner 1's extended family",
        "Couple with Partner 2's extended family",
        "Couple with all aunts & uncles",
        "Couple with all cousins",
    )),
    CatalogCategory("cat_friends", "Friends", _entries(
        "Couple with close friends group",
        "Couple with university friends",
        "Couple with school friends",
        "Couple with work friends",
    )),
    CatalogCategory("cat_others", "Full Group / Others", _entries(
        "Full group shot with all wedding guests",
    )),
    CatalogCategory("cat_fun", "Fun & Modern Shots", _entries(
        "Wedding party lifting the couple",
        "Tunnel or archway created by guests",
        "The \"silly face\" shot with the wedding party",
        "Confetti toss shot",
        "Couple with guests from a specific hobby/club",
    )),
)

COUPLE_SHOT_CATALOG: tuple[CatalogCategory, ...] = (
    CatalogCategory("cat_getting_ready", "Getting Ready", _entries(
        "Partner 1 reading a letter from Partner 2",
        "Partner 2 reading a letter from Partner 1",
        "Individual portraits of each partner, fully dressed",
        "Detail shot of the rings, vows, or special items",
    )),
    CatalogCategory("cat_first_look", "First Look", _entries(
        "The approach from behind",
        "The shoulder tap",
        "The emotional reaction (both partners)",
        "Hugging and embracing post-reveal",
        "A quiet, intimate moment right after",
    )),
    CatalogCategory("cat_portraits", "Couple Portraits", _entries(
        "Classic portrait, looking at the camera",
        "Romantic portrait, looking at each other",
        "Walking hand-in-hand (towards and away)",
        "The \"almost kiss\" shot",
        "Forehead kiss",
        "Laughing together candidly",
        "Lifting or dipping shot",
        "Close-up on intertwined hands with rings",
        "Wide scenic shot with couple small in frame",
    )),
    CatalogCategory("cat_ceremony", "Ceremony Moments", _entries(
        "The \"giving away\" moment",
        "Exchanging vows",
        "Exchanging rings",
        "The first kiss as a married couple",
        "Signing the register",
        "Recessional (walking back down the aisle)",
        "Confetti toss",
    )),
    CatalogCategory("cat_golden_hour", "Golden Hour / Sunset", _entries(
        "Silhouette against the sunset",
        "Warm, backlit \"halo\" effect shot",
        "Walking into the sunset",
        "Intimate embrace in the warm light",
    )),
    CatalogCategory("cat_reception", "Reception Moments", _entries(
        "Grand entrance into the reception",
        "Cutting the cake",
        "The first dance",
        "Candid shots during speeches",
        "Quiet moment away from the crowd",
        "End-of-night shot (e.g., with sparklers)",
    )),
)


def default_categories(catalog: Sequence[CatalogCategory]) -> list[Category]:
    """Return the catalog's categories without their entries."""
    return [
        Category(id=category.id, display_name=category.display_name, is_predefined=True)
        for category in catalog
    ]


def generate_predefined(
    domain: "ChecklistDomain",
    id_factory: IdFactory = new_id,
) -> list[TemplateItem]:
    """
    Flatten a domain's catalog into template items.

    Every entry gets a fresh id, its category's id, ``is_predefined=True``
    and empty notes when the catalog has none. Domains with quantities
    default a missing quantity to 1; other domains carry no quantity.
    """
    items = []
    for category in domain.catalog:
        for entry in category.entries:
            quantity = None
            if domain.has_quantity:
                quantity = 1 if entry.quantity is None else entry.quantity
            items.append(
                TemplateItem(
                    id=id_factory(),
                    name=entry.name,
                    category_id=category.id,
                    is_predefined=True,
                    quantity=quantity,
                    notes=entry.notes,
                )
            )
    return items
