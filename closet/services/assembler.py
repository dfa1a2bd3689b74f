"""Builds outfit read-models from outfit, link and item rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from closet.domain.models import (
    ClosetItem,
    Outfit,
    OutfitItemLink,
    OutfitSlot,
    OutfitView,
)
from closet.domain.taxonomy import normalize_category

DEFAULT_PAGE_SIZE = 24
MAX_PAGE_SIZE = 100

SLOT_PRIORITY: dict[str, int] = {"shirt": 0, "pants": 1, "outerwear": 2}
UNKNOWN_SLOT_PRIORITY = 99


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Window into a listing; build it through :meth:`from_params`."""

    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @classmethod
    def from_params(
        cls,
        limit: int | None = None,
        offset: int | None = None,
        *,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ) -> "PageRequest":
        """Clamp caller-supplied values into the allowed range."""

        size = default_limit if limit is None else int(limit)
        start = 0 if offset is None else int(offset)
        return cls(limit=min(max(size, 1), max_limit), offset=max(start, 0))


def _slot_priority(slot: OutfitSlot) -> int:
    return SLOT_PRIORITY.get(slot.category or "", UNKNOWN_SLOT_PRIORITY)


def build_slots(
    links: Iterable[OutfitItemLink],
    items_by_id: dict[str, ClosetItem],
) -> list[OutfitSlot]:
    """Join links to their items and order them by slot priority."""

    slots = []
    for link in links:
        item = items_by_id.get(link.item_id)
        category = link.slot_category or (item.category if item else None)
        slots.append(OutfitSlot(category=category, closet_item=item))
    # sorted() is stable, ties keep link order
    return sorted(slots, key=_slot_priority)


def assemble_outfits(
    outfits: Sequence[Outfit],
    links: Iterable[OutfitItemLink],
    items: Iterable[ClosetItem],
) -> list[OutfitView]:
    """
    Join pre-fetched rows into outfit views.

    No I/O happens here: callers fetch the links and items for all outfits in
    batched queries and hand the rows over. A link whose item has since been
    deleted yields a slot without a closet item.
    """

    items_by_id = {item.id: item for item in items}
    links_by_outfit: dict[str, list[OutfitItemLink]] = {}
    for link in links:
        links_by_outfit.setdefault(link.outfit_id, []).append(link)

    return [
        OutfitView(
            id=outfit.id,
            owner_id=outfit.owner_id,
            name=outfit.name,
            worn_count=outfit.worn_count,
            last_worn_at=outfit.last_worn_at,
            items=build_slots(links_by_outfit.get(outfit.id, []), items_by_id),
        )
        for outfit in outfits
    ]


def order_by_recent_wear(outfits: Iterable[Outfit]) -> list[Outfit]:
    """Most recently worn first; never-worn outfits last in their given order."""

    outfits = list(outfits)
    worn = [outfit for outfit in outfits if outfit.last_worn_at is not None]
    never_worn = [outfit for outfit in outfits if outfit.last_worn_at is None]
    worn.sort(key=lambda outfit: outfit.last_worn_at, reverse=True)
    return worn + never_worn


def paginate_outfits(outfits: Iterable[Outfit], page: PageRequest) -> list[Outfit]:
    ordered = order_by_recent_wear(outfits)
    return ordered[page.offset : page.offset + page.limit]


def _matches_text(view: OutfitView, needle: str) -> bool:
    if needle in view.name.lower():
        return True
    for slot in view.items:
        item = slot.closet_item
        if item is None:
            continue
        for value in (item.category, item.color, item.occasion):
            if value and needle in value.lower():
                return True
    return False


def filter_outfit_views(
    views: Iterable[OutfitView],
    categories: Sequence[str] | None = None,
    search_text: str | None = None,
) -> list[OutfitView]:
    """
    Keep outfits that contain one of ``categories`` and match ``search_text``.

    Categories are compared against both the slot and the item's own
    category; the search text is matched case-insensitively against the
    outfit name and every garment's category, color and occasion.
    """

    wanted = {value for value in (normalize_category(c) for c in categories or []) if value}
    needle = (search_text or "").strip().lower()

    selected = []
    for view in views:
        if wanted:
            slot_categories = set()
            for slot in view.items:
                if slot.category:
                    slot_categories.add(slot.category)
                if slot.closet_item is not None:
                    slot_categories.add(slot.closet_item.category)
            if not slot_categories & wanted:
                continue
        if needle and not _matches_text(view, needle):
            continue
        selected.append(view)
    return selected
