"""Business logic for managing a user's closet items."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from closet.domain.errors import NotFoundError, OwnershipError, ValidationError
from closet.domain.models import ClosetItem, DashboardStats, ScoredItem, as_utc, utcnow
from closet.domain.taxonomy import normalize_category
from closet.metrics.prometheus_exporter import donation_suggestions_total
from closet.recommender.scorer import score_wardrobe
from closet.services.assembler import PageRequest
from closet.storage.base import ClosetItemStore, ItemFilter, OutfitItemLinkStore, OutfitStore

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"category", "color", "occasion", "favorite", "times_worn", "last_worn_at"}
)
REQUIRED_FIELDS = frozenset({"category", "favorite", "times_worn"})


@dataclass(slots=True)
class ItemQuery:
    """Listing request for closet items."""

    categories: list[str] = field(default_factory=list)
    search_text: str | None = None
    page: PageRequest = field(default_factory=PageRequest)


class WardrobeService:
    """Facade over the closet item store."""

    def __init__(
        self,
        items: ClosetItemStore,
        outfits: OutfitStore,
        links: OutfitItemLinkStore,
    ) -> None:
        self._items = items
        self._outfits = outfits
        self._links = links

    async def add_item(
        self,
        owner_id: str,
        *,
        category: str,
        color: str | None = None,
        occasion: str | None = None,
        favorite: bool = False,
        times_worn: int = 0,
        image_ref: str | None = None,
    ) -> ClosetItem:
        """Persist a new garment for the owner."""

        normalized = normalize_category(category)
        if normalized is None:
            raise ValidationError("category is required")
        if times_worn < 0:
            raise ValidationError("times_worn cannot be negative")

        item = await self._items.insert(
            {
                "owner_id": owner_id,
                "category": normalized,
                "color": color,
                "occasion": occasion,
                "favorite": favorite,
                "times_worn": times_worn,
                "image_ref": image_ref,
            }
        )
        logger.info("Added closet item %s for user %s", item.id, owner_id)
        return item

    async def get_item(self, owner_id: str, item_id: str) -> ClosetItem:
        found = await self._items.get_by_ids([item_id])
        if not found:
            raise NotFoundError("Closet item not found", context={"item_id": item_id})
        item = found[0]
        if item.owner_id != owner_id:
            raise OwnershipError("Forbidden", invalid_ids=[item_id])
        return item

    async def list_items(self, owner_id: str, query: ItemQuery | None = None) -> list[ClosetItem]:
        query = query or ItemQuery()
        categories = [c for c in (normalize_category(raw) for raw in query.categories) if c]
        search_text = (query.search_text or "").strip() or None
        return await self._items.list_for_user(
            owner_id,
            ItemFilter(
                categories=categories,
                search_text=search_text,
                limit=query.page.limit,
                offset=query.page.offset,
            ),
        )

    async def update_item(
        self,
        owner_id: str,
        item_id: str,
        changes: Mapping[str, Any],
    ) -> ClosetItem:
        """
        Apply a partial update to an owned garment.

        ``None`` clears optional fields such as ``color`` or ``last_worn_at``;
        it is rejected for ``category``, ``favorite`` and ``times_worn``.
        """

        values = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        if not values:
            raise ValidationError("No valid fields to update.")
        cleared = sorted(key for key in REQUIRED_FIELDS if key in values and values[key] is None)
        if cleared:
            raise ValidationError(
                f"{', '.join(cleared)} cannot be null", context={"fields": cleared}
            )
        if "category" in values:
            values["category"] = normalize_category(values["category"])
            if values["category"] is None:
                raise ValidationError("category cannot be empty")
        if "times_worn" in values and values["times_worn"] < 0:
            raise ValidationError("times_worn cannot be negative")

        await self.get_item(owner_id, item_id)
        updated = await self._items.update_fields(item_id, values)
        if updated is None:
            raise NotFoundError("Closet item not found", context={"item_id": item_id})
        return updated

    async def delete_item(self, owner_id: str, item_id: str) -> None:
        """Delete an owned garment and drop it from every outfit."""

        await self.get_item(owner_id, item_id)
        await self._links.delete_by_item_id(item_id)
        await self._items.delete(item_id)
        logger.info("Deleted closet item %s", item_id)

    async def donation_suggestions(
        self,
        owner_id: str,
        now: datetime | None = None,
    ) -> list[ScoredItem]:
        """Score the owner's whole collection, most donate-worthy first."""

        items = await self._items.list_for_user(owner_id, ItemFilter())
        scored = score_wardrobe(items, now or utcnow())
        for entry in scored:
            donation_suggestions_total.labels(level=entry.suggestion.level.value).inc()
        return scored

    async def dashboard_stats(
        self,
        owner_id: str,
        now: datetime | None = None,
    ) -> DashboardStats:
        """
        Summarise the owner's wardrobe.

        Items added this month are those created since the start of the
        calendar month of ``now`` in UTC. The most worn item is the one with
        the highest ``times_worn``; ties keep the store's newest-first order.
        """

        now = as_utc(now or utcnow())
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        items = await self._items.list_for_user(owner_id, ItemFilter())
        outfits = await self._outfits.list_for_user(owner_id)

        added_this_month = sum(
            1
            for item in items
            if item.created_at is not None and as_utc(item.created_at) >= month_start
        )
        most_worn = max(items, key=lambda item: item.times_worn or 0, default=None)
        return DashboardStats(
            total_items=len(items),
            outfit_count=len(outfits),
            items_added_this_month=added_this_month,
            most_worn=most_worn,
        )
