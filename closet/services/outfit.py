"""Outfit lifecycle: create, delete, mark worn and list assembled outfits."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from closet.domain.errors import NotFoundError, OwnershipError, ValidationError
from closet.domain.models import ClosetItem, Outfit, OutfitView, utcnow
from closet.domain.taxonomy import slot_category
from closet.metrics.prometheus_exporter import (
    outfit_rollbacks_total,
    outfits_created_total,
    outfits_deleted_total,
)
from closet.recommender.rules_engine import ensure_valid_outfit
from closet.services.assembler import (
    PageRequest,
    assemble_outfits,
    filter_outfit_views,
    order_by_recent_wear,
    paginate_outfits,
)
from closet.storage.base import ClosetItemStore, OutfitItemLinkStore, OutfitStore

logger = logging.getLogger(__name__)


class OutfitService:
    """Coordinates the outfit, link and closet item stores."""

    def __init__(
        self,
        outfits: OutfitStore,
        links: OutfitItemLinkStore,
        items: ClosetItemStore,
        *,
        enforce_outfit_rules: bool = True,
    ) -> None:
        self._outfits = outfits
        self._links = links
        self._items = items
        self._enforce_outfit_rules = enforce_outfit_rules

    @staticmethod
    def _resolve_name(name: str | None, now: datetime) -> str:
        if name and name.strip():
            return name.strip()
        return f"Outfit {now:%Y-%m-%d}"

    async def create_outfit(
        self,
        owner_id: str,
        name: str | None,
        item_ids: Sequence[str],
    ) -> Outfit:
        """
        Persist a new outfit together with one link per garment.

        The outfit row is written first. If any later step fails (an item is
        missing or owned by someone else, the garments do not form a valid
        outfit, or the link insert fails) the outfit row is deleted again and
        the original error is re-raised, so nothing of the outfit persists.
        """

        unique_ids = list(dict.fromkeys(item_ids))
        if not unique_ids:
            raise ValidationError("itemIds must be a non-empty array")

        outfit = await self._outfits.insert(
            {"owner_id": owner_id, "name": self._resolve_name(name, utcnow())}
        )

        step = "fetch_items"
        try:
            items = await self._items.get_by_ids(unique_ids)
            by_id = {item.id: item for item in items}

            step = "ownership"
            invalid = [
                item_id
                for item_id in unique_ids
                if item_id not in by_id or by_id[item_id].owner_id != owner_id
            ]
            if invalid:
                logger.warning(
                    "User %s referenced foreign or missing items %s", owner_id, invalid
                )
                raise OwnershipError(
                    "Items not found or do not belong to the user",
                    invalid_ids=invalid,
                )

            selected = [by_id[item_id] for item_id in unique_ids]
            if self._enforce_outfit_rules:
                step = "composition"
                ensure_valid_outfit(selected)

            step = "insert_links"
            await self._links.insert_many(self._build_links(outfit.id, selected))
        except Exception:
            await self._compensate(outfit, step)
            raise

        outfits_created_total.inc()
        logger.info("Created outfit %s with %d items", outfit.id, len(unique_ids))
        return outfit

    @staticmethod
    def _build_links(outfit_id: str, items: Sequence[ClosetItem]) -> list[dict[str, str | None]]:
        links = []
        for item in items:
            slot = slot_category(item.category)
            links.append(
                {
                    "outfit_id": outfit_id,
                    "item_id": item.id,
                    "slot_category": slot.value if slot else None,
                }
            )
        return links

    async def _compensate(self, outfit: Outfit, step: str) -> None:
        """Delete a half-created outfit; a failure here must not hide the root cause."""

        outfit_rollbacks_total.labels(step=step).inc()
        logger.info("Rolling back outfit %s after failed step %s", outfit.id, step)
        try:
            await self._outfits.delete(outfit.id)
        except Exception:
            logger.exception("Compensating delete of outfit %s failed", outfit.id)

    async def _get_owned(self, owner_id: str, outfit_id: str) -> Outfit:
        outfit = await self._outfits.get_by_id(outfit_id)
        if outfit is None:
            raise NotFoundError("Outfit not found", context={"outfit_id": outfit_id})
        if outfit.owner_id != owner_id:
            raise OwnershipError("Forbidden", context={"outfit_id": outfit_id})
        return outfit

    async def delete_outfit(self, owner_id: str, outfit_id: str) -> None:
        """Delete an outfit's links, then the outfit itself."""

        outfit = await self._get_owned(owner_id, outfit_id)
        await self._links.delete_by_outfit_id(outfit.id)
        await self._outfits.delete(outfit.id)
        outfits_deleted_total.inc()
        logger.info("Deleted outfit %s", outfit.id)

    async def mark_worn(
        self,
        owner_id: str,
        outfit_id: str,
        now: datetime | None = None,
    ) -> Outfit:
        """Bump the wear counter and stamp the wear time."""

        outfit = await self._get_owned(owner_id, outfit_id)
        updated = await self._outfits.update_fields(
            outfit.id,
            {"worn_count": outfit.worn_count + 1, "last_worn_at": now or utcnow()},
        )
        if updated is None:
            raise NotFoundError("Outfit not found", context={"outfit_id": outfit_id})
        return updated

    async def _assemble(self, outfits: Sequence[Outfit]) -> list[OutfitView]:
        if not outfits:
            return []
        links = await self._links.list_by_outfit_ids([outfit.id for outfit in outfits])
        item_ids = list(dict.fromkeys(link.item_id for link in links))
        items = await self._items.get_by_ids(item_ids)
        return assemble_outfits(outfits, links, items)

    async def list_outfits(
        self,
        owner_id: str,
        page: PageRequest | None = None,
        *,
        categories: Sequence[str] | None = None,
        search_text: str | None = None,
    ) -> list[OutfitView]:
        """Return one page of the owner's outfits, most recently worn first."""

        page = page or PageRequest()
        outfits = await self._outfits.list_for_user(owner_id)

        if not categories and not search_text:
            return await self._assemble(paginate_outfits(outfits, page))

        views = await self._assemble(order_by_recent_wear(outfits))
        matching = filter_outfit_views(views, categories, search_text)
        return matching[page.offset : page.offset + page.limit]

    async def get_outfit(self, owner_id: str, outfit_id: str) -> OutfitView:
        outfit = await self._get_owned(owner_id, outfit_id)
        views = await self._assemble([outfit])
        return views[0]
