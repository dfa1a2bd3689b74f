"""In-memory stores and shared fixtures."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Sequence

import pytest

from closet.config.settings import Settings
from closet.domain.errors import StoreError
from closet.domain.models import ClosetItem, Outfit, OutfitItemLink
from closet.services.outfit import OutfitService
from closet.services.wardrobe import WardrobeService
from closet.storage.base import (
    ClosetItemStore,
    ItemFilter,
    OutfitItemLinkStore,
    OutfitStore,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(days: int) -> datetime:
    return NOW - timedelta(days=days)


class MemoryClosetItemStore(ClosetItemStore):
    def __init__(self) -> None:
        self.rows: dict[str, ClosetItem] = {}
        self.batch_calls: list[list[str]] = []

    def add(self, owner_id: str, category: str, **fields: Any) -> ClosetItem:
        item = ClosetItem(
            id=fields.pop("id", uuid.uuid4().hex),
            owner_id=owner_id,
            category=category,
            created_at=fields.pop("created_at", NOW),
            **fields,
        )
        self.rows[item.id] = item
        return item

    async def get_by_ids(self, ids: Sequence[str]) -> list[ClosetItem]:
        self.batch_calls.append(list(ids))
        return [self.rows[item_id] for item_id in ids if item_id in self.rows]

    async def list_for_user(self, owner_id: str, item_filter: ItemFilter) -> list[ClosetItem]:
        items = [item for item in self.rows.values() if item.owner_id == owner_id]
        if item_filter.categories:
            items = [item for item in items if item.category in item_filter.categories]
        if item_filter.search_text:
            needle = item_filter.search_text.lower()
            items = [
                item
                for item in items
                if any(
                    value and needle in value.lower()
                    for value in (item.category, item.color, item.occasion)
                )
            ]
        items = items[item_filter.offset :]
        if item_filter.limit is not None:
            items = items[: item_filter.limit]
        return items

    async def insert(self, fields: Mapping[str, Any]) -> ClosetItem:
        return self.add(**dict(fields))

    async def update_fields(self, item_id: str, fields: Mapping[str, Any]) -> ClosetItem | None:
        item = self.rows.get(item_id)
        if item is None:
            return None
        for key, value in fields.items():
            setattr(item, key, value)
        return item

    async def delete(self, item_id: str) -> None:
        self.rows.pop(item_id, None)


class MemoryOutfitStore(OutfitStore):
    def __init__(self) -> None:
        self.rows: dict[str, Outfit] = {}

    async def insert(self, fields: Mapping[str, Any]) -> Outfit:
        outfit = Outfit(id=uuid.uuid4().hex, created_at=NOW, **dict(fields))
        self.rows[outfit.id] = outfit
        return outfit

    async def get_by_id(self, outfit_id: str) -> Outfit | None:
        return self.rows.get(outfit_id)

    async def list_for_user(self, owner_id: str) -> list[Outfit]:
        return [outfit for outfit in self.rows.values() if outfit.owner_id == owner_id]

    async def update_fields(self, outfit_id: str, fields: Mapping[str, Any]) -> Outfit | None:
        outfit = self.rows.get(outfit_id)
        if outfit is None:
            return None
        for key, value in fields.items():
            setattr(outfit, key, value)
        return outfit

    async def delete(self, outfit_id: str) -> None:
        self.rows.pop(outfit_id, None)


class MemoryLinkStore(OutfitItemLinkStore):
    def __init__(self) -> None:
        self.rows: list[OutfitItemLink] = []
        self.fail_inserts = False

    async def insert_many(self, links: Sequence[Mapping[str, Any]]) -> list[OutfitItemLink]:
        if self.fail_inserts:
            raise StoreError("Failed to insert outfit items.")
        pairs = {(link.outfit_id, link.item_id) for link in self.rows}
        created = []
        for link in links:
            if (link["outfit_id"], link["item_id"]) in pairs:
                raise StoreError("Duplicate outfit item.")
            created.append(OutfitItemLink(id=uuid.uuid4().hex, **dict(link)))
        self.rows.extend(created)
        return created

    async def list_by_outfit_ids(self, outfit_ids: Sequence[str]) -> list[OutfitItemLink]:
        wanted = set(outfit_ids)
        return [link for link in self.rows if link.outfit_id in wanted]

    async def delete_by_outfit_id(self, outfit_id: str) -> None:
        self.rows = [link for link in self.rows if link.outfit_id != outfit_id]

    async def delete_by_item_id(self, item_id: str) -> None:
        self.rows = [link for link in self.rows if link.item_id != item_id]


@pytest.fixture
def item_store() -> MemoryClosetItemStore:
    return MemoryClosetItemStore()


@pytest.fixture
def outfit_store() -> MemoryOutfitStore:
    return MemoryOutfitStore()


@pytest.fixture
def link_store() -> MemoryLinkStore:
    return MemoryLinkStore()


@pytest.fixture
def outfit_service(
    outfit_store: MemoryOutfitStore,
    link_store: MemoryLinkStore,
    item_store: MemoryClosetItemStore,
) -> OutfitService:
    return OutfitService(outfit_store, link_store, item_store)


@pytest.fixture
def wardrobe_service(
    item_store: MemoryClosetItemStore,
    outfit_store: MemoryOutfitStore,
    link_store: MemoryLinkStore,
) -> WardrobeService:
    return WardrobeService(item_store, outfit_store, link_store)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", database_url="sqlite+aiosqlite:///:memory:")
