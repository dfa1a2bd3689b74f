"""Persistence interfaces the services depend on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from closet.domain.models import ClosetItem, Outfit, OutfitItemLink


@dataclass(slots=True)
class ItemFilter:
    """Listing filter for closet items; ``limit=None`` returns everything."""

    categories: list[str] = field(default_factory=list)
    search_text: str | None = None
    limit: int | None = None
    offset: int = 0


class ClosetItemStore(ABC):
    """Storage of closet items."""

    @abstractmethod
    async def get_by_ids(self, ids: Sequence[str]) -> list[ClosetItem]:
        """Return the items that exist among ``ids`` in one batched lookup."""

    @abstractmethod
    async def list_for_user(self, owner_id: str, item_filter: ItemFilter) -> list[ClosetItem]:
        """Return the owner's items, newest first."""

    @abstractmethod
    async def insert(self, fields: Mapping[str, Any]) -> ClosetItem:
        """Create an item; the store assigns ``id`` and ``created_at``."""

    @abstractmethod
    async def update_fields(self, item_id: str, fields: Mapping[str, Any]) -> ClosetItem | None:
        """Apply a partial update and return the fresh row, or ``None`` if absent."""

    @abstractmethod
    async def delete(self, item_id: str) -> None:
        """Delete an item; deleting a missing id is a no-op."""


class OutfitStore(ABC):
    """Storage of outfit rows."""

    @abstractmethod
    async def insert(self, fields: Mapping[str, Any]) -> Outfit:
        """Create an outfit; the store assigns ``id`` and ``created_at``."""

    @abstractmethod
    async def get_by_id(self, outfit_id: str) -> Outfit | None:
        """Return the outfit or ``None``."""

    @abstractmethod
    async def list_for_user(self, owner_id: str) -> list[Outfit]:
        """Return every outfit of the owner."""

    @abstractmethod
    async def update_fields(self, outfit_id: str, fields: Mapping[str, Any]) -> Outfit | None:
        """Apply a partial update and return the fresh row, or ``None`` if absent."""

    @abstractmethod
    async def delete(self, outfit_id: str) -> None:
        """Delete an outfit row; deleting a missing id is a no-op."""


class OutfitItemLinkStore(ABC):
    """Storage of outfit/item join rows."""

    @abstractmethod
    async def insert_many(self, links: Sequence[Mapping[str, Any]]) -> list[OutfitItemLink]:
        """Insert all links in one batch; either all persist or none do."""

    @abstractmethod
    async def list_by_outfit_ids(self, outfit_ids: Sequence[str]) -> list[OutfitItemLink]:
        """Return links for every outfit in ``outfit_ids`` in insertion order."""

    @abstractmethod
    async def delete_by_outfit_id(self, outfit_id: str) -> None:
        """Delete every link of one outfit."""

    @abstractmethod
    async def delete_by_item_id(self, item_id: str) -> None:
        """Delete every link that points at one closet item."""
