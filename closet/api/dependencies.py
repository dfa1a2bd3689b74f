"""Service container shared by the route modules."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from closet.config.settings import Settings
from closet.services.outfit import OutfitService
from closet.services.wardrobe import WardrobeService
from closet.storage.base import ClosetItemStore, OutfitItemLinkStore, OutfitStore
from closet.storage.sql import SQLClosetItemStore, SQLOutfitItemLinkStore, SQLOutfitStore


@dataclass(slots=True)
class ClosetServices:
    """Services wired against one set of stores."""

    wardrobe: WardrobeService
    outfits: OutfitService
    settings: Settings

    @classmethod
    def from_stores(
        cls,
        *,
        items: ClosetItemStore,
        outfits: OutfitStore,
        links: OutfitItemLinkStore,
        settings: Settings,
    ) -> "ClosetServices":
        return cls(
            wardrobe=WardrobeService(items, outfits, links),
            outfits=OutfitService(
                outfits,
                links,
                items,
                enforce_outfit_rules=settings.enforce_outfit_rules,
            ),
            settings=settings,
        )

    @classmethod
    def from_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> "ClosetServices":
        return cls.from_stores(
            items=SQLClosetItemStore(session_factory),
            outfits=SQLOutfitStore(session_factory),
            links=SQLOutfitItemLinkStore(session_factory),
            settings=settings,
        )


def get_services(request: Request) -> ClosetServices:
    return request.app.state.services
