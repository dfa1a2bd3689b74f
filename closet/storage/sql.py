"""SQLAlchemy-backed implementations of the store interfaces."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Sequence

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from closet.db import models
from closet.domain.errors import StoreError
from closet.domain.models import ClosetItem, Outfit, OutfitItemLink
from closet.storage.base import (
    ClosetItemStore,
    ItemFilter,
    OutfitItemLinkStore,
    OutfitStore,
)

logger = logging.getLogger(__name__)

ITEM_COLUMNS = frozenset(
    {
        "owner_id",
        "category",
        "color",
        "occasion",
        "favorite",
        "times_worn",
        "last_worn_at",
        "image_ref",
    }
)
OUTFIT_COLUMNS = frozenset({"owner_id", "name", "worn_count", "last_worn_at"})


def _pick(fields: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if key in allowed}


def _to_item(row: models.ClosetItemRow) -> ClosetItem:
    return ClosetItem(
        id=row.id,
        owner_id=row.owner_id,
        category=row.category,
        created_at=row.created_at,
        color=row.color,
        occasion=row.occasion,
        favorite=row.favorite,
        times_worn=row.times_worn,
        last_worn_at=row.last_worn_at,
        image_ref=row.image_ref,
    )


def _to_outfit(row: models.OutfitRow) -> Outfit:
    return Outfit(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        worn_count=row.worn_count,
        last_worn_at=row.last_worn_at,
        created_at=row.created_at,
    )


def _to_link(row: models.OutfitItemRow) -> OutfitItemLink:
    return OutfitItemLink(
        id=row.id,
        outfit_id=row.outfit_id,
        item_id=row.item_id,
        slot_category=row.slot_category,
    )


class _SQLStore:
    """Shared session handling; every call runs in its own session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Store operation %s failed: %s", operation, exc)
            raise StoreError(f"Failed to {operation}.", context={"detail": str(exc)}) from exc


class SQLClosetItemStore(_SQLStore, ClosetItemStore):
    """Closet items stored in the ``closet_items`` table."""

    async def get_by_ids(self, ids: Sequence[str]) -> list[ClosetItem]:
        if not ids:
            return []
        async with self._session("load closet items") as session:
            stmt = select(models.ClosetItemRow).where(models.ClosetItemRow.id.in_(list(ids)))
            result = await session.execute(stmt)
            return [_to_item(row) for row in result.scalars().all()]

    async def list_for_user(self, owner_id: str, item_filter: ItemFilter) -> list[ClosetItem]:
        stmt = (
            select(models.ClosetItemRow)
            .where(models.ClosetItemRow.owner_id == owner_id)
            .order_by(models.ClosetItemRow.created_at.desc(), models.ClosetItemRow.id.desc())
        )
        if item_filter.categories:
            stmt = stmt.where(models.ClosetItemRow.category.in_(item_filter.categories))
        if item_filter.search_text:
            pattern = f"%{item_filter.search_text}%"
            stmt = stmt.where(
                or_(
                    models.ClosetItemRow.category.ilike(pattern),
                    models.ClosetItemRow.color.ilike(pattern),
                    models.ClosetItemRow.occasion.ilike(pattern),
                )
            )
        if item_filter.offset:
            stmt = stmt.offset(item_filter.offset)
        if item_filter.limit is not None:
            stmt = stmt.limit(item_filter.limit)

        async with self._session("list closet items") as session:
            result = await session.execute(stmt)
            return [_to_item(row) for row in result.scalars().all()]

    async def insert(self, fields: Mapping[str, Any]) -> ClosetItem:
        async with self._session("insert closet item") as session:
            row = models.ClosetItemRow(**_pick(fields, ITEM_COLUMNS))
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return _to_item(row)

    async def update_fields(self, item_id: str, fields: Mapping[str, Any]) -> ClosetItem | None:
        values = _pick(fields, ITEM_COLUMNS)
        async with self._session("update closet item") as session:
            if values:
                stmt = (
                    update(models.ClosetItemRow)
                    .where(models.ClosetItemRow.id == item_id)
                    .values(**values)
                )
                await session.execute(stmt)
                await session.commit()
            row = await session.get(models.ClosetItemRow, item_id)
            return _to_item(row) if row else None

    async def delete(self, item_id: str) -> None:
        async with self._session("delete closet item") as session:
            await session.execute(
                delete(models.ClosetItemRow).where(models.ClosetItemRow.id == item_id)
            )
            await session.commit()


class SQLOutfitStore(_SQLStore, OutfitStore):
    """Outfits stored in the ``outfits`` table."""

    async def insert(self, fields: Mapping[str, Any]) -> Outfit:
        async with self._session("insert outfit") as session:
            row = models.OutfitRow(**_pick(fields, OUTFIT_COLUMNS))
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return _to_outfit(row)

    async def get_by_id(self, outfit_id: str) -> Outfit | None:
        async with self._session("load outfit") as session:
            row = await session.get(models.OutfitRow, outfit_id)
            return _to_outfit(row) if row else None

    async def list_for_user(self, owner_id: str) -> list[Outfit]:
        stmt = (
            select(models.OutfitRow)
            .where(models.OutfitRow.owner_id == owner_id)
            .order_by(models.OutfitRow.created_at.desc())
        )
        async with self._session("list outfits") as session:
            result = await session.execute(stmt)
            return [_to_outfit(row) for row in result.scalars().all()]

    async def update_fields(self, outfit_id: str, fields: Mapping[str, Any]) -> Outfit | None:
        values = _pick(fields, OUTFIT_COLUMNS)
        async with self._session("update outfit") as session:
            if values:
                await session.execute(
                    update(models.OutfitRow)
                    .where(models.OutfitRow.id == outfit_id)
                    .values(**values)
                )
                await session.commit()
            row = await session.get(models.OutfitRow, outfit_id)
            return _to_outfit(row) if row else None

    async def delete(self, outfit_id: str) -> None:
        async with self._session("delete outfit") as session:
            await session.execute(delete(models.OutfitRow).where(models.OutfitRow.id == outfit_id))
            await session.commit()


class SQLOutfitItemLinkStore(_SQLStore, OutfitItemLinkStore):
    """Outfit/item links stored in the ``outfit_items`` table."""

    async def insert_many(self, links: Sequence[Mapping[str, Any]]) -> list[OutfitItemLink]:
        if not links:
            return []
        async with self._session("insert outfit items") as session:
            rows = [
                models.OutfitItemRow(
                    outfit_id=link["outfit_id"],
                    item_id=link["item_id"],
                    slot_category=link.get("slot_category"),
                    position=position,
                )
                for position, link in enumerate(links)
            ]
            session.add_all(rows)
            await session.commit()
            return [_to_link(row) for row in rows]

    async def list_by_outfit_ids(self, outfit_ids: Sequence[str]) -> list[OutfitItemLink]:
        if not outfit_ids:
            return []
        stmt = (
            select(models.OutfitItemRow)
            .where(models.OutfitItemRow.outfit_id.in_(list(outfit_ids)))
            .order_by(models.OutfitItemRow.outfit_id, models.OutfitItemRow.position)
        )
        async with self._session("list outfit items") as session:
            result = await session.execute(stmt)
            return [_to_link(row) for row in result.scalars().all()]

    async def delete_by_outfit_id(self, outfit_id: str) -> None:
        async with self._session("delete outfit items") as session:
            await session.execute(
                delete(models.OutfitItemRow).where(models.OutfitItemRow.outfit_id == outfit_id)
            )
            await session.commit()

    async def delete_by_item_id(self, item_id: str) -> None:
        async with self._session("delete item links") as session:
            await session.execute(
                delete(models.OutfitItemRow).where(models.OutfitItemRow.item_id == item_id)
            )
            await session.commit()
