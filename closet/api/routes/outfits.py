"""Outfit routes: compose, list, inspect, mark worn and delete."""

from fastapi import APIRouter, Depends, Query, status

from closet.api.auth import CurrentUserDependency
from closet.api.dependencies import ClosetServices, get_services
from closet.api.schemas import (
    CreateOutfitRequest,
    OutfitListOut,
    OutfitOut,
    OutfitViewOut,
    PageOut,
    split_categories,
)
from closet.services.assembler import PageRequest

router = APIRouter(prefix="/outfits", tags=["outfits"])


@router.get("", response_model=OutfitListOut)
async def list_outfits(
    categories: str | None = Query(default=None),
    q: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> OutfitListOut:
    page = PageRequest.from_params(
        limit,
        offset,
        default_limit=services.settings.outfit_page_size,
        max_limit=services.settings.outfit_page_max,
    )
    views = await services.outfits.list_outfits(
        user_id,
        page,
        categories=split_categories(categories),
        search_text=(q or "").strip() or None,
    )
    return OutfitListOut(
        outfits=[OutfitViewOut.model_validate(view) for view in views],
        page=PageOut(limit=page.limit, offset=page.offset, count=len(views)),
    )


@router.post("", response_model=OutfitOut, status_code=status.HTTP_201_CREATED)
async def create_outfit(
    payload: CreateOutfitRequest,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> OutfitOut:
    outfit = await services.outfits.create_outfit(user_id, payload.name, payload.item_ids)
    return OutfitOut.model_validate(outfit)


@router.get("/{outfit_id}", response_model=OutfitViewOut)
async def get_outfit(
    outfit_id: str,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> OutfitViewOut:
    view = await services.outfits.get_outfit(user_id, outfit_id)
    return OutfitViewOut.model_validate(view)


@router.post("/{outfit_id}/worn", response_model=OutfitOut)
async def mark_outfit_worn(
    outfit_id: str,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> OutfitOut:
    outfit = await services.outfits.mark_worn(user_id, outfit_id)
    return OutfitOut.model_validate(outfit)


@router.delete("/{outfit_id}")
async def delete_outfit(
    outfit_id: str,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> dict[str, bool]:
    await services.outfits.delete_outfit(user_id, outfit_id)
    return {"success": True}
