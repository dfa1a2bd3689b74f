"""Closet item CRUD and listing routes."""

from fastapi import APIRouter, Depends, Query, Response, status

from closet.api.auth import CurrentUserDependency
from closet.api.dependencies import ClosetServices, get_services
from closet.api.schemas import (
    ClosetItemCreate,
    ClosetItemListOut,
    ClosetItemOut,
    ClosetItemUpdate,
    PageOut,
    split_categories,
)
from closet.services.assembler import PageRequest
from closet.services.wardrobe import ItemQuery

router = APIRouter(prefix="/closet-items", tags=["closet"])


@router.get("", response_model=ClosetItemListOut)
async def list_closet_items(
    categories: str | None = Query(default=None),
    q: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> ClosetItemListOut:
    page = PageRequest.from_params(
        limit,
        offset,
        default_limit=services.settings.outfit_page_size,
        max_limit=services.settings.outfit_page_max,
    )
    items = await services.wardrobe.list_items(
        user_id,
        ItemQuery(categories=split_categories(categories), search_text=q, page=page),
    )
    return ClosetItemListOut(
        items=[ClosetItemOut.model_validate(item) for item in items],
        page=PageOut(limit=page.limit, offset=page.offset, count=len(items)),
    )


@router.post("", response_model=ClosetItemOut, status_code=status.HTTP_201_CREATED)
async def create_closet_item(
    payload: ClosetItemCreate,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> ClosetItemOut:
    item = await services.wardrobe.add_item(user_id, **payload.model_dump())
    return ClosetItemOut.model_validate(item)


@router.get("/{item_id}", response_model=ClosetItemOut)
async def get_closet_item(
    item_id: str,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> ClosetItemOut:
    item = await services.wardrobe.get_item(user_id, item_id)
    return ClosetItemOut.model_validate(item)


@router.patch("/{item_id}", response_model=ClosetItemOut)
async def update_closet_item(
    item_id: str,
    payload: ClosetItemUpdate,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> ClosetItemOut:
    changes = payload.model_dump(exclude_unset=True)
    item = await services.wardrobe.update_item(user_id, item_id, changes)
    return ClosetItemOut.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_closet_item(
    item_id: str,
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> Response:
    await services.wardrobe.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
