"""Request and response models for the HTTP boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from closet.domain.models import DonationLevel


def split_categories(raw: str | None) -> list[str]:
    """Parse a comma-separated ``categories`` query parameter."""

    if not raw:
        return []
    return [part.strip().lower() for part in raw.split(",") if part.strip()]


class ClosetItemCreate(BaseModel):
    """Payload for adding a garment."""

    category: str = Field(min_length=1)
    color: str | None = None
    occasion: str | None = None
    favorite: bool = False
    times_worn: int = Field(default=0, ge=0)
    image_ref: str | None = None

    @field_validator("category")
    @classmethod
    def _strip_category(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("category must not be blank")
        return value


class ClosetItemUpdate(BaseModel):
    """Partial update of a garment; only fields that were sent are applied, null clears."""

    category: str | None = None
    color: str | None = None
    occasion: str | None = None
    favorite: bool | None = None
    times_worn: int | None = Field(default=None, ge=0)
    last_worn_at: datetime | None = None


class ClosetItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    category: str
    color: str | None = None
    occasion: str | None = None
    favorite: bool = False
    times_worn: int = 0
    last_worn_at: datetime | None = None
    created_at: datetime | None = None
    image_ref: str | None = None


class PageOut(BaseModel):
    limit: int
    offset: int
    count: int


class ClosetItemListOut(BaseModel):
    items: list[ClosetItemOut]
    page: PageOut


class CreateOutfitRequest(BaseModel):
    """Payload for composing an outfit from owned garments."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    item_ids: list[str] = Field(alias="itemIds")


class OutfitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    name: str
    worn_count: int = 0
    last_worn_at: datetime | None = None


class OutfitSlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str | None = None
    closet_item: ClosetItemOut | None = None


class OutfitViewOut(OutfitOut):
    items: list[OutfitSlotOut] = Field(default_factory=list)


class OutfitListOut(BaseModel):
    outfits: list[OutfitViewOut]
    page: PageOut


class DonationSuggestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    level: DonationLevel
    score: float
    reason: str


class SuggestedItemOut(BaseModel):
    id: str
    category: str
    color: str | None = None
    image_ref: str | None = None
    times_worn: int = 0
    last_worn_at: datetime | None = None
    suggestion: DonationSuggestionOut


class SuggestionListOut(BaseModel):
    items: list[SuggestedItemOut]


class StatCardOut(BaseModel):
    title: str
    value: str | None = None
    sub: str
    positive: bool | None = None
    image_ref: str | None = None


class DashboardOut(BaseModel):
    """Wardrobe counters plus the ready-to-render stat cards."""

    user_id: str
    total_items: int
    outfit_count: int
    items_added_this_month: int
    most_worn: ClosetItemOut | None = None
    stats: list[StatCardOut]
