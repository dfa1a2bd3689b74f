"""Plain records passed between stores, services and the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from closet.domain.errors import ValidationError
from closet.domain.taxonomy import normalize_category


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps (SQLite drops the offset on read)."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ClosetItem:
    """A garment owned by exactly one user."""

    id: str
    owner_id: str
    category: str
    created_at: datetime | None = None
    color: str | None = None
    occasion: str | None = None
    favorite: bool = False
    times_worn: int = 0
    last_worn_at: datetime | None = None
    image_ref: str | None = None

    def __post_init__(self) -> None:
        category = normalize_category(self.category)
        if category is None:
            raise ValidationError("Closet item category must not be empty.")
        self.category = category
        self.times_worn = int(self.times_worn or 0)
        if self.times_worn < 0:
            raise ValidationError("Closet item times_worn cannot be negative.")
        self.favorite = bool(self.favorite)
        self.created_at = as_utc(self.created_at)
        self.last_worn_at = as_utc(self.last_worn_at)


@dataclass(slots=True)
class Outfit:
    """A named collection of closet items belonging to one user."""

    id: str
    owner_id: str
    name: str
    worn_count: int = 0
    last_worn_at: datetime | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        self.worn_count = int(self.worn_count or 0)
        self.last_worn_at = as_utc(self.last_worn_at)
        self.created_at = as_utc(self.created_at)


@dataclass(slots=True)
class OutfitItemLink:
    """Join row binding an outfit to one closet item and the slot it fills."""

    id: str
    outfit_id: str
    item_id: str
    slot_category: str | None = None


class DonationLevel(str, Enum):
    """How strongly an item is suggested for donation."""

    KEEP = "keep"
    MAYBE_DONATE = "maybe_donate"
    DONATE = "donate"


@dataclass(frozen=True, slots=True)
class DonationSuggestion:
    """Derived recommendation; recomputed on every request, never stored."""

    level: DonationLevel
    score: float
    reason: str


@dataclass(frozen=True, slots=True)
class ScoredItem:
    """Closet item paired with its donation suggestion."""

    item: ClosetItem
    suggestion: DonationSuggestion


@dataclass(slots=True)
class OutfitSlot:
    """One garment as displayed inside an outfit."""

    category: str | None
    closet_item: ClosetItem | None


@dataclass(slots=True)
class OutfitView:
    """Outfit read-model with its garments joined and ordered."""

    id: str
    owner_id: str
    name: str
    worn_count: int
    last_worn_at: datetime | None
    items: list[OutfitSlot] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """Wardrobe counters shown on the owner's profile dashboard."""

    total_items: int
    outfit_count: int
    items_added_this_month: int
    most_worn: ClosetItem | None
