"""Domain records, category taxonomy and errors."""

from .errors import ClosetError, NotFoundError, OwnershipError, StoreError, ValidationError
from .models import (
    ClosetItem,
    DashboardStats,
    DonationLevel,
    DonationSuggestion,
    Outfit,
    OutfitItemLink,
    OutfitSlot,
    OutfitView,
    ScoredItem,
)
from .taxonomy import Category, normalize_category, slot_category

__all__ = [
    "Category",
    "ClosetError",
    "ClosetItem",
    "DashboardStats",
    "DonationLevel",
    "DonationSuggestion",
    "NotFoundError",
    "Outfit",
    "OutfitItemLink",
    "OutfitSlot",
    "OutfitView",
    "OwnershipError",
    "ScoredItem",
    "StoreError",
    "ValidationError",
    "normalize_category",
    "slot_category",
]
