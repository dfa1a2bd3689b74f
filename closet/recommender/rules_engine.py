"""Business rules deciding whether a set of garments forms a valid outfit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from closet.domain.errors import ValidationError
from closet.domain.taxonomy import (
    BOTTOM_CATEGORIES,
    DRESS_CATEGORIES,
    SHOE_CATEGORIES,
    TOP_CATEGORIES,
    slot_category,
)

MISSING_SHOES = "Outfit must include at least one pair of shoes."
MULTIPLE_DRESSES = "Outfit can only contain one dress."
DRESS_WITH_SEPARATES = "Dress outfits cannot include separate tops or bottoms."
TOP_COUNT = "Outfit must contain exactly one top."
BOTTOM_COUNT = "Outfit must contain exactly one bottom (pants/shorts/skirt)."


@dataclass(slots=True)
class ValidationResult:
    """Outcome of a composition check."""

    ok: bool
    error: str | None = None


@dataclass(slots=True)
class OutfitComposition:
    """Slot counts for a candidate outfit; other categories are ignored."""

    tops: int = 0
    bottoms: int = 0
    dresses: int = 0
    shoes: int = 0

    @classmethod
    def from_items(cls, items: Iterable[Any]) -> "OutfitComposition":
        composition = cls()
        for item in items:
            category = slot_category(_category_of(item))
            if category in TOP_CATEGORIES:
                composition.tops += 1
            elif category in BOTTOM_CATEGORIES:
                composition.bottoms += 1
            elif category in DRESS_CATEGORIES:
                composition.dresses += 1
            elif category in SHOE_CATEGORIES:
                composition.shoes += 1
        return composition


def _category_of(item: Any) -> str | None:
    if isinstance(item, Mapping):
        return item.get("category")
    return getattr(item, "category", None)


def validate_outfit_items(items: Iterable[Any]) -> ValidationResult:
    """
    Check a candidate garment set against the outfit composition rules.

    Items may be mappings or objects exposing ``category``. Rules run in a
    fixed order and the first failure is reported.
    """

    composition = OutfitComposition.from_items(items)

    if composition.shoes == 0:
        return ValidationResult(ok=False, error=MISSING_SHOES)

    if composition.dresses > 0:
        if composition.dresses != 1:
            return ValidationResult(ok=False, error=MULTIPLE_DRESSES)
        if composition.tops > 0 or composition.bottoms > 0:
            return ValidationResult(ok=False, error=DRESS_WITH_SEPARATES)
        return ValidationResult(ok=True)

    if composition.tops != 1:
        return ValidationResult(ok=False, error=TOP_COUNT)
    if composition.bottoms != 1:
        return ValidationResult(ok=False, error=BOTTOM_COUNT)
    return ValidationResult(ok=True)


def ensure_valid_outfit(items: Iterable[Any]) -> None:
    """Raise :class:`ValidationError` if the items do not form a valid outfit."""

    result = validate_outfit_items(items)
    if not result.ok:
        raise ValidationError(result.error or "Invalid outfit.")
