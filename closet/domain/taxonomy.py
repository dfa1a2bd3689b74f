"""Canonical garment categories and outfit slot mapping."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Categories the outfit rules and slot ordering understand."""

    SHIRT = "shirt"
    PANTS = "pants"
    SHORTS = "shorts"
    SKIRT = "skirt"
    DRESS = "dress"
    OUTERWEAR = "outerwear"
    ACCESSORIES = "accessories"
    SHOES = "shoes"


SLOT_ALIASES: dict[str, Category] = {
    "jacket": Category.OUTERWEAR,
}

TOP_CATEGORIES = frozenset({Category.SHIRT})
BOTTOM_CATEGORIES = frozenset({Category.PANTS, Category.SHORTS, Category.SKIRT})
DRESS_CATEGORIES = frozenset({Category.DRESS})
SHOE_CATEGORIES = frozenset({Category.SHOES})

_BY_VALUE = {category.value: category for category in Category}


def normalize_category(raw: str | None) -> str | None:
    """Trim and lower-case a category string; empty input yields ``None``."""

    if raw is None:
        return None
    value = str(raw).strip().lower()
    return value or None


def slot_category(raw: str | None) -> Category | None:
    """
    Map a stored category onto the slot it fills within an outfit.

    Aliases such as ``jacket`` are folded into their canonical slot. Unknown
    categories return ``None``: they are allowed in outfits but never count
    towards a slot requirement.
    """

    value = normalize_category(raw)
    if value is None:
        return None
    if value in SLOT_ALIASES:
        return SLOT_ALIASES[value]
    return _BY_VALUE.get(value)
