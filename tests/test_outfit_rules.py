"""Tests for the outfit composition rules and category taxonomy."""

from __future__ import annotations

import pytest

from closet.domain.errors import ValidationError
from closet.domain.taxonomy import Category, normalize_category, slot_category
from closet.recommender.rules_engine import (
    BOTTOM_COUNT,
    DRESS_WITH_SEPARATES,
    MISSING_SHOES,
    MULTIPLE_DRESSES,
    TOP_COUNT,
    ensure_valid_outfit,
    validate_outfit_items,
)


def _items(*categories: str) -> list[dict[str, str]]:
    return [{"category": category} for category in categories]


def test_normalize_category_trims_and_lowercases() -> None:
    assert normalize_category("  Shirt ") == "shirt"
    assert normalize_category("   ") is None
    assert normalize_category(None) is None


def test_slot_category_remaps_jacket_and_drops_unknown() -> None:
    assert slot_category("Jacket") is Category.OUTERWEAR
    assert slot_category("shoes") is Category.SHOES
    assert slot_category("scarf") is None


@pytest.mark.parametrize(
    "extras",
    [(), ("accessories",), ("outerwear",), ("jacket", "accessories", "hat")],
)
def test_shirt_pants_shoes_is_valid(extras: tuple[str, ...]) -> None:
    result = validate_outfit_items(_items("shirt", "pants", "shoes", *extras))

    assert result.ok
    assert result.error is None


def test_categories_are_case_insensitive() -> None:
    assert validate_outfit_items(_items("SHIRT", " Skirt", "Shoes ")).ok


@pytest.mark.parametrize(
    "categories",
    [(), ("shirt", "pants"), ("dress",), ("accessories", "outerwear")],
)
def test_missing_shoes_always_fails_first(categories: tuple[str, ...]) -> None:
    result = validate_outfit_items(_items(*categories))

    assert not result.ok
    assert result.error == MISSING_SHOES


def test_dress_with_shoes_is_valid_until_a_shirt_is_added() -> None:
    candidate = _items("dress", "shoes")
    assert validate_outfit_items(candidate).ok

    candidate.append({"category": "shirt"})
    result = validate_outfit_items(candidate)

    assert not result.ok
    assert result.error == DRESS_WITH_SEPARATES


@pytest.mark.parametrize("separate", ["shirt", "pants", "shorts", "skirt"])
def test_dress_rejects_separates(separate: str) -> None:
    result = validate_outfit_items(_items("dress", "shoes", separate))

    assert result.error == DRESS_WITH_SEPARATES


def test_two_dresses_fail_before_separates_check() -> None:
    result = validate_outfit_items(_items("dress", "dress", "shoes", "shirt"))

    assert result.error == MULTIPLE_DRESSES


def test_top_count_checked_before_bottom_count() -> None:
    assert validate_outfit_items(_items("pants", "shoes")).error == TOP_COUNT
    assert validate_outfit_items(_items("shirt", "shirt", "pants", "shoes")).error == TOP_COUNT
    assert validate_outfit_items(_items("shirt", "shoes")).error == BOTTOM_COUNT
    assert validate_outfit_items(_items("shirt", "pants", "shorts", "shoes")).error == BOTTOM_COUNT


def test_accepts_objects_with_category_attribute(item_store) -> None:
    items = [item_store.add("u1", category) for category in ("shirt", "pants", "shoes")]

    assert validate_outfit_items(items).ok


def test_ensure_valid_outfit_raises_with_reason() -> None:
    with pytest.raises(ValidationError) as excinfo:
        ensure_valid_outfit(_items("shirt", "pants"))

    assert excinfo.value.message == MISSING_SHOES
