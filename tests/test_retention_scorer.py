"""Tests for donation suggestion scoring."""

from __future__ import annotations

import math

import pytest

from closet.domain.models import ClosetItem, DonationLevel
from closet.recommender.scorer import (
    age_days,
    days_since_last_worn,
    idle_days,
    score_item,
    score_wardrobe,
)
from conftest import NOW, days_ago


def _item(**fields) -> ClosetItem:
    fields.setdefault("created_at", days_ago(30))
    return ClosetItem(id=fields.pop("id", "item"), owner_id="u1", category="shirt", **fields)


def test_derived_quantities() -> None:
    item = _item(created_at=days_ago(10), last_worn_at=days_ago(3))

    assert age_days(item, NOW) == 10
    assert days_since_last_worn(item, NOW) == 3


def test_age_is_at_least_one_day_and_zero_when_unknown() -> None:
    assert age_days(_item(created_at=NOW), NOW) == 1
    assert age_days(_item(created_at=None), NOW) == 0


def test_idle_time_without_any_timestamps_is_unbounded() -> None:
    assert days_since_last_worn(_item(created_at=None), NOW) == math.inf
    assert idle_days(_item(created_at=None), NOW) == math.inf


def test_never_worn_item_is_idle_since_it_was_added() -> None:
    item = _item(created_at=days_ago(40), times_worn=0)

    assert days_since_last_worn(item, NOW) == math.inf
    assert idle_days(item, NOW) == 40


def test_new_never_worn_item_is_not_recently_worn() -> None:
    item = _item(created_at=days_ago(30), times_worn=0, last_worn_at=None)

    suggestion = score_item(item, NOW)

    assert (suggestion.level, suggestion.score) == (DonationLevel.KEEP, 0.1)
    assert suggestion.reason == "worn often enough"


def test_worn_item_without_wear_date_misses_grace_period() -> None:
    item = _item(created_at=days_ago(20), times_worn=5, last_worn_at=None)

    suggestion = score_item(item, NOW)

    assert (suggestion.level, suggestion.score) == (DonationLevel.KEEP, 0.1)
    assert suggestion.reason == "worn often enough"


def test_never_worn_item_under_dormancy_threshold_is_kept() -> None:
    suggestion = score_item(_item(created_at=days_ago(100), times_worn=0), NOW)

    assert suggestion.level is DonationLevel.KEEP
    assert suggestion.reason == "worn often enough"


def test_never_worn_item_months_in_closet() -> None:
    item = _item(favorite=False, times_worn=0, created_at=days_ago(200), last_worn_at=None)

    suggestion = score_item(item, NOW)

    assert suggestion.level is DonationLevel.DONATE
    assert suggestion.score == 0.95
    assert suggestion.reason == "never worn, months in closet"


def test_favorite_is_kept() -> None:
    item = _item(favorite=True, times_worn=50, last_worn_at=days_ago(1))

    suggestion = score_item(item, NOW)

    assert suggestion.level is DonationLevel.KEEP
    assert suggestion.score == 0.0
    assert suggestion.reason == "favorite"


@pytest.mark.parametrize(
    "fields",
    [
        {"times_worn": 0, "created_at": days_ago(2000), "last_worn_at": None},
        {"times_worn": 1, "created_at": days_ago(900), "last_worn_at": days_ago(800)},
        {"times_worn": 0, "created_at": None, "last_worn_at": None, "occasion": "formal"},
    ],
)
def test_favorites_are_never_donated(fields: dict) -> None:
    suggestion = score_item(_item(favorite=True, **fields), NOW)

    assert suggestion.level is DonationLevel.KEEP


def test_new_and_recently_worn_grace_period() -> None:
    item = _item(created_at=days_ago(20), last_worn_at=days_ago(5), times_worn=2)

    suggestion = score_item(item, NOW)

    assert (suggestion.level, suggestion.score) == (DonationLevel.KEEP, 0.2)
    assert suggestion.reason == "new and recently worn"


def test_worn_once_untouched_for_a_year() -> None:
    item = _item(created_at=days_ago(500), last_worn_at=days_ago(400), times_worn=1)

    suggestion = score_item(item, NOW)

    assert (suggestion.level, suggestion.score) == (DonationLevel.DONATE, 1.0)
    assert suggestion.reason == "worn at most once, untouched over a year"


def test_never_worn_without_creation_date_is_forgotten() -> None:
    suggestion = score_item(_item(created_at=None, times_worn=0), NOW)

    assert suggestion.score == 1.0


def test_twice_worn_item_is_not_a_strong_donate() -> None:
    item = _item(created_at=days_ago(500), last_worn_at=days_ago(400), times_worn=2)

    suggestion = score_item(item, NOW)

    assert suggestion.level is DonationLevel.MAYBE_DONATE
    assert suggestion.score == 0.8
    assert suggestion.reason == "rarely worn, long dormant"


def test_formal_items_skip_everyday_rule() -> None:
    item = _item(
        created_at=days_ago(500),
        last_worn_at=days_ago(200),
        times_worn=2,
        occasion="Business",
    )

    suggestion = score_item(item, NOW)

    assert suggestion.level is DonationLevel.KEEP
    assert suggestion.reason == "worn often enough"


def test_old_formal_piece_worn_once_is_a_strong_donate() -> None:
    item = _item(
        created_at=days_ago(800),
        last_worn_at=days_ago(400),
        times_worn=1,
        occasion="party",
    )

    assert score_item(item, NOW).score == 1.0


def test_idle_formal_rule_reached_when_earlier_rules_miss(monkeypatch) -> None:
    monkeypatch.setattr("closet.recommender.scorer.DONATE_MAX_TIMES_WORN", 0)
    item = _item(
        created_at=days_ago(800),
        last_worn_at=days_ago(400),
        times_worn=1,
        occasion="formal",
    )

    suggestion = score_item(item, NOW)

    assert suggestion.level is DonationLevel.MAYBE_DONATE
    assert suggestion.score == 0.7
    assert suggestion.reason == "formal piece, barely worn over 2 years"


def test_frequently_worn_item_is_kept() -> None:
    item = _item(created_at=days_ago(400), last_worn_at=days_ago(10), times_worn=30)

    suggestion = score_item(item, NOW)

    assert (suggestion.level, suggestion.score) == (DonationLevel.KEEP, 0.1)


def test_scoring_is_deterministic() -> None:
    item = _item(created_at=days_ago(450), last_worn_at=days_ago(190), times_worn=3)

    assert score_item(item, NOW) == score_item(item, NOW)


def test_naive_timestamps_are_treated_as_utc() -> None:
    naive = days_ago(200).replace(tzinfo=None)
    item = _item(created_at=naive, times_worn=0)

    assert score_item(item, NOW).score == 0.95


def test_score_wardrobe_sorts_most_donate_worthy_first() -> None:
    items = [
        _item(id="kept", favorite=True),
        _item(id="forgotten", created_at=days_ago(900), times_worn=0),
        _item(id="dormant", created_at=days_ago(500), last_worn_at=days_ago(300), times_worn=3),
        _item(id="months", created_at=days_ago(200), times_worn=0),
    ]

    ranked = [entry.item.id for entry in score_wardrobe(items, NOW)]

    assert ranked == ["forgotten", "months", "dormant", "kept"]
