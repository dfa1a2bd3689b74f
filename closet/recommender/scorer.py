"""Retention scoring: which rarely used garments could be donated."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from closet.domain.models import (
    ClosetItem,
    DonationLevel,
    DonationSuggestion,
    ScoredItem,
    as_utc,
)

SECONDS_PER_DAY = 86_400

FORMAL_OCCASIONS = frozenset({"formal", "business", "party"})

# Rule 3 upper bound on wear count; older revisions of this rule used 5.
DONATE_MAX_TIMES_WORN = 1

GRACE_PERIOD_DAYS = 60
DORMANT_DAYS = 180
YEAR_DAYS = 365
FORMAL_AGE_DAYS = 2 * YEAR_DAYS
RARELY_WORN_MAX = 3

FAVORITE = DonationSuggestion(DonationLevel.KEEP, 0.0, "favorite")
NEW_AND_WORN = DonationSuggestion(DonationLevel.KEEP, 0.2, "new and recently worn")
FORGOTTEN = DonationSuggestion(
    DonationLevel.DONATE, 1.0, "worn at most once, untouched over a year"
)
NEVER_WORN = DonationSuggestion(DonationLevel.DONATE, 0.95, "never worn, months in closet")
LONG_DORMANT = DonationSuggestion(
    DonationLevel.MAYBE_DONATE, 0.8, "rarely worn, long dormant"
)
IDLE_FORMAL = DonationSuggestion(
    DonationLevel.MAYBE_DONATE, 0.7, "formal piece, barely worn over 2 years"
)
WORN_ENOUGH = DonationSuggestion(DonationLevel.KEEP, 0.1, "worn often enough")


def _days_between(start: datetime, end: datetime) -> int:
    return math.floor((end - start).total_seconds() / SECONDS_PER_DAY)


def age_days(item: ClosetItem, now: datetime) -> int:
    """Whole days the item has been in the closet; 0 when creation is unknown."""

    if item.created_at is None:
        return 0
    return max(1, _days_between(as_utc(item.created_at), as_utc(now)))


def days_since_last_worn(item: ClosetItem, now: datetime) -> float:
    """Whole days since the last recorded wear; unbounded when never worn."""

    if item.last_worn_at is None:
        return math.inf
    return _days_between(as_utc(item.last_worn_at), as_utc(now))


def idle_days(item: ClosetItem, now: datetime) -> float:
    """
    Whole days the item has sat unworn.

    Without a recorded wear the item has been idle since it entered the
    closet, so its age is used; with no timestamps at all the idle time is
    unbounded.
    """

    if item.last_worn_at is None and item.created_at is not None:
        return age_days(item, now)
    return days_since_last_worn(item, now)


def is_formal(item: ClosetItem) -> bool:
    return (item.occasion or "").strip().lower() in FORMAL_OCCASIONS


def score_item(item: ClosetItem, now: datetime) -> DonationSuggestion:
    """
    Compute the donation suggestion for one garment.

    Rules are checked in order and the first match wins, so favorites are
    never suggested for donation whatever their usage history. Only a
    recorded wear counts towards the grace period.
    """

    if item.favorite:
        return FAVORITE

    age = age_days(item, now)
    since_worn = days_since_last_worn(item, now)
    idle = idle_days(item, now)
    times_worn = item.times_worn or 0
    formal = is_formal(item)

    if age < GRACE_PERIOD_DAYS and since_worn <= GRACE_PERIOD_DAYS:
        return NEW_AND_WORN
    if times_worn <= DONATE_MAX_TIMES_WORN and idle >= YEAR_DAYS:
        return FORGOTTEN
    if times_worn == 0 and idle >= DORMANT_DAYS:
        return NEVER_WORN
    if not formal and age >= YEAR_DAYS and idle >= DORMANT_DAYS and times_worn <= RARELY_WORN_MAX:
        return LONG_DORMANT
    if formal and age >= FORMAL_AGE_DAYS and times_worn <= 1 and idle >= YEAR_DAYS:
        return IDLE_FORMAL
    return WORN_ENOUGH


def score_wardrobe(items: Iterable[ClosetItem], now: datetime) -> list[ScoredItem]:
    """Score every item independently, most donate-worthy first."""

    scored = [ScoredItem(item=item, suggestion=score_item(item, now)) for item in items]
    scored.sort(key=lambda entry: entry.suggestion.score, reverse=True)
    return scored
