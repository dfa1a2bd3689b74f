"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


outfits_created_total = Counter(
    "outfits_created_total",
    "Total number of outfits persisted with their item links.",
)

outfit_rollbacks_total = Counter(
    "outfit_rollbacks_total",
    "Outfits removed again because a later creation step failed.",
    ["step"],
)

outfits_deleted_total = Counter(
    "outfits_deleted_total",
    "Total number of outfits deleted by their owners.",
)

donation_suggestions_total = Counter(
    "donation_suggestions_total",
    "Donation suggestions computed, by suggestion level.",
    ["level"],
)
