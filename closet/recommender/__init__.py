"""Outfit composition rules and donation scoring."""

from .rules_engine import ValidationResult, ensure_valid_outfit, validate_outfit_items
from .scorer import score_item, score_wardrobe

__all__ = [
    "ValidationResult",
    "ensure_valid_outfit",
    "score_item",
    "score_wardrobe",
    "validate_outfit_items",
]
