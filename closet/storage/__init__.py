"""Store interfaces and their SQLAlchemy implementations."""

from .base import ClosetItemStore, ItemFilter, OutfitItemLinkStore, OutfitStore
from .sql import SQLClosetItemStore, SQLOutfitItemLinkStore, SQLOutfitStore

__all__ = [
    "ClosetItemStore",
    "ItemFilter",
    "OutfitItemLinkStore",
    "OutfitStore",
    "SQLClosetItemStore",
    "SQLOutfitItemLinkStore",
    "SQLOutfitStore",
]
