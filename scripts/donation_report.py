"""Print donation suggestions for one user's closet."""

from __future__ import annotations

import argparse
import asyncio
from typing import Iterable

from closet.config.settings import get_settings
from closet.db.session import create_engine, create_session_factory, init_db
from closet.domain.models import DonationLevel, ScoredItem
from closet.monitoring.logging import configure_logging
from closet.services.wardrobe import WardrobeService
from closet.storage.sql import SQLClosetItemStore, SQLOutfitItemLinkStore, SQLOutfitStore

LEVEL_MARKS = {
    DonationLevel.DONATE: "❌",
    DonationLevel.MAYBE_DONATE: "⚠️",
    DonationLevel.KEEP: "✅",
}


def _format_entry(entry: ScoredItem) -> str:
    item = entry.item
    suggestion = entry.suggestion
    mark = LEVEL_MARKS[suggestion.level]
    label = " ".join(part for part in (item.color, item.category) if part)
    return f"{mark} {label} [{item.id}] {suggestion.score:.2f} {suggestion.reason}"


def print_report(entries: Iterable[ScoredItem]) -> None:
    for entry in entries:
        print(_format_entry(entry))


async def build_report(user_id: str) -> list[ScoredItem]:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    try:
        await init_db(engine)
        factory = create_session_factory(engine)
        service = WardrobeService(
            SQLClosetItemStore(factory),
            SQLOutfitStore(factory),
            SQLOutfitItemLinkStore(factory),
        )
        return await service.donation_suggestions(user_id)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", help="owner whose closet should be scored")
    args = parser.parse_args()

    configure_logging()
    print_report(asyncio.run(build_report(args.user_id)))


if __name__ == "__main__":
    main()
