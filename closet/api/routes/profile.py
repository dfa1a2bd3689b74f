"""Profile dashboard routes."""

from fastapi import APIRouter, Depends

from closet.api.auth import CurrentUserDependency
from closet.api.dependencies import ClosetServices, get_services
from closet.api.schemas import ClosetItemOut, DashboardOut, StatCardOut
from closet.domain.models import DashboardStats

router = APIRouter(prefix="/profile", tags=["profile"])


def build_stat_cards(stats: DashboardStats) -> list[StatCardOut]:
    total = stats.total_items
    added = stats.items_added_this_month
    most_worn = stats.most_worn
    return [
        StatCardOut(
            title="Total Items",
            value=str(total),
            sub=f"+{added} this month" if total else "Add your first item",
            positive=total > 0,
        ),
        StatCardOut(
            title="Outfits",
            value=str(stats.outfit_count),
            sub="Ready to wear" if stats.outfit_count else "Create your first outfit",
        ),
        StatCardOut(
            title="Most Worn",
            sub=f"{most_worn.times_worn or 0} times" if most_worn else "No wear data yet",
            image_ref=most_worn.image_ref if most_worn else None,
        ),
        StatCardOut(
            title="New Items",
            value=str(added),
            sub="Added this month" if added else "No new items yet",
            positive=added > 0,
        ),
    ]


@router.get("/me/dashboard", response_model=DashboardOut)
async def my_dashboard(
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> DashboardOut:
    """Wardrobe totals for the signed-in user."""

    stats = await services.wardrobe.dashboard_stats(user_id)
    return DashboardOut(
        user_id=user_id,
        total_items=stats.total_items,
        outfit_count=stats.outfit_count,
        items_added_this_month=stats.items_added_this_month,
        most_worn=ClosetItemOut.model_validate(stats.most_worn) if stats.most_worn else None,
        stats=build_stat_cards(stats),
    )
