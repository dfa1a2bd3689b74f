"""Donation suggestion routes."""

from fastapi import APIRouter, Depends

from closet.api.auth import CurrentUserDependency
from closet.api.dependencies import ClosetServices, get_services
from closet.api.schemas import DonationSuggestionOut, SuggestedItemOut, SuggestionListOut

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.get("/donation-suggestions", response_model=SuggestionListOut)
async def donation_suggestions(
    user_id: str = CurrentUserDependency,
    services: ClosetServices = Depends(get_services),
) -> SuggestionListOut:
    """Every garment of the user with its suggestion, most donate-worthy first."""

    scored = await services.wardrobe.donation_suggestions(user_id)
    return SuggestionListOut(
        items=[
            SuggestedItemOut(
                id=entry.item.id,
                category=entry.item.category,
                color=entry.item.color,
                image_ref=entry.item.image_ref,
                times_worn=entry.item.times_worn,
                last_worn_at=entry.item.last_worn_at,
                suggestion=DonationSuggestionOut.model_validate(entry.suggestion),
            )
            for entry in scored
        ]
    )
