"""Liked You — paginated likers of a user and the inbound like count.

Invariants:
    - page_size absent or <= 0 falls back to the configured default
    - page_size above MAX_PAGE_SIZE is rejected with 400
    - pagination_token is opaque; a non-numeric token is rejected with 400
    - count is 0 for users nobody has liked
"""

from fastapi import APIRouter, Depends, Query

from decision_ledger.api.dependencies import get_ledger, recipient_id_path
from decision_ledger.core.domain_types import UserId
from decision_ledger.core.pagination import MAX_PAGE_SIZE
from decision_ledger.schemas.decision import LikeCountResponse, LikedYouResponse
from decision_ledger.services.decision_ledger import DecisionLedger

router = APIRouter(prefix="/api/v1/users", tags=["liked-you"])


@router.get("/{recipient_id}/liked-you", response_model=LikedYouResponse)
async def list_liked_you(
    recipient_id: UserId = Depends(recipient_id_path),
    page_size: int | None = Query(None, le=MAX_PAGE_SIZE),
    pagination_token: str | None = Query(None),
    ledger: DecisionLedger = Depends(get_ledger),
):
    """Users whose current decision on recipient is a like."""
    page = await ledger.list_liked_you(recipient_id, page_size, pagination_token)
    return LikedYouResponse.from_page(page)


@router.get("/{recipient_id}/liked-you/new", response_model=LikedYouResponse)
async def list_new_liked_you(
    recipient_id: UserId = Depends(recipient_id_path),
    page_size: int | None = Query(None, le=MAX_PAGE_SIZE),
    pagination_token: str | None = Query(None),
    ledger: DecisionLedger = Depends(get_ledger),
):
    """Likers the recipient has not liked back."""
    page = await ledger.list_new_liked_you(
        recipient_id, page_size, pagination_token,
    )
    return LikedYouResponse.from_page(page)


@router.get("/{recipient_id}/liked-you/count", response_model=LikeCountResponse)
async def count_liked_you(
    recipient_id: UserId = Depends(recipient_id_path),
    ledger: DecisionLedger = Depends(get_ledger),
):
    return LikeCountResponse(count=await ledger.count_liked_you(recipient_id))
