"""
Stay quote endpoint.
"""

from fastapi import APIRouter, Depends

from frontdesk.api.deps import get_current_user, get_quote_service
from frontdesk.schemas.pricing import QuoteRequest, QuoteResponse
from frontdesk.services.common.permissions import CurrentUser
from frontdesk.services.pricing import QuoteService

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.post("/quote", response_model=QuoteResponse)
def quote_stay(
    payload: QuoteRequest,
    service: QuoteService = Depends(get_quote_service),
    _: CurrentUser = Depends(get_current_user),
):
    return service.quote(payload)
