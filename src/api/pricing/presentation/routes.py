"""HTTP routes for rate and price resolution."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from iam.application.value_objects import CurrentUser
from iam.dependencies.user import get_current_user
from pricing.application.observability import ResolutionServiceProbe
from pricing.application.services import QuoteRejected, QuoteService, RateService
from pricing.dependencies import (
    get_quote_service,
    get_rate_service,
    get_resolution_service_probe,
)
from pricing.domain.exceptions import InvalidContextError
from pricing.domain.resolution import Unresolved, UnresolvedReason
from pricing.presentation.models import (
    ErrorResponse,
    QuoteRequest,
    QuoteResponse,
    ResolveRateRequest,
    ResolveRateResponse,
)

router = APIRouter(
    tags=["pricing"],
)

# NO_RULE_SET_FOUND shares the "no active" message so an unknown id and an
# id owned by another tenant are indistinguishable.
RATE_ERRORS: dict[UnresolvedReason, str] = {
    UnresolvedReason.NO_ACTIVE_RULE_SET: "No active rate card",
    UnresolvedReason.NO_RULE_SET_FOUND: "No active rate card",
    UnresolvedReason.NO_CANDIDATE_MATCHES_CONTEXT: "No matching rate",
}

QUOTE_ERRORS: dict[UnresolvedReason, str] = {
    UnresolvedReason.NO_ACTIVE_RULE_SET: "No active price book",
    UnresolvedReason.NO_RULE_SET_FOUND: "No active price book",
    UnresolvedReason.NO_CANDIDATE_MATCHES_CONTEXT: (
        "No valid price for given quantity/date"
    ),
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/rates/resolve",
    response_model=ResolveRateResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def resolve_rate(
    request: ResolveRateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[RateService, Depends(get_rate_service)],
    probe: Annotated[ResolutionServiceProbe, Depends(get_resolution_service_probe)],
):
    """Resolve the billing rate for a user and/or role.

    Args:
        request: Who to resolve for, optional rate card and instant
        current_user: Caller, whose tenant scopes the lookup
        service: Rate service
        probe: Probe for logging unexpected failures

    Returns:
        ResolveRateResponse, or 404 {error} when nothing applies
    """
    try:
        result = await service.resolve_rate(
            tenant_id=current_user.tenant_id.value,
            rate_card_id=request.rate_card_id,
            user_id=request.user_id,
            role=request.role,
            as_of=request.as_of,
        )
    except InvalidContextError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        probe.request_failed("resolve_rate", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to resolve rate")

    if isinstance(result, Unresolved):
        return _error(status.HTTP_404_NOT_FOUND, RATE_ERRORS[result.reason])

    return ResolveRateResponse.from_domain(result)


@router.post(
    "/price/quote",
    response_model=QuoteResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def quote_price(
    request: QuoteRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
    probe: Annotated[ResolutionServiceProbe, Depends(get_resolution_service_probe)],
):
    """Quote the unit price and line subtotal for a catalog line.

    User- and role-scoped entries are matched against the caller.

    Args:
        request: Product, optional variant/book/unit, quantity and instant
        current_user: Caller, whose tenant and identity scope the lookup
        service: Quote service
        probe: Probe for logging unexpected failures

    Returns:
        QuoteResponse, or 400 {error} when no price applies
    """
    try:
        result = await service.quote_unit_price(
            tenant_id=current_user.tenant_id.value,
            product_id=request.product_id,
            variant_id=request.variant_id,
            price_book_id=request.price_book_id,
            unit_id=request.unit_id,
            quantity=request.quantity,
            as_of=request.as_of,
            ship_to=request.ship_to.to_domain() if request.ship_to else None,
            requesting_user_id=current_user.user_id.value,
            requesting_role=current_user.role,
        )
    except InvalidContextError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        probe.request_failed("quote_price", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to quote price")

    if isinstance(result, QuoteRejected):
        return _error(status.HTTP_400_BAD_REQUEST, QUOTE_ERRORS[result.reason])

    return QuoteResponse.from_domain(result)
