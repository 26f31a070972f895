"""FastAPI dependency wiring for the pricing bounded context.

Repositories run on the read session; services are built per request so
every call resolves against a fresh snapshot. Probes carry the request's
observation context; the tenant id is passed explicitly with each event.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from iam.application.value_objects import CurrentUser
from iam.dependencies.user import get_current_user
from infrastructure.database.dependencies import get_read_session
from infrastructure.settings import PricingSettings, get_pricing_settings
from pricing.application.observability import (
    DefaultResolutionServiceProbe,
    ResolutionServiceProbe,
)
from pricing.application.services import QuoteService, RateService, RuleResolver
from pricing.infrastructure.observability import (
    DefaultRuleSetRepositoryProbe,
    RuleSetRepositoryProbe,
)
from pricing.infrastructure.price_book_repository import PriceBookRepository
from pricing.infrastructure.rate_card_repository import RateCardRepository
from shared_kernel.observability_context import ObservationContext


def get_observation_context(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    x_request_id: Annotated[str | None, Header(alias="X-Request-ID")] = None,
) -> ObservationContext:
    """Build the observation context for this request.

    Uses the gateway's X-Request-ID when present, otherwise a fresh ULID.
    """
    return ObservationContext(
        request_id=x_request_id or str(ULID()),
        user_id=current_user.user_id.value,
    )


def get_resolution_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ResolutionServiceProbe:
    """Get ResolutionServiceProbe bound to the request context."""
    return DefaultResolutionServiceProbe().with_context(context)


def get_repository_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> RuleSetRepositoryProbe:
    """Get RuleSetRepositoryProbe bound to the request context."""
    return DefaultRuleSetRepositoryProbe().with_context(context)


def get_rate_card_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    probe: Annotated[RuleSetRepositoryProbe, Depends(get_repository_probe)],
) -> RateCardRepository:
    """Get RateCardRepository instance.

    Args:
        session: Read session from dependency injection
        probe: Repository probe

    Returns:
        RateCardRepository instance
    """
    return RateCardRepository(session=session, probe=probe)


def get_price_book_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    probe: Annotated[RuleSetRepositoryProbe, Depends(get_repository_probe)],
) -> PriceBookRepository:
    """Get PriceBookRepository instance.

    Args:
        session: Read session from dependency injection
        probe: Repository probe

    Returns:
        PriceBookRepository instance
    """
    return PriceBookRepository(session=session, probe=probe)


def get_rate_service(
    repository: Annotated[RateCardRepository, Depends(get_rate_card_repository)],
    probe: Annotated[ResolutionServiceProbe, Depends(get_resolution_service_probe)],
) -> RateService:
    """Get RateService instance.

    Args:
        repository: Rate card repository
        probe: Resolution service probe

    Returns:
        RateService instance
    """
    return RateService(resolver=RuleResolver(repository=repository, probe=probe))


def get_quote_service(
    repository: Annotated[PriceBookRepository, Depends(get_price_book_repository)],
    probe: Annotated[ResolutionServiceProbe, Depends(get_resolution_service_probe)],
    settings: Annotated[PricingSettings, Depends(get_pricing_settings)],
) -> QuoteService:
    """Get QuoteService instance.

    Args:
        repository: Price book repository
        probe: Resolution service probe
        settings: Pricing settings

    Returns:
        QuoteService instance
    """
    return QuoteService(
        resolver=RuleResolver(repository=repository, probe=probe),
        settings=settings,
        probe=probe,
    )
