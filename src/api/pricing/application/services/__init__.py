"""Application services for the pricing bounded context."""

from pricing.application.services.quote_service import QuoteRejected, QuoteService
from pricing.application.services.rate_service import RateResolution, RateService
from pricing.application.services.rule_resolver import RuleResolver

__all__ = [
    "QuoteRejected",
    "QuoteService",
    "RateResolution",
    "RateService",
    "RuleResolver",
]
