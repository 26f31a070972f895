"""Pricing domain: rule sets, candidates and the resolution law."""

from pricing.domain.entities import Candidate, RuleSet
from pricing.domain.exceptions import InvalidContextError
from pricing.domain.quote import PriceQuote, assemble_quote, format_money, to_money
from pricing.domain.resolution import (
    RankedCandidate,
    ResolutionContext,
    ResolutionResult,
    Resolved,
    Unresolved,
    UnresolvedReason,
    filter_active,
    rank_candidates,
    select_winner,
    specificity_score,
)
from pricing.domain.value_objects import (
    CandidateId,
    PriceBookKey,
    QuantityTier,
    RateCardKey,
    ResolutionKey,
    RoleScope,
    RuleSetId,
    RuleSetKind,
    Scope,
    ShipTo,
    UnitRef,
    Unscoped,
    UserScope,
    ValidityWindow,
)

__all__ = [
    "Candidate",
    "CandidateId",
    "InvalidContextError",
    "PriceBookKey",
    "PriceQuote",
    "QuantityTier",
    "RankedCandidate",
    "RateCardKey",
    "ResolutionContext",
    "ResolutionKey",
    "ResolutionResult",
    "Resolved",
    "RoleScope",
    "RuleSet",
    "RuleSetId",
    "RuleSetKind",
    "Scope",
    "ShipTo",
    "UnitRef",
    "Unresolved",
    "UnresolvedReason",
    "Unscoped",
    "UserScope",
    "ValidityWindow",
    "assemble_quote",
    "filter_active",
    "format_money",
    "rank_candidates",
    "select_winner",
    "specificity_score",
    "to_money",
]
