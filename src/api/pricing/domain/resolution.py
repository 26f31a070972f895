"""Temporal, scoped rule resolution.

Given a rule set and a resolution context, pick the single candidate that
applies. The pipeline is:

1. key filter: drop candidates outside the requested product/variant/unit
   (price books only) and outside the requested quantity tier;
2. temporal filter: keep candidates whose half-open window contains
   ``as_of``;
3. specificity ranking: score user match 2, role match 1, unscoped 0 and
   drop user/role candidates that do not match the requester;
4. first-match-wins on the ranked sequence.

Everything here is pure and synchronous so the ranking law can be tested
without a database.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation, localcontext
from enum import StrEnum
from typing import assert_never

from iam.domain.value_objects import OrgRole
from pricing.domain.entities import Candidate, RuleSet
from pricing.domain.exceptions import InvalidContextError
from pricing.domain.value_objects import (
    PriceBookKey,
    RateCardKey,
    ResolutionKey,
    RoleScope,
    Scope,
    ShipTo,
    Unscoped,
    UserScope,
    ensure_utc,
)

USER_MATCH_SCORE = 2
ROLE_MATCH_SCORE = 1
UNSCOPED_SCORE = 0


@dataclass(frozen=True)
class ResolutionContext:
    """The transient query a rule set is resolved against.

    Attributes:
        as_of: Instant validity windows are evaluated at (normalised to UTC)
        requesting_user_id: User the rate is requested for
        requesting_role: Role the rate is requested for
        quantity: Requested quantity (catalog path only)
        ship_to: Shipping destination (catalog path only, not matched)

    Raises:
        InvalidContextError: If quantity is not a positive, finite number
    """

    as_of: datetime
    requesting_user_id: str | None = None
    requesting_role: OrgRole | None = None
    quantity: Decimal | None = None
    ship_to: ShipTo | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "as_of", ensure_utc(self.as_of))
        if self.quantity is not None:
            object.__setattr__(self, "quantity", _validate_quantity(self.quantity))

    @classmethod
    def at(cls, as_of: datetime | None = None, **kwargs) -> ResolutionContext:
        """Build a context, defaulting ``as_of`` to the current instant."""
        return cls(as_of=as_of if as_of is not None else datetime.now(UTC), **kwargs)


def _validate_quantity(raw: Decimal | int | float | str) -> Decimal:
    if isinstance(raw, bool):
        raise InvalidContextError("Quantity must be a positive, finite number")
    try:
        quantity = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except InvalidOperation as e:
        raise InvalidContextError("Quantity must be a positive, finite number") from e
    if not quantity.is_finite() or quantity <= 0:
        raise InvalidContextError("Quantity must be a positive, finite number")
    return quantity


def exact_product(amount: Decimal, quantity: Decimal) -> Decimal:
    """Multiply two decimals without intermediate rounding.

    The working precision covers every digit of both factors, so the
    product is exact and rounding happens once, when money is rendered.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits(amount) + _digits(quantity))
        return amount * quantity


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


class UnresolvedReason(StrEnum):
    """Why a resolution produced no winner."""

    NO_ACTIVE_RULE_SET = "NoActiveRuleSet"
    NO_RULE_SET_FOUND = "NoRuleSetFound"
    NO_CANDIDATE_MATCHES_CONTEXT = "NoCandidateMatchesContext"


@dataclass(frozen=True)
class Resolved:
    """A single winning candidate.

    ``derived_amount`` is the unit amount times the requested quantity at
    full precision, or the unit amount when no quantity was requested.
    """

    rule_set: RuleSet
    candidate: Candidate
    derived_amount: Decimal
    score: int


@dataclass(frozen=True)
class Unresolved:
    """No candidate applies; never defaulted to zero."""

    reason: UnresolvedReason


ResolutionResult = Resolved | Unresolved


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate paired with its specificity score."""

    score: int
    candidate: Candidate


def filter_active(candidates: Iterable[Candidate], as_of: datetime) -> list[Candidate]:
    """Keep candidates whose validity window contains ``as_of``."""
    return [c for c in candidates if c.window.contains(as_of)]


def matches_key(candidate: Candidate, key: ResolutionKey) -> bool:
    """Whether a candidate belongs to the requested resolution key.

    Rate-card candidates all belong to their card. A price-book entry
    matches when it targets the requested variant, or when it is a
    product-level entry (no variant) for the requested product. When the
    key names a unit, entries in other units are dropped.
    """
    match key:
        case RateCardKey():
            return True
        case PriceBookKey():
            if key.unit_id is not None and candidate.unit.id != key.unit_id:
                return False
            if key.variant_id is not None and candidate.variant_id == key.variant_id:
                return True
            return candidate.product_id == key.product_id and candidate.variant_id is None
        case _:
            assert_never(key)


def admits_quantity(candidate: Candidate, quantity: Decimal | None) -> bool:
    """Whether a candidate's quantity tier admits ``quantity``.

    Candidates without a tier, and requests without a quantity, always pass.
    """
    if candidate.tier is None or quantity is None:
        return True
    return candidate.tier.admits(quantity)


def specificity_score(scope: Scope, context: ResolutionContext) -> int | None:
    """Score how specifically a scope targets the requester.

    Returns:
        2 for a matching user, 1 for a matching role, 0 for unscoped, or
        None when a user/role scope targets someone else.
    """
    match scope:
        case UserScope(user_id=user_id):
            if context.requesting_user_id is not None and user_id == context.requesting_user_id:
                return USER_MATCH_SCORE
            return None
        case RoleScope(role=role):
            if context.requesting_role is not None and role == context.requesting_role:
                return ROLE_MATCH_SCORE
            return None
        case Unscoped():
            return UNSCOPED_SCORE
        case _:
            assert_never(scope)


def _rank_key(ranked: RankedCandidate) -> tuple:
    candidate = ranked.candidate
    tier_floor = candidate.tier.floor if candidate.tier is not None else Decimal(0)
    return (
        ranked.score,
        candidate.variant_id is not None,
        tier_floor,
        candidate.updated_at,
        candidate.created_at,
        candidate.id.value,
    )


def rank_candidates(
    candidates: Iterable[Candidate], context: ResolutionContext
) -> list[RankedCandidate]:
    """Score and order candidates, most specific first.

    Candidates that target a different user or role are excluded rather
    than ranked low, so they can never mask an unscoped default. Equal
    scores fall back to variant-specific entries, then the higher tier
    floor, then the most recently updated row, then the most recently
    created row, then the highest id.
    """
    ranked = []
    for candidate in candidates:
        score = specificity_score(candidate.scope, context)
        if score is None:
            continue
        ranked.append(RankedCandidate(score=score, candidate=candidate))
    ranked.sort(key=_rank_key, reverse=True)
    return ranked


def select_winner(
    rule_set: RuleSet, key: ResolutionKey, context: ResolutionContext
) -> ResolutionResult:
    """Resolve a rule set to its single winning candidate.

    Args:
        rule_set: Snapshot of the rule set, candidates loaded
        key: Resolution key the rule set was selected for
        context: The request being resolved

    Returns:
        Resolved with the winner, or Unresolved(NO_CANDIDATE_MATCHES_CONTEXT)
    """
    eligible = (
        c
        for c in rule_set.candidates
        if matches_key(c, key) and admits_quantity(c, context.quantity)
    )
    ranked = rank_candidates(filter_active(eligible, context.as_of), context)
    if not ranked:
        return Unresolved(reason=UnresolvedReason.NO_CANDIDATE_MATCHES_CONTEXT)

    winner = ranked[0]
    amount = winner.candidate.amount
    derived = (
        exact_product(amount, context.quantity)
        if context.quantity is not None
        else amount
    )
    return Resolved(
        rule_set=rule_set,
        candidate=winner.candidate,
        derived_amount=derived,
        score=winner.score,
    )
