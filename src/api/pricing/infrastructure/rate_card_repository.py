"""PostgreSQL implementation of IRuleSetRepository for rate cards.

Rate cards and their items are read-only here; they are maintained by the
administration surface. Every header query filters on the tenant, and
items are only ever loaded for a card that has already passed that filter.
"""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pricing.domain.entities import Candidate, RuleSet
from pricing.domain.value_objects import (
    CandidateId,
    RuleSetId,
    RuleSetKind,
    scope_from_columns,
)
from pricing.infrastructure.mappers import (
    rule_set_from_model,
    unit_ref_from_model,
    window_from_columns,
)
from pricing.infrastructure.models import RateCardItemModel, RateCardModel
from pricing.infrastructure.observability import (
    DefaultRuleSetRepositoryProbe,
    RuleSetRepositoryProbe,
)
from pricing.ports.exceptions import RuleStoreUnavailableError
from pricing.ports.repositories import IRuleSetRepository


class RateCardRepository(IRuleSetRepository):
    """Repository reading rate cards and rate card items from PostgreSQL."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RuleSetRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRuleSetRepositoryProbe()

    @property
    def kind(self) -> RuleSetKind:
        return RuleSetKind.RATE_CARD

    async def get_active_default(self, tenant_id: str) -> RuleSet | None:
        """Fetch the tenant's active default rate card.

        Args:
            tenant_id: The owning tenant

        Returns:
            The most recently updated active default card, or None
        """
        stmt = (
            select(RateCardModel)
            .where(
                RateCardModel.tenant_id == tenant_id,
                RateCardModel.is_active.is_(True),
                RateCardModel.is_default.is_(True),
            )
            .order_by(RateCardModel.updated_at.desc(), RateCardModel.id.desc())
            .limit(1)
        )
        model = await self._fetch_one(stmt, operation="get_active_default")

        if model is None:
            self._probe.rule_set_not_found(self.kind, tenant_id, None)
            return None

        self._probe.rule_set_retrieved(self.kind, model.id, tenant_id)
        return rule_set_from_model(model, self.kind)

    async def get_by_id(
        self, tenant_id: str, rule_set_id: RuleSetId
    ) -> RuleSet | None:
        """Fetch an active rate card by id within a tenant.

        Args:
            tenant_id: The owning tenant
            rule_set_id: The requested rate card

        Returns:
            The rate card, or None if missing, inactive or owned elsewhere
        """
        stmt = select(RateCardModel).where(
            RateCardModel.id == rule_set_id.value,
            RateCardModel.tenant_id == tenant_id,
            RateCardModel.is_active.is_(True),
        )
        model = await self._fetch_one(stmt, operation="get_by_id")

        if model is None:
            self._probe.rule_set_not_found(self.kind, tenant_id, rule_set_id.value)
            return None

        self._probe.rule_set_retrieved(self.kind, model.id, tenant_id)
        return rule_set_from_model(model, self.kind)

    async def get_candidates(
        self,
        rule_set_id: RuleSetId,
        *,
        product_id: str | None = None,
        variant_id: str | None = None,
    ) -> list[Candidate]:
        """Load a rate card's items with their units and targeted users.

        Rate card items have no variants; ``variant_id`` is accepted for
        protocol compatibility and ignored. When ``product_id`` is given,
        items for other products are dropped but product-less items stay.

        Args:
            rule_set_id: The rate card to load
            product_id: Optional product to narrow to
            variant_id: Ignored

        Returns:
            List of candidates
        """
        stmt = (
            select(RateCardItemModel)
            .where(RateCardItemModel.rate_card_id == rule_set_id.value)
            .options(
                selectinload(RateCardItemModel.unit),
                selectinload(RateCardItemModel.user),
            )
        )
        if product_id is not None:
            stmt = stmt.where(
                or_(
                    RateCardItemModel.product_id == product_id,
                    RateCardItemModel.product_id.is_(None),
                )
            )

        try:
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            self._probe.query_failed(self.kind, "get_candidates", e)
            raise RuleStoreUnavailableError("Rate card store is unavailable") from e

        candidates = []
        for model in models:
            candidate = self._to_candidate(model)
            if candidate is not None:
                candidates.append(candidate)

        self._probe.candidates_loaded(self.kind, rule_set_id.value, len(candidates))
        return candidates

    async def _fetch_one(self, stmt, operation: str) -> RateCardModel | None:
        try:
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self._probe.query_failed(self.kind, operation, e)
            raise RuleStoreUnavailableError("Rate card store is unavailable") from e

    def _to_candidate(self, model: RateCardItemModel) -> Candidate | None:
        try:
            scope = scope_from_columns(model.user_id, model.role)
        except ValueError as e:
            # Unknown role string; the row can never match a requester.
            self._probe.malformed_candidate_skipped(self.kind, model.id, str(e))
            return None

        return Candidate(
            id=CandidateId(value=model.id),
            scope=scope,
            window=window_from_columns(model.valid_from, model.valid_to),
            amount=model.unit_price,
            unit=unit_ref_from_model(model.unit),
            created_at=model.created_at,
            updated_at=model.updated_at,
            product_id=model.product_id,
            owner_label=model.user.username if model.user is not None else None,
        )
