"""PostgreSQL implementation of IRuleSetRepository for price books.

Price book entries are keyed by product or by variant. Candidate queries
are narrowed in SQL to the rows that can possibly match the request; the
domain filter still has the final word on which of them applies.
"""

from __future__ import annotations

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pricing.domain.entities import Candidate, RuleSet
from pricing.domain.value_objects import (
    CandidateId,
    QuantityTier,
    RuleSetId,
    RuleSetKind,
    scope_from_columns,
)
from pricing.infrastructure.mappers import (
    rule_set_from_model,
    unit_ref_from_model,
    window_from_columns,
)
from pricing.infrastructure.models import PriceBookEntryModel, PriceBookModel
from pricing.infrastructure.observability import (
    DefaultRuleSetRepositoryProbe,
    RuleSetRepositoryProbe,
)
from pricing.ports.exceptions import RuleStoreUnavailableError
from pricing.ports.repositories import IRuleSetRepository


class PriceBookRepository(IRuleSetRepository):
    """Repository reading price books and price book entries from PostgreSQL."""

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
        return RuleSetKind.PRICE_BOOK

    async def get_active_default(self, tenant_id: str) -> RuleSet | None:
        """Fetch the tenant's active default price book.

        Args:
            tenant_id: The owning tenant

        Returns:
            The most recently updated active default book, or None
        """
        stmt = (
            select(PriceBookModel)
            .where(
                PriceBookModel.tenant_id == tenant_id,
                PriceBookModel.is_active.is_(True),
                PriceBookModel.is_default.is_(True),
            )
            .order_by(PriceBookModel.updated_at.desc(), PriceBookModel.id.desc())
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
        """Fetch an active price book by id within a tenant.

        Args:
            tenant_id: The owning tenant
            rule_set_id: The requested price book

        Returns:
            The price book, or None if missing, inactive or owned elsewhere
        """
        stmt = select(PriceBookModel).where(
            PriceBookModel.id == rule_set_id.value,
            PriceBookModel.tenant_id == tenant_id,
            PriceBookModel.is_active.is_(True),
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
        """Load price book entries with their units and targeted users.

        With ``product_id`` set, only product-level entries for that product
        are loaded, plus entries for ``variant_id`` when one is given.

        Args:
            rule_set_id: The price book to load
            product_id: Product to narrow to
            variant_id: Variant whose entries are also included

        Returns:
            List of candidates
        """
        stmt = (
            select(PriceBookEntryModel)
            .where(PriceBookEntryModel.price_book_id == rule_set_id.value)
            .options(
                selectinload(PriceBookEntryModel.unit),
                selectinload(PriceBookEntryModel.user),
            )
        )
        if product_id is not None:
            product_level = and_(
                PriceBookEntryModel.product_id == product_id,
                PriceBookEntryModel.variant_id.is_(None),
            )
            if variant_id is not None:
                stmt = stmt.where(
                    or_(product_level, PriceBookEntryModel.variant_id == variant_id)
                )
            else:
                stmt = stmt.where(product_level)

        try:
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            self._probe.query_failed(self.kind, "get_candidates", e)
            raise RuleStoreUnavailableError("Price book store is unavailable") from e

        candidates = []
        for model in models:
            candidate = self._to_candidate(model)
            if candidate is not None:
                candidates.append(candidate)

        self._probe.candidates_loaded(self.kind, rule_set_id.value, len(candidates))
        return candidates

    async def _fetch_one(self, stmt, operation: str) -> PriceBookModel | None:
        try:
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self._probe.query_failed(self.kind, operation, e)
            raise RuleStoreUnavailableError("Price book store is unavailable") from e

    def _to_candidate(self, model: PriceBookEntryModel) -> Candidate | None:
        try:
            scope = scope_from_columns(model.user_id, model.role)
        except ValueError as e:
            self._probe.malformed_candidate_skipped(self.kind, model.id, str(e))
            return None

        tier = None
        if model.min_qty is not None or model.max_qty is not None:
            tier = QuantityTier(min_qty=model.min_qty, max_qty=model.max_qty)

        return Candidate(
            id=CandidateId(value=model.id),
            scope=scope,
            window=window_from_columns(model.valid_from, model.valid_to),
            amount=model.unit_price,
            unit=unit_ref_from_model(model.unit),
            created_at=model.created_at,
            updated_at=model.updated_at,
            product_id=model.product_id,
            variant_id=model.variant_id,
            tier=tier,
            owner_label=model.user.username if model.user is not None else None,
        )
