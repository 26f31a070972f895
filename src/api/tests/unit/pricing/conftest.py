"""Shared fixtures for pricing unit tests.

The factories build frozen domain snapshots so each test states only the
fields it cares about.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from pricing.domain.entities import Candidate, RuleSet
from pricing.domain.value_objects import (
    CandidateId,
    RuleSetId,
    RuleSetKind,
    UnitRef,
    Unscoped,
    ValidityWindow,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def tenant_id() -> str:
    """A fixed tenant id for tests."""
    return "01J0000000000000000000TENA"


@pytest.fixture
def hour_unit() -> UnitRef:
    return UnitRef(id="01J00000000000000000000HRS", label="Hour")


@pytest.fixture
def make_candidate(hour_unit: UnitRef):
    """Factory for Candidate snapshots with sensible defaults."""

    def _make(
        amount: str = "10.00",
        scope=None,
        window: ValidityWindow | None = None,
        updated_at: datetime = BASE_TIME,
        created_at: datetime = BASE_TIME,
        candidate_id: str | None = None,
        unit: UnitRef | None = None,
        **kwargs,
    ) -> Candidate:
        return Candidate(
            id=CandidateId(value=candidate_id) if candidate_id else CandidateId.generate(),
            scope=scope if scope is not None else Unscoped(),
            window=window if window is not None else ValidityWindow(),
            amount=Decimal(amount),
            unit=unit if unit is not None else hour_unit,
            created_at=created_at,
            updated_at=updated_at,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_rule_set(tenant_id: str):
    """Factory for RuleSet snapshots."""

    def _make(
        candidates=(),
        kind: RuleSetKind = RuleSetKind.RATE_CARD,
        currency: str = "USD",
        rule_set_id: str | None = None,
        is_default: bool = True,
    ) -> RuleSet:
        return RuleSet(
            id=RuleSetId(value=rule_set_id) if rule_set_id else RuleSetId.generate(),
            tenant_id=tenant_id,
            kind=kind,
            name="Standard",
            currency=currency,
            is_active=True,
            is_default=is_default,
            updated_at=BASE_TIME,
            candidates=tuple(candidates),
        )

    return _make
