"""Fixtures for pricing repository unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.infrastructure.models import UserModel
from pricing.infrastructure.models import UnitModel


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    return session


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    probe = MagicMock()
    return probe


@pytest.fixture
def unit_model(tenant_id: str) -> UnitModel:
    return UnitModel(
        id="01J00000000000000000000HRS",
        tenant_id=tenant_id,
        code="HOUR",
        label="Hour",
        kind="TIME",
        is_active=True,
    )


@pytest.fixture
def user_model() -> UserModel:
    return UserModel(id="user-1", username="alice")


@pytest.fixture
def query_result():
    """Build a mock result for session.execute."""

    def _make(scalar=None, scalars=()):
        result = MagicMock()
        result.scalar_one_or_none.return_value = scalar
        result.scalars.return_value.all.return_value = list(scalars)
        return result

    return _make

