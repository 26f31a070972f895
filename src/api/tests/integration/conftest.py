"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Use docker-compose
for testing; tables are created from the ORM metadata if missing.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.infrastructure.models import TenantModel, UserModel
from infrastructure.database.engines import create_write_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings
from pricing.infrastructure.models import PriceBookModel, RateCardModel, UnitModel


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        RATEBOOK_DB_HOST, RATEBOOK_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("RATEBOOK_DB_HOST", "localhost"),
        port=int(os.getenv("RATEBOOK_DB_PORT", "5432")),
        database=os.getenv("RATEBOOK_DB_DATABASE", "ratebook"),
        username=os.getenv("RATEBOOK_DB_USERNAME", "ratebook"),
        password=SecretStr(os.getenv("RATEBOOK_DB_PASSWORD", "ratebook_dev_password")),
    )


@pytest_asyncio.fixture
async def async_session(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session on a freshly created schema."""
    engine = create_write_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
    async with sessionmaker() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def tenant_cleanup(
    async_session: AsyncSession,
) -> AsyncGenerator[dict[str, list[str]], None]:
    """Collect ids of seeded rows and delete them after the test.

    Tests append to ``tenants`` and ``users``; rule sets and units are
    removed by owning tenant, and their children cascade.
    """
    created: dict[str, list[str]] = {"tenants": [], "users": []}
    yield created

    await async_session.rollback()
    async with async_session.begin():
        tenants = created["tenants"]
        if tenants:
            await async_session.execute(
                delete(RateCardModel).where(RateCardModel.tenant_id.in_(tenants))
            )
            await async_session.execute(
                delete(PriceBookModel).where(PriceBookModel.tenant_id.in_(tenants))
            )
            await async_session.execute(
                delete(UnitModel).where(UnitModel.tenant_id.in_(tenants))
            )
            await async_session.execute(
                delete(TenantModel).where(TenantModel.id.in_(tenants))
            )
        if created["users"]:
            await async_session.execute(
                delete(UserModel).where(UserModel.id.in_(created["users"]))
            )
