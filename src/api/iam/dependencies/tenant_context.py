"""Tenant context FastAPI dependency.

Resolves tenant context from the X-Tenant-ID request header set by the
trusted upstream gateway. A missing or malformed header returns 400.

The resolved tenant is passed explicitly to every repository and service
call; nothing downstream reads it from ambient state.

Usage in FastAPI routes:
    @router.post("/example")
    async def example(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        # tenant.tenant_id is the canonical ULID string
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from ulid import ULID

from iam.domain.value_objects import TenantId
from shared_kernel.middleware.observability import DefaultTenantContextProbe
from shared_kernel.middleware.observability.tenant_context_probe import (
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext


def _validate_ulid(raw_value: str) -> TenantId:
    """Validate and parse a raw string as a ULID-based TenantId.

    Accepts case-insensitive input (Crockford's Base32 is case-insensitive) and
    returns the canonical uppercase form.

    Args:
        raw_value: The raw X-Tenant-ID header value.

    Returns:
        Validated TenantId with canonical (uppercase) ULID value.

    Raises:
        ValueError: If the value is not a valid ULID.
    """
    parsed_ulid = ULID.from_str(raw_value.strip().upper())
    return TenantId(value=str(parsed_ulid))


def get_tenant_context_probe() -> TenantContextProbe:
    """Get TenantContextProbe instance."""
    return DefaultTenantContextProbe()


async def get_tenant_context(
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    x_tenant_id: Annotated[str | None, Header(alias="X-Tenant-ID")] = None,
    x_user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
) -> TenantContext:
    """Resolve the tenant for the current request.

    Args:
        probe: Probe for observability
        x_tenant_id: Raw X-Tenant-ID header value
        x_user_id: Raw X-User-ID header value (for log correlation only)

    Returns:
        TenantContext with the canonical tenant id

    Raises:
        HTTPException 400: If the header is missing or not a valid ULID
    """
    if x_tenant_id is None or not x_tenant_id.strip():
        probe.tenant_header_missing(user_id=x_user_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header is required",
        )

    try:
        tenant_id = _validate_ulid(x_tenant_id)
    except ValueError as e:
        probe.invalid_tenant_id_format(raw_value=x_tenant_id, user_id=x_user_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header must be a valid ULID",
        ) from e

    probe.tenant_resolved_from_header(
        tenant_id=tenant_id.value,
        user_id=x_user_id or "",
    )
    return TenantContext(tenant_id=tenant_id.value, source="header")
