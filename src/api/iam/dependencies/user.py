"""Current user FastAPI dependency.

Authentication happens at the gateway; the resolved identity arrives as
trusted headers. This dependency only validates their shape.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from iam.application.value_objects import CurrentUser
from iam.dependencies.tenant_context import (
    get_tenant_context,
    get_tenant_context_probe,
)
from iam.domain.value_objects import OrgRole, TenantId, UserId
from shared_kernel.middleware.observability.tenant_context_probe import (
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext


async def get_current_user(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    x_user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
    x_user_role: Annotated[str | None, Header(alias="X-User-Role")] = None,
) -> CurrentUser:
    """Build the CurrentUser for this request.

    Raises:
        HTTPException 401: If X-User-ID is missing
        HTTPException 400: If X-User-Role names an unknown role
    """
    if x_user_id is None or not x_user_id.strip():
        probe.user_header_missing()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    role: OrgRole | None = None
    if x_user_role:
        try:
            role = OrgRole(x_user_role.strip().upper())
        except ValueError as e:
            probe.invalid_role(raw_value=x_user_role, user_id=x_user_id)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="X-User-Role header names an unknown role",
            ) from e

    return CurrentUser(
        user_id=UserId(value=x_user_id.strip()),
        tenant_id=TenantId(value=tenant.tenant_id),
        role=role,
    )
