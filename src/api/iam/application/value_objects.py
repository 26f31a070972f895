"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
cross-cutting concerns like the authenticated request context.
"""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import OrgRole, TenantId, UserId


@dataclass(frozen=True)
class CurrentUser:
    """Represents the calling user with tenant context.

    Extracted from the trusted gateway headers and used throughout the
    request lifecycle. Authentication itself happens upstream.

    This is an application-layer concept (not domain) because it represents
    the authentication/authorization context of the request, not a core
    business entity.
    """

    user_id: UserId
    tenant_id: TenantId
    role: OrgRole | None = None
