"""SQLAlchemy ORM models for IAM bounded context.

Only the metadata other contexts reference (tenants for ownership, users
for labelling user-specific rates) is stored here.
"""

from iam.infrastructure.models.tenant import TenantModel
from iam.infrastructure.models.user import UserModel

__all__ = [
    "TenantModel",
    "UserModel",
]
