"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.external_group_mapping import (
    EXTERNAL_GROUP_MAPPING_UNIQUE_COLUMNS,
    ExternalGroupMappingModel,
)
from iam.infrastructure.models.group import GroupModel
from iam.infrastructure.models.tenant import TenantModel

__all__ = [
    "EXTERNAL_GROUP_MAPPING_UNIQUE_COLUMNS",
    "ExternalGroupMappingModel",
    "GroupModel",
    "TenantModel",
]
