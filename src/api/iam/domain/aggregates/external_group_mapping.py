"""External group mapping entity for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.value_objects import (
    ExternalGroupMappingId,
    GroupId,
    TenantId,
    normalize_external_group,
)


@dataclass(frozen=True)
class ExternalGroupMapping:
    """Association between an internal group and an external group name.

    A mapping states that members of ``external_group`` in the identity
    source ``origin`` belong to the internal group ``group_id`` of tenant
    ``tenant_id``. Mappings are never updated in place; re-mapping the same
    tuple yields the stored mapping.

    Business rules:
    - external_group is always stored in its normalized (lower case) form
    - at most one mapping exists per (tenant, group, external_group, origin)
    """

    id: ExternalGroupMappingId
    tenant_id: TenantId
    group_id: GroupId
    external_group: str
    origin: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.external_group != normalize_external_group(self.external_group):
            raise ValueError(
                f"external_group must be normalized, got: '{self.external_group}'"
            )

    @property
    def key(self) -> tuple[str, str, str, str]:
        """Return the uniqueness tuple of this mapping."""
        return (
            self.tenant_id.value,
            self.group_id.value,
            self.external_group,
            self.origin,
        )
