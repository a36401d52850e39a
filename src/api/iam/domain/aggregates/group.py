"""Group aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import GroupId, TenantId


@dataclass(frozen=True)
class Group:
    """Internal group as seen by the external group mapping component.

    Groups are owned by the group registry; this component only resolves
    them to confirm that a group exists inside a tenant before mappings
    are attached to it.
    """

    id: GroupId
    tenant_id: TenantId
    name: str

    def belongs_to(self, tenant_id: TenantId) -> bool:
        """Check whether the group lives in the given tenant."""
        return self.tenant_id == tenant_id
