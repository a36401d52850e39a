"""Repository protocols (ports) for IAM bounded context.

Every method that touches tenant-owned data takes the tenant explicitly.
There is no ambient tenant: callers decide the scope on each call.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import ExternalGroupMapping, Group
from iam.domain.value_objects import GroupId, TenantId


@runtime_checkable
class IGroupRepository(Protocol):
    """Read access to the group registry.

    Group CRUD belongs to the group registry itself; mapping code only
    needs to know whether a group exists inside a tenant.
    """

    async def get_by_id(self, group_id: GroupId, tenant_id: TenantId) -> Group | None:
        """Retrieve a group by its ID within a tenant.

        Args:
            group_id: The unique identifier of the group
            tenant_id: The tenant to search within

        Returns:
            The Group, or None if it does not exist in that tenant
        """
        ...


@runtime_checkable
class IExternalGroupMappingRepository(Protocol):
    """Repository for external group mappings.

    Implementations must keep every statement confined to the given tenant
    and must make map_external_group idempotent at the storage layer.
    """

    async def map_external_group(
        self,
        group_id: GroupId,
        external_group: str,
        origin: str,
        tenant_id: TenantId,
    ) -> ExternalGroupMapping:
        """Map an external group to an internal group.

        Args:
            group_id: Internal group to map to
            external_group: External group name (any case)
            origin: Identity source the external group comes from
            tenant_id: Tenant that owns the group and the mapping

        Returns:
            The stored mapping, created now or found already present

        Raises:
            ValueError: If group_id, external_group or origin is empty
            GroupNotFoundError: If the group does not exist in the tenant
        """
        ...

    async def get_by_group_id(
        self, group_id: GroupId, origin: str, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """List the mappings of one group for one origin.

        Raises:
            GroupNotFoundError: If the group does not exist in the tenant
        """
        ...

    async def get_by_external_group(
        self, external_group: str, origin: str, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """List the mappings of an external group name, matched case-insensitively."""
        ...

    async def query(
        self, filter_expression: str | None, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """List mappings matching a filter expression.

        Raises:
            InvalidFilterError: If the filter expression is invalid
        """
        ...

    async def delete(self, filter_expression: str | None, tenant_id: TenantId) -> int:
        """Delete mappings matching a filter expression.

        Returns:
            Number of mappings removed

        Raises:
            InvalidFilterError: If the filter expression is invalid
        """
        ...

    async def unmap_external_group(
        self,
        group_id: GroupId,
        external_group: str,
        origin: str,
        tenant_id: TenantId,
    ) -> ExternalGroupMapping:
        """Remove one mapping and return it.

        Raises:
            GroupNotFoundError: If the group does not exist in the tenant
            MappingNotFoundError: If the mapping does not exist
        """
        ...

    async def unmap_all(
        self, group_id: GroupId, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """Remove every mapping of a group, across origins, and return them.

        Raises:
            GroupNotFoundError: If the group does not exist in the tenant
        """
        ...
