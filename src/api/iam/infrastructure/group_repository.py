"""PostgreSQL implementation of IGroupRepository.

Read-only, tenant-scoped access to the group registry's groups table.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId, TenantId
from iam.infrastructure.models import GroupModel
from iam.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from iam.ports.repositories import IGroupRepository


class GroupRepository(IGroupRepository):
    """Repository resolving groups inside a tenant."""

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    async def get_by_id(self, group_id: GroupId, tenant_id: TenantId) -> Group | None:
        """Fetch a group, filtering on both id and tenant.

        A group id that exists only in another tenant yields None, exactly
        like an id that does not exist at all.

        Args:
            group_id: The unique identifier of the group
            tenant_id: The tenant to search within

        Returns:
            The Group, or None if not found in the tenant
        """
        stmt = select(GroupModel).where(
            GroupModel.id == group_id.value,
            GroupModel.tenant_id == tenant_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.group_not_found(group_id.value, tenant_id.value)
            return None

        self._probe.group_retrieved(model.id, model.tenant_id)
        return Group(
            id=GroupId(value=model.id),
            tenant_id=TenantId(value=model.tenant_id),
            name=model.name,
        )
