"""External group application service for IAM bounded context.

Orchestrates external group mapping use cases for a single tenant and owns
their transaction boundaries.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultExternalGroupServiceProbe,
    ExternalGroupServiceProbe,
)
from iam.domain.aggregates import ExternalGroupMapping
from iam.domain.exceptions import InvalidFilterError
from iam.domain.external_group_filter import parse_mapping_filter
from iam.domain.value_objects import GroupId, TenantId
from iam.ports.repositories import IExternalGroupMappingRepository


class ExternalGroupService:
    """Application service for external group mappings.

    An instance is scoped to one tenant for its whole lifetime (one request),
    so the tenant cannot change in the middle of an operation. Each public
    method runs as exactly one transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        mapping_repository: IExternalGroupMappingRepository,
        scope_to_tenant: TenantId,
        probe: ExternalGroupServiceProbe | None = None,
    ):
        """Initialize ExternalGroupService with dependencies.

        Args:
            session: Database session for transaction management
            mapping_repository: Repository for external group mappings
            scope_to_tenant: The tenant to which this service is scoped
            probe: Optional domain probe for observability
        """
        self._session = session
        self._mapping_repository = mapping_repository
        self._scope_to_tenant = scope_to_tenant
        self._probe = probe or DefaultExternalGroupServiceProbe()

    @property
    def tenant_id(self) -> TenantId:
        return self._scope_to_tenant

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[None]:
        """Run the enclosed block as one transaction, recording store failures."""
        try:
            async with self._session.begin():
                yield
        except SQLAlchemyError as e:
            self._probe.operation_failed(
                operation=operation,
                tenant_id=self._scope_to_tenant.value,
                error=str(e),
            )
            raise

    def _validate_filter(self, filter_expression: str) -> None:
        try:
            parse_mapping_filter(filter_expression)
        except InvalidFilterError as e:
            self._probe.invalid_filter(
                filter_expression=filter_expression,
                tenant_id=self._scope_to_tenant.value,
                error=str(e),
            )
            raise

    async def map_external_group(
        self,
        group_id: GroupId,
        external_group: str,
        origin: str,
    ) -> ExternalGroupMapping:
        """Map an external group to a group of the scoped tenant.

        Mapping the same group, name (in any case) and origin again returns
        the existing mapping.

        Raises:
            ValueError: If an argument is empty
            GroupNotFoundError: If the group is not in the scoped tenant
        """
        async with self._transaction("map_external_group"):
            mapping = await self._mapping_repository.map_external_group(
                group_id=group_id,
                external_group=external_group,
                origin=origin,
                tenant_id=self._scope_to_tenant,
            )

        self._probe.external_group_mapped(
            group_id=group_id.value,
            external_group=mapping.external_group,
            origin=origin,
            tenant_id=self._scope_to_tenant.value,
        )
        return mapping

    async def get_external_group_maps_by_group_id(
        self, group_id: GroupId, origin: str
    ) -> list[ExternalGroupMapping]:
        """List a group's mappings for one origin.

        Raises:
            GroupNotFoundError: If the group is not in the scoped tenant
        """
        async with self._transaction("get_external_group_maps_by_group_id"):
            return await self._mapping_repository.get_by_group_id(
                group_id=group_id,
                origin=origin,
                tenant_id=self._scope_to_tenant,
            )

    async def get_external_group_maps_by_external_group(
        self, external_group: str, origin: str
    ) -> list[ExternalGroupMapping]:
        """List the groups an external group name (any case) maps to."""
        async with self._transaction("get_external_group_maps_by_external_group"):
            return await self._mapping_repository.get_by_external_group(
                external_group=external_group,
                origin=origin,
                tenant_id=self._scope_to_tenant,
            )

    async def query(self, filter_expression: str = "") -> list[ExternalGroupMapping]:
        """List the scoped tenant's mappings matching a filter.

        Raises:
            InvalidFilterError: If the filter is invalid; nothing is read
        """
        self._validate_filter(filter_expression)
        async with self._transaction("query"):
            return await self._mapping_repository.query(
                filter_expression, tenant_id=self._scope_to_tenant
            )

    async def delete(self, filter_expression: str = "") -> int:
        """Delete the scoped tenant's mappings matching a filter.

        Returns:
            Number of mappings removed

        Raises:
            InvalidFilterError: If the filter is invalid; nothing is deleted
        """
        self._validate_filter(filter_expression)
        async with self._transaction("delete"):
            count = await self._mapping_repository.delete(
                filter_expression, tenant_id=self._scope_to_tenant
            )

        self._probe.external_groups_deleted(
            filter_expression=filter_expression,
            count=count,
            tenant_id=self._scope_to_tenant.value,
        )
        return count

    async def unmap_external_group(
        self,
        group_id: GroupId,
        external_group: str,
        origin: str,
    ) -> ExternalGroupMapping:
        """Remove one mapping of a group and return it.

        Raises:
            GroupNotFoundError: If the group is not in the scoped tenant
            MappingNotFoundError: If the mapping does not exist
        """
        async with self._transaction("unmap_external_group"):
            return await self._mapping_repository.unmap_external_group(
                group_id=group_id,
                external_group=external_group,
                origin=origin,
                tenant_id=self._scope_to_tenant,
            )

    async def unmap_all(self, group_id: GroupId) -> list[ExternalGroupMapping]:
        """Remove every mapping of a group and return them.

        Raises:
            GroupNotFoundError: If the group is not in the scoped tenant
        """
        async with self._transaction("unmap_all"):
            return await self._mapping_repository.unmap_all(
                group_id=group_id, tenant_id=self._scope_to_tenant
            )
