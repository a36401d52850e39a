"""SQL implementation of IExternalGroupMappingRepository.

Mappings live in the external_group_mappings table. Writes rely on the
table's unique constraint: mapping an external group is a single
INSERT ... ON CONFLICT DO NOTHING followed by a re-select of the unique
tuple, so concurrent requests for the same mapping cannot create duplicates.

The repository never opens or commits transactions. The application
service wraps each operation in one `session.begin()` block.
"""

from __future__ import annotations

from typing import Any, Callable

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import ExternalGroupMapping
from iam.domain.external_group_filter import parse_mapping_filter
from iam.domain.value_objects import (
    ExternalGroupMappingId,
    GroupId,
    TenantId,
    normalize_external_group,
)
from iam.infrastructure.external_group_filter import tenant_scoped_clause
from iam.infrastructure.models import (
    EXTERNAL_GROUP_MAPPING_UNIQUE_COLUMNS,
    ExternalGroupMappingModel,
)
from iam.infrastructure.observability import (
    DefaultExternalGroupMappingRepositoryProbe,
    ExternalGroupMappingRepositoryProbe,
)
from iam.ports.exceptions import GroupNotFoundError, MappingNotFoundError
from iam.ports.repositories import IExternalGroupMappingRepository, IGroupRepository

# Dialects offering INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}

_ORDERING = (ExternalGroupMappingModel.created_at, ExternalGroupMappingModel.id)


def _require(value: str, name: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} must not be empty")


def _to_domain(model: ExternalGroupMappingModel) -> ExternalGroupMapping:
    return ExternalGroupMapping(
        id=ExternalGroupMappingId(value=model.id),
        tenant_id=TenantId(value=model.tenant_id),
        group_id=GroupId(value=model.group_id),
        external_group=model.external_group,
        origin=model.origin,
        created_at=model.created_at,
    )


class ExternalGroupMappingRepository(IExternalGroupMappingRepository):
    """Tenant-scoped store of external group mappings.

    Every statement carries a `tenant_id = :tenant` predicate. Operations
    that name a group first resolve it through the group repository in the
    same tenant, so a group from another tenant is indistinguishable from
    a missing one.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IGroupRepository,
        probe: ExternalGroupMappingRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with its collaborators.

        Args:
            session: AsyncSession from FastAPI dependency injection
            group_repository: Group registry used to validate group ids
            probe: Optional domain probe for observability
        """
        self._session = session
        self._groups = group_repository
        self._probe = probe or DefaultExternalGroupMappingRepositoryProbe()

    async def map_external_group(
        self,
        group_id: GroupId,
        external_group: str,
        origin: str,
        tenant_id: TenantId,
    ) -> ExternalGroupMapping:
        """Map an external group to an internal group, idempotently.

        Args:
            group_id: Internal group to map to
            external_group: External group name; stored lower-cased
            origin: Identity source the external group comes from
            tenant_id: Tenant that owns the group and the mapping

        Returns:
            The stored mapping, whether inserted now or already present

        Raises:
            ValueError: If group_id, external_group or origin is empty
            GroupNotFoundError: If the group does not exist in the tenant
        """
        _require(group_id.value, "group_id")
        _require(external_group, "external_group")
        _require(origin, "origin")
        await self._require_group(group_id, tenant_id)

        normalized = normalize_external_group(external_group)
        stmt = (
            self._insert()
            .values(
                id=ExternalGroupMappingId.generate().value,
                tenant_id=tenant_id.value,
                group_id=group_id.value,
                external_group=normalized,
                origin=origin,
            )
            .on_conflict_do_nothing(
                index_elements=list(EXTERNAL_GROUP_MAPPING_UNIQUE_COLUMNS)
            )
            .returning(ExternalGroupMappingModel.id)
        )
        result = await self._session.execute(stmt)
        inserted_id = result.scalar_one_or_none()

        # Re-select by the unique tuple: covers both the fresh insert and a
        # row written earlier (possibly by a concurrent transaction).
        select_stmt = select(ExternalGroupMappingModel).where(
            ExternalGroupMappingModel.tenant_id == tenant_id.value,
            ExternalGroupMappingModel.group_id == group_id.value,
            ExternalGroupMappingModel.external_group == normalized,
            ExternalGroupMappingModel.origin == origin,
        )
        model = (await self._session.execute(select_stmt)).scalar_one()

        if inserted_id is None:
            self._probe.mapping_already_exists(
                group_id.value, normalized, origin, tenant_id.value
            )
        else:
            self._probe.mapping_created(
                group_id.value, normalized, origin, tenant_id.value
            )
        return _to_domain(model)

    async def get_by_group_id(
        self, group_id: GroupId, origin: str, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """List the mappings of one group for one origin.

        Raises:
            GroupNotFoundError: If the group does not exist in the tenant
        """
        await self._require_group(group_id, tenant_id)

        stmt = (
            select(ExternalGroupMappingModel)
            .where(
                ExternalGroupMappingModel.tenant_id == tenant_id.value,
                ExternalGroupMappingModel.group_id == group_id.value,
                ExternalGroupMappingModel.origin == origin,
            )
            .order_by(*_ORDERING)
        )
        return await self._fetch(stmt, tenant_id)

    async def get_by_external_group(
        self, external_group: str, origin: str, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """List the mappings of an external group name.

        The name is normalized before comparison, so any casing finds the
        stored mapping; results carry the stored lower-case name.
        """
        stmt = (
            select(ExternalGroupMappingModel)
            .where(
                ExternalGroupMappingModel.tenant_id == tenant_id.value,
                ExternalGroupMappingModel.external_group
                == normalize_external_group(external_group),
                ExternalGroupMappingModel.origin == origin,
            )
            .order_by(*_ORDERING)
        )
        return await self._fetch(stmt, tenant_id)

    async def query(
        self, filter_expression: str | None, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """List mappings of the tenant matching a filter expression.

        Raises:
            InvalidFilterError: If the filter expression is invalid
        """
        mapping_filter = parse_mapping_filter(filter_expression)
        stmt = (
            select(ExternalGroupMappingModel)
            .where(tenant_scoped_clause(mapping_filter, tenant_id))
            .order_by(*_ORDERING)
        )
        return await self._fetch(stmt, tenant_id)

    async def delete(self, filter_expression: str | None, tenant_id: TenantId) -> int:
        """Delete mappings of the tenant matching a filter expression.

        An empty expression removes every mapping of the tenant and nothing
        outside it.

        Returns:
            Number of mappings removed

        Raises:
            InvalidFilterError: If the filter expression is invalid
        """
        mapping_filter = parse_mapping_filter(filter_expression)
        stmt = (
            delete(ExternalGroupMappingModel)
            .where(tenant_scoped_clause(mapping_filter, tenant_id))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        count = result.rowcount
        self._probe.mappings_deleted(count, tenant_id.value)
        return count

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
        await self._require_group(group_id, tenant_id)

        normalized = normalize_external_group(external_group)
        removed = await self._delete_returning(
            ExternalGroupMappingModel.tenant_id == tenant_id.value,
            ExternalGroupMappingModel.group_id == group_id.value,
            ExternalGroupMappingModel.external_group == normalized,
            ExternalGroupMappingModel.origin == origin,
        )
        if not removed:
            raise MappingNotFoundError(group_id.value, normalized, origin)

        self._probe.mappings_unmapped(group_id.value, len(removed), tenant_id.value)
        return removed[0]

    async def unmap_all(
        self, group_id: GroupId, tenant_id: TenantId
    ) -> list[ExternalGroupMapping]:
        """Remove every mapping of a group, across origins, and return them.

        Raises:
            GroupNotFoundError: If the group does not exist in the tenant
        """
        await self._require_group(group_id, tenant_id)

        removed = await self._delete_returning(
            ExternalGroupMappingModel.tenant_id == tenant_id.value,
            ExternalGroupMappingModel.group_id == group_id.value,
        )
        self._probe.mappings_unmapped(group_id.value, len(removed), tenant_id.value)
        return removed

    async def _require_group(self, group_id: GroupId, tenant_id: TenantId) -> None:
        group = await self._groups.get_by_id(group_id, tenant_id)
        if group is None:
            self._probe.group_not_found(group_id.value, tenant_id.value)
            raise GroupNotFoundError(group_id.value, tenant_id.value)

    async def _fetch(self, stmt: Any, tenant_id: TenantId) -> list[ExternalGroupMapping]:
        result = await self._session.execute(stmt)
        mappings = [_to_domain(model) for model in result.scalars().all()]
        self._probe.mappings_retrieved(len(mappings), tenant_id.value)
        return mappings

    async def _delete_returning(self, *criteria: Any) -> list[ExternalGroupMapping]:
        stmt = (
            delete(ExternalGroupMappingModel)
            .where(*criteria)
            .returning(ExternalGroupMappingModel)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        models = sorted(result.scalars().all(), key=lambda m: (m.created_at, m.id))
        return [_to_domain(model) for model in models]

    def _insert(self) -> Any:
        dialect = self._session.get_bind().dialect.name
        try:
            return _UPSERT_INSERTS[dialect](ExternalGroupMappingModel)
        except KeyError:
            raise NotImplementedError(
                f"Idempotent mapping inserts are not supported on '{dialect}'"
            ) from None
