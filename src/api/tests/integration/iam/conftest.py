"""Integration test fixtures for IAM bounded context.

Seeds two tenants, A and B, each owning groups g1, g2 and g3 plus a group
named "admins" in both, so tests can check that identically named groups
stay isolated.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.application.services import ExternalGroupService
from iam.domain.value_objects import GroupId, TenantId
from iam.infrastructure.external_group_repository import (
    ExternalGroupMappingRepository,
)
from iam.infrastructure.group_repository import GroupRepository
from iam.infrastructure.models import GroupModel, TenantModel


@dataclass(frozen=True)
class SeededTenant:
    """A seeded tenant and the ids of its groups, keyed by group name."""

    tenant_id: TenantId
    groups: dict[str, GroupId]


@pytest_asyncio.fixture
async def seeded_tenants(
    session_factory: async_sessionmaker[AsyncSession],
) -> tuple[SeededTenant, SeededTenant]:
    """Create tenants A and B with their groups."""
    seeded = []
    async with session_factory() as session:
        async with session.begin():
            for tenant_name in ("tenant-a", "tenant-b"):
                tenant_id = TenantId.generate()
                session.add(TenantModel(id=tenant_id.value, name=tenant_name))
                await session.flush()

                groups: dict[str, GroupId] = {}
                for group_name in ("g1", "g2", "g3", "admins"):
                    group_id = GroupId.generate()
                    session.add(
                        GroupModel(
                            id=group_id.value,
                            tenant_id=tenant_id.value,
                            name=group_name,
                        )
                    )
                    groups[group_name] = group_id
                seeded.append(SeededTenant(tenant_id=tenant_id, groups=groups))
    return seeded[0], seeded[1]


@pytest.fixture
def tenant_a(seeded_tenants: tuple[SeededTenant, SeededTenant]) -> SeededTenant:
    """The first seeded tenant."""
    return seeded_tenants[0]


@pytest.fixture
def tenant_b(seeded_tenants: tuple[SeededTenant, SeededTenant]) -> SeededTenant:
    """The second seeded tenant."""
    return seeded_tenants[1]


@pytest.fixture
def mapping_repository(async_session: AsyncSession) -> ExternalGroupMappingRepository:
    """Repository under test, sharing the test session."""
    return ExternalGroupMappingRepository(
        session=async_session,
        group_repository=GroupRepository(session=async_session),
    )


@pytest_asyncio.fixture
async def service_for(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[Callable[[SeededTenant], ExternalGroupService], None]:
    """Build services scoped to a tenant, each with its own session."""
    sessions: list[AsyncSession] = []

    def _build(tenant: SeededTenant) -> ExternalGroupService:
        session = session_factory()
        sessions.append(session)
        return ExternalGroupService(
            session=session,
            mapping_repository=ExternalGroupMappingRepository(
                session=session,
                group_repository=GroupRepository(session=session),
            ),
            scope_to_tenant=tenant.tenant_id,
        )

    yield _build

    for session in sessions:
        await session.close()
