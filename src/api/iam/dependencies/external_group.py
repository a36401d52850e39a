"""FastAPI dependencies for external group mappings."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultExternalGroupServiceProbe,
    ExternalGroupServiceProbe,
)
from iam.application.services import ExternalGroupService
from iam.dependencies.tenant_context import get_tenant_context
from iam.domain.value_objects import TenantId
from iam.infrastructure.external_group_repository import (
    ExternalGroupMappingRepository,
)
from iam.infrastructure.group_repository import GroupRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.middleware.tenant_context import TenantContext


def get_external_group_service_probe() -> ExternalGroupServiceProbe:
    """Get ExternalGroupServiceProbe instance."""
    return DefaultExternalGroupServiceProbe()


def get_group_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> GroupRepository:
    """Get GroupRepository instance bound to the request session."""
    return GroupRepository(session=session)


def get_external_group_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    group_repo: Annotated[GroupRepository, Depends(get_group_repository)],
) -> ExternalGroupMappingRepository:
    """Get ExternalGroupMappingRepository instance.

    Args:
        session: Async database session (shared with the group repository
            via FastAPI dependency caching)
        group_repo: Group registry used to validate group ids
    """
    return ExternalGroupMappingRepository(
        session=session, group_repository=group_repo
    )


def get_external_group_service(
    mapping_repo: Annotated[
        ExternalGroupMappingRepository, Depends(get_external_group_repository)
    ],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    probe: Annotated[
        ExternalGroupServiceProbe, Depends(get_external_group_service_probe)
    ],
) -> ExternalGroupService:
    """Get ExternalGroupService scoped to the request's tenant.

    Args:
        mapping_repo: External group mapping repository
        session: Database session for transaction management
        tenant: Tenant resolved from the X-Tenant-ID header
        probe: Service probe for observability

    Returns:
        ExternalGroupService instance
    """
    return ExternalGroupService(
        session=session,
        mapping_repository=mapping_repo,
        scope_to_tenant=TenantId(value=tenant.tenant_id),
        probe=probe,
    )
