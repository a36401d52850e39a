"""HTTP routes for external group mappings.

Every route is tenant-scoped through the X-Tenant-ID header (see
iam.dependencies.tenant_context); the service it receives cannot read or
write another tenant's mappings.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import ExternalGroupService
from iam.dependencies.external_group import get_external_group_service
from iam.domain.exceptions import InvalidFilterError
from iam.domain.value_objects import GroupId
from iam.ports.exceptions import GroupNotFoundError, MappingNotFoundError
from iam.presentation.external_groups.models import (
    DeleteExternalGroupsResponse,
    ExternalGroupMappingResponse,
    MapExternalGroupRequest,
)

router = APIRouter(tags=["external-groups"])


def _parse_group_id(group_id: str) -> GroupId:
    try:
        return GroupId.from_string(group_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid group ID format",
        )


@router.post(
    "/external-groups",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "External group mapped (or already mapped)"},
        400: {"description": "Invalid input or missing tenant"},
        404: {"description": "Group not found in tenant"},
        500: {"description": "Internal server error"},
    },
)
async def map_external_group(
    request: MapExternalGroupRequest,
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
) -> ExternalGroupMappingResponse:
    """Map an external group to an internal group.

    Mapping the same triple again, in any case, returns the existing mapping.

    Args:
        request: Group ID, external group name and origin
        service: External group service, tenant scoped

    Returns:
        ExternalGroupMappingResponse with the stored mapping

    Raises:
        HTTPException: 400 if group ID or a field is invalid
        HTTPException: 404 if the group is not in the tenant
        HTTPException: 500 for unexpected errors
    """
    group_id = _parse_group_id(request.group_id)

    try:
        mapping = await service.map_external_group(
            group_id=group_id,
            external_group=request.external_group,
            origin=request.origin,
        )
        return ExternalGroupMappingResponse.from_domain(mapping)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to map external group",
        )


@router.get("/external-groups")
async def query_external_groups(
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
    filter: Annotated[str, Query(description="Filter expression")] = "",
) -> list[ExternalGroupMappingResponse]:
    """List the tenant's mappings matching a filter.

    An empty filter lists every mapping of the tenant. Example filter:
    `origin eq "ldap" and externalGroup sw "cn=dev"`.

    Raises:
        HTTPException: 400 if the filter is invalid
        HTTPException: 500 for unexpected errors
    """
    try:
        mappings = await service.query(filter)
        return [ExternalGroupMappingResponse.from_domain(m) for m in mappings]

    except InvalidFilterError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to query external groups",
        )


@router.delete("/external-groups")
async def delete_external_groups(
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
    filter: Annotated[str, Query(description="Filter expression")] = "",
) -> DeleteExternalGroupsResponse:
    """Delete the tenant's mappings matching a filter.

    An empty filter removes every mapping of the tenant, and only those.

    Raises:
        HTTPException: 400 if the filter is invalid
        HTTPException: 500 for unexpected errors
    """
    try:
        deleted = await service.delete(filter)
        return DeleteExternalGroupsResponse(deleted=deleted)

    except InvalidFilterError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete external groups",
        )


@router.get("/external-groups/by-name")
async def get_external_group_maps_by_name(
    external_group: Annotated[str, Query(min_length=1)],
    origin: Annotated[str, Query(min_length=1)],
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
) -> list[ExternalGroupMappingResponse]:
    """List the groups an external group name maps to (name matched in any case)."""
    try:
        mappings = await service.get_external_group_maps_by_external_group(
            external_group=external_group, origin=origin
        )
        return [ExternalGroupMappingResponse.from_domain(m) for m in mappings]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get external group mappings",
        )


@router.get("/groups/{group_id}/external-groups")
async def get_external_group_maps_by_group(
    group_id: str,
    origin: Annotated[str, Query(min_length=1)],
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
) -> list[ExternalGroupMappingResponse]:
    """List a group's mappings for one origin.

    Raises:
        HTTPException: 400 if group ID is invalid
        HTTPException: 404 if the group is not in the tenant
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = _parse_group_id(group_id)

    try:
        mappings = await service.get_external_group_maps_by_group_id(
            group_id=group_id_obj, origin=origin
        )
        return [ExternalGroupMappingResponse.from_domain(m) for m in mappings]

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get external group mappings",
        )


@router.delete("/groups/{group_id}/external-groups/all")
async def unmap_all_external_groups(
    group_id: str,
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
) -> list[ExternalGroupMappingResponse]:
    """Remove every external group mapping of a group.

    Raises:
        HTTPException: 400 if group ID is invalid
        HTTPException: 404 if the group is not in the tenant
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = _parse_group_id(group_id)

    try:
        removed = await service.unmap_all(group_id=group_id_obj)
        return [ExternalGroupMappingResponse.from_domain(m) for m in removed]

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unmap external groups",
        )


@router.delete("/groups/{group_id}/external-groups")
async def unmap_external_group(
    group_id: str,
    external_group: Annotated[str, Query(min_length=1)],
    origin: Annotated[str, Query(min_length=1)],
    service: Annotated[ExternalGroupService, Depends(get_external_group_service)],
) -> ExternalGroupMappingResponse:
    """Remove one external group mapping of a group.

    Raises:
        HTTPException: 400 if group ID is invalid
        HTTPException: 404 if the group or the mapping does not exist
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = _parse_group_id(group_id)

    try:
        removed = await service.unmap_external_group(
            group_id=group_id_obj,
            external_group=external_group,
            origin=origin,
        )
        return ExternalGroupMappingResponse.from_domain(removed)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except MappingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="External group mapping not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unmap external group",
        )
