"""Pydantic models for external group mapping API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import ExternalGroupMapping


class MapExternalGroupRequest(BaseModel):
    """Request model for mapping an external group to an internal group.

    Tenant ID comes from the X-Tenant-ID header, never from the body.
    """

    group_id: str = Field(..., description="Internal group ID (ULID format)")
    external_group: str = Field(
        ...,
        description="External group name, e.g. an LDAP DN",
        min_length=1,
        max_length=1024,
    )
    origin: str = Field(
        ...,
        description="Identity provider the external group comes from",
        min_length=1,
        max_length=36,
    )


class ExternalGroupMappingResponse(BaseModel):
    """Response model for an external group mapping."""

    id: str = Field(..., description="Mapping ID (ULID format)")
    group_id: str = Field(..., description="Internal group ID")
    external_group: str = Field(..., description="Stored (lower-case) name")
    origin: str = Field(..., description="Identity provider key")
    created_at: datetime | None = Field(None, description="When the mapping was created")

    @classmethod
    def from_domain(cls, mapping: ExternalGroupMapping) -> ExternalGroupMappingResponse:
        """Convert domain ExternalGroupMapping to API response.

        Args:
            mapping: ExternalGroupMapping domain aggregate

        Returns:
            ExternalGroupMappingResponse
        """
        return cls(
            id=mapping.id.value,
            group_id=mapping.group_id.value,
            external_group=mapping.external_group,
            origin=mapping.origin,
            created_at=mapping.created_at,
        )


class DeleteExternalGroupsResponse(BaseModel):
    """Response model for filtered deletion."""

    deleted: int = Field(..., description="Number of mappings removed", ge=0)
