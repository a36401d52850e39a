"""Tenant context FastAPI dependency.

Resolves tenant context from the X-Tenant-ID request header. Every
tenant-scoped route depends on this; a missing or malformed header is a
400, never a fallback to some default tenant.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        # tenant.tenant_id is the canonical ULID string
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from iam.domain.value_objects import TenantId
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext


def get_tenant_context_probe() -> TenantContextProbe:
    """Get TenantContextProbe instance."""
    return DefaultTenantContextProbe()


def resolve_tenant_context(
    x_tenant_id: str | None,
    probe: TenantContextProbe,
) -> TenantContext:
    """Validate the X-Tenant-ID header value and build the tenant context.

    Accepts case-insensitive ULIDs and returns the canonical uppercase form.

    Args:
        x_tenant_id: The X-Tenant-ID header value, or None if missing.
        probe: Domain probe for observability.

    Returns:
        TenantContext with the resolved tenant ID.

    Raises:
        HTTPException 400: If the header is missing or not a valid ULID.
    """
    if x_tenant_id is None or not x_tenant_id.strip():
        probe.tenant_header_missing()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header is required",
        )

    try:
        tenant_id = TenantId.from_string(x_tenant_id.strip())
    except ValueError:
        probe.invalid_tenant_id_format(raw_value=x_tenant_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"X-Tenant-ID must be a valid ULID format, got: '{x_tenant_id}'",
        )

    probe.tenant_resolved_from_header(tenant_id=tenant_id.value)
    return TenantContext(tenant_id=tenant_id.value, source="header")


def get_tenant_context(
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    x_tenant_id: Annotated[str | None, Header()] = None,
) -> TenantContext:
    """FastAPI dependency resolving the tenant from the X-Tenant-ID header."""
    return resolve_tenant_context(x_tenant_id=x_tenant_id, probe=probe)
