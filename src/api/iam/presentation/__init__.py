"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate following vertical
slicing and DDD principles. Each aggregate package contains its own routes
and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import external_groups

# Tenant scoping is enforced per-endpoint through the service dependency,
# not at the router level.
router = APIRouter(
    prefix="/iam",
    tags=["iam"],
)

router.include_router(external_groups.router)

__all__ = ["router"]
