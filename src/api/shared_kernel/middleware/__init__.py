"""Shared middleware for cross-cutting concerns.

Holds the tenant context value object shared across bounded contexts.
"""

from shared_kernel.middleware.tenant_context import TenantContext

__all__ = ["TenantContext"]
