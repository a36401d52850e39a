"""Domain probe for tenant context resolution.

Records how the tenant of a request was resolved, or why it could not be.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context resolution."""

    def tenant_resolved_from_header(self, tenant_id: str) -> None:
        """Record that the tenant was resolved from the X-Tenant-ID header."""
        ...

    def tenant_header_missing(self) -> None:
        """Record that a request arrived without the X-Tenant-ID header."""
        ...

    def invalid_tenant_id_format(self, raw_value: str) -> None:
        """Record that the X-Tenant-ID header was not a valid ULID."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context metadata as kwargs for logging.

        Args:
            exclude: Keys passed explicitly by the caller, left out to avoid
                duplicate keyword arguments.
        """
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_resolved_from_header(self, tenant_id: str) -> None:
        """Record that the tenant was resolved from the X-Tenant-ID header."""
        self._logger.debug(
            "tenant_resolved_from_header",
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"tenant_id"}),
        )

    def tenant_header_missing(self) -> None:
        """Record that a request arrived without the X-Tenant-ID header."""
        self._logger.warning(
            "tenant_header_missing",
            **self._get_context_kwargs(),
        )

    def invalid_tenant_id_format(self, raw_value: str) -> None:
        """Record that the X-Tenant-ID header was not a valid ULID."""
        self._logger.warning(
            "invalid_tenant_id_format",
            raw_value=raw_value,
            **self._get_context_kwargs(exclude={"raw_value"}),
        )
