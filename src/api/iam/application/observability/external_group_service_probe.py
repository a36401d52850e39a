"""Protocol for external group application service observability.

Defines the interface for domain probes that capture application-level
events of external group mapping use cases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ExternalGroupServiceProbe(Protocol):
    """Domain probe for external group application service operations."""

    def external_group_mapped(
        self,
        group_id: str,
        external_group: str,
        origin: str,
        tenant_id: str,
    ) -> None:
        """Record that a map request completed."""
        ...

    def external_groups_deleted(
        self,
        filter_expression: str,
        count: int,
        tenant_id: str,
    ) -> None:
        """Record that a filtered delete completed."""
        ...

    def invalid_filter(
        self,
        filter_expression: str,
        tenant_id: str,
        error: str,
    ) -> None:
        """Record that a filter expression was rejected."""
        ...

    def operation_failed(
        self,
        operation: str,
        tenant_id: str,
        error: str,
    ) -> None:
        """Record that an operation failed in the storage layer."""
        ...

    def with_context(self, context: ObservationContext) -> ExternalGroupServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultExternalGroupServiceProbe:
    """Default implementation of ExternalGroupServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultExternalGroupServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultExternalGroupServiceProbe(logger=self._logger, context=context)

    def external_group_mapped(
        self,
        group_id: str,
        external_group: str,
        origin: str,
        tenant_id: str,
    ) -> None:
        """Record that a map request completed."""
        self._logger.info(
            "external_group_mapped",
            group_id=group_id,
            external_group=external_group,
            origin=origin,
            tenant_id=tenant_id,
            **self._get_context_kwargs(
                exclude={"group_id", "external_group", "origin", "tenant_id"}
            ),
        )

    def external_groups_deleted(
        self,
        filter_expression: str,
        count: int,
        tenant_id: str,
    ) -> None:
        """Record that a filtered delete completed."""
        self._logger.info(
            "external_groups_deleted",
            filter=filter_expression,
            count=count,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"filter", "count", "tenant_id"}),
        )

    def invalid_filter(
        self,
        filter_expression: str,
        tenant_id: str,
        error: str,
    ) -> None:
        """Record that a filter expression was rejected."""
        self._logger.warning(
            "external_group_filter_invalid",
            filter=filter_expression,
            tenant_id=tenant_id,
            error=error,
            **self._get_context_kwargs(exclude={"filter", "tenant_id", "error"}),
        )

    def operation_failed(
        self,
        operation: str,
        tenant_id: str,
        error: str,
    ) -> None:
        """Record that an operation failed in the storage layer."""
        self._logger.error(
            "external_group_operation_failed",
            operation=operation,
            tenant_id=tenant_id,
            error=error,
            **self._get_context_kwargs(exclude={"operation", "tenant_id", "error"}),
        )
