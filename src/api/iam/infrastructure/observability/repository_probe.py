"""Domain probes for IAM repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events of group lookups and external group mapping
persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class GroupRepositoryProbe(Protocol):
    """Domain probe for group registry lookups."""

    def group_retrieved(self, group_id: str, tenant_id: str) -> None:
        """Record that a group was resolved within a tenant."""
        ...

    def group_not_found(self, group_id: str, tenant_id: str) -> None:
        """Record that a group was not found within a tenant."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupRepositoryProbe:
    """Default implementation of GroupRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupRepositoryProbe(logger=self._logger, context=context)

    def group_retrieved(self, group_id: str, tenant_id: str) -> None:
        """Record that a group was resolved within a tenant."""
        self._logger.debug(
            "group_retrieved",
            group_id=group_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"group_id", "tenant_id"}),
        )

    def group_not_found(self, group_id: str, tenant_id: str) -> None:
        """Record that a group was not found within a tenant."""
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"group_id", "tenant_id"}),
        )


class ExternalGroupMappingRepositoryProbe(Protocol):
    """Domain probe for external group mapping persistence."""

    def mapping_created(
        self, group_id: str, external_group: str, origin: str, tenant_id: str
    ) -> None:
        """Record that a new mapping row was inserted."""
        ...

    def mapping_already_exists(
        self, group_id: str, external_group: str, origin: str, tenant_id: str
    ) -> None:
        """Record that a map request matched an existing mapping."""
        ...

    def mappings_retrieved(self, count: int, tenant_id: str) -> None:
        """Record that mappings were read."""
        ...

    def mappings_deleted(self, count: int, tenant_id: str) -> None:
        """Record that mappings were removed."""
        ...

    def mappings_unmapped(self, group_id: str, count: int, tenant_id: str) -> None:
        """Record that mappings of one group were removed."""
        ...

    def group_not_found(self, group_id: str, tenant_id: str) -> None:
        """Record that a mapping operation referenced an unknown group."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> ExternalGroupMappingRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultExternalGroupMappingRepositoryProbe:
    """Default implementation of ExternalGroupMappingRepositoryProbe using structlog."""

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
    ) -> DefaultExternalGroupMappingRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultExternalGroupMappingRepositoryProbe(
            logger=self._logger, context=context
        )

    def mapping_created(
        self, group_id: str, external_group: str, origin: str, tenant_id: str
    ) -> None:
        """Record that a new mapping row was inserted."""
        self._logger.info(
            "external_group_mapping_created",
            group_id=group_id,
            external_group=external_group,
            origin=origin,
            tenant_id=tenant_id,
            **self._get_context_kwargs(
                exclude={"group_id", "external_group", "origin", "tenant_id"}
            ),
        )

    def mapping_already_exists(
        self, group_id: str, external_group: str, origin: str, tenant_id: str
    ) -> None:
        """Record that a map request matched an existing mapping."""
        self._logger.debug(
            "external_group_mapping_already_exists",
            group_id=group_id,
            external_group=external_group,
            origin=origin,
            tenant_id=tenant_id,
            **self._get_context_kwargs(
                exclude={"group_id", "external_group", "origin", "tenant_id"}
            ),
        )

    def mappings_retrieved(self, count: int, tenant_id: str) -> None:
        """Record that mappings were read."""
        self._logger.debug(
            "external_group_mappings_retrieved",
            count=count,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"count", "tenant_id"}),
        )

    def mappings_deleted(self, count: int, tenant_id: str) -> None:
        """Record that mappings were removed."""
        self._logger.info(
            "external_group_mappings_deleted",
            count=count,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"count", "tenant_id"}),
        )

    def mappings_unmapped(self, group_id: str, count: int, tenant_id: str) -> None:
        """Record that mappings of one group were removed."""
        self._logger.info(
            "external_group_mappings_unmapped",
            group_id=group_id,
            count=count,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"group_id", "count", "tenant_id"}),
        )

    def group_not_found(self, group_id: str, tenant_id: str) -> None:
        """Record that a mapping operation referenced an unknown group."""
        self._logger.debug(
            "external_group_mapping_group_not_found",
            group_id=group_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(exclude={"group_id", "tenant_id"}),
        )
