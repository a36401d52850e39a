"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that is included with every probe
    event, so that mapping writes and deletes can be correlated with the
    request and tenant that issued them.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        tenant_id: Tenant the operation is scoped to (if applicable).
        origin: External identity source involved (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", tenant_id="01H...")
        probe = DefaultExternalGroupMappingRepositoryProbe().with_context(context)
    """

    request_id: str | None = None
    tenant_id: str | None = None
    origin: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        if self.origin is not None:
            result["origin"] = self.origin
        result.update(self.extra)
        return result

    def with_origin(self, origin: str) -> ObservationContext:
        """Create a new context with the origin set."""
        return replace(self, origin=origin)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
