"""Domain-Oriented Observability for IAM application layer."""

from iam.application.observability.external_group_service_probe import (
    DefaultExternalGroupServiceProbe,
    ExternalGroupServiceProbe,
)

__all__ = [
    "DefaultExternalGroupServiceProbe",
    "ExternalGroupServiceProbe",
]
