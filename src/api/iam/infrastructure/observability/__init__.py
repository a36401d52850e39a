"""Observability for IAM infrastructure layer."""

from iam.infrastructure.observability.repository_probe import (
    DefaultExternalGroupMappingRepositoryProbe,
    DefaultGroupRepositoryProbe,
    ExternalGroupMappingRepositoryProbe,
    GroupRepositoryProbe,
)

__all__ = [
    "DefaultExternalGroupMappingRepositoryProbe",
    "DefaultGroupRepositoryProbe",
    "ExternalGroupMappingRepositoryProbe",
    "GroupRepositoryProbe",
]
