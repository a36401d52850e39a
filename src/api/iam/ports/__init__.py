"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and makes
the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    GroupNotFoundError,
    MappingNotFoundError,
    ResourceNotFoundError,
)
from iam.ports.repositories import IExternalGroupMappingRepository, IGroupRepository

__all__ = [
    "GroupNotFoundError",
    "IExternalGroupMappingRepository",
    "IGroupRepository",
    "MappingNotFoundError",
    "ResourceNotFoundError",
]
