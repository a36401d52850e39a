"""Application services for IAM bounded context.

Application services orchestrate repositories to fulfill use cases and own
the transaction boundaries. They are the "front door" to the IAM context.
"""

from iam.application.services.external_group_service import ExternalGroupService

__all__ = [
    "ExternalGroupService",
]
