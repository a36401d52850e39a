"""Port-level exceptions for IAM bounded context.

These exceptions represent errors that can occur during repository
operations. They are caught and translated by the presentation layer.
"""


class ResourceNotFoundError(Exception):
    """Base class for lookups that found nothing inside the caller's tenant."""

    pass


class GroupNotFoundError(ResourceNotFoundError):
    """Raised when a group does not exist in the caller's tenant.

    A group that exists only in a different tenant is reported the same
    way, so callers cannot probe other tenants for group identifiers.
    """

    def __init__(self, group_id: str, tenant_id: str):
        super().__init__(f"Group {group_id} not found in tenant {tenant_id}")
        self.group_id = group_id
        self.tenant_id = tenant_id


class MappingNotFoundError(ResourceNotFoundError):
    """Raised when unmapping an external group that was never mapped."""

    def __init__(self, group_id: str, external_group: str, origin: str):
        super().__init__(
            f"No mapping of '{external_group}' ({origin}) to group {group_id}"
        )
        self.group_id = group_id
        self.external_group = external_group
        self.origin = origin
