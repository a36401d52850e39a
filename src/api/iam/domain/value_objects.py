"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID


def _validated_ulid(value: str, kind: str) -> str:
    """Return the canonical (uppercase) form of a ULID string.

    Raises:
        ValueError: If value is not a valid ULID
    """
    try:
        return str(ULID.from_str(value.upper()))
    except (ValueError, TypeError, AttributeError) as e:
        raise ValueError(f"Invalid {kind}: {value}") from e


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant, the top-level isolation boundary.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Accepts case-insensitive input (per Crockford's Base32) and stores
        the canonical uppercase form.

        Raises:
            ValueError: If value is not a valid ULID
        """
        return cls(value=_validated_ulid(value, "TenantId"))


@dataclass(frozen=True)
class GroupId:
    """Identifier for an internal Group.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> GroupId:
        """Generate a new GroupId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> GroupId:
        """Create GroupId from string value.

        Args:
            value: ULID string

        Returns:
            GroupId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        return cls(value=_validated_ulid(value, "GroupId"))


@dataclass(frozen=True)
class ExternalGroupMappingId:
    """Opaque identity of a stored external group mapping."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> ExternalGroupMappingId:
        """Generate a new ExternalGroupMappingId using ULID."""
        return cls(value=str(ULID()))


class OriginKeys:
    """Well-known identity source keys.

    Origins are open-ended (any integration may contribute mappings under
    its own key); these are the ones the platform itself knows about.
    """

    UAA = "uaa"
    LDAP = "ldap"
    SAML = "saml"
    OIDC = "oidc"
    KEYSTONE = "keystone"


def normalize_external_group(name: str) -> str:
    """Return the canonical stored form of an external group name.

    External directories compare group names case-insensitively, so names
    are stored and compared in lower case.
    """
    return name.lower()


def normalize_group_id(value: str) -> str:
    """Return the canonical (upper-case Crockford Base32) form of a group id.

    Partial ids are accepted, so prefix filters normalize the same way.
    """
    return value.upper()
