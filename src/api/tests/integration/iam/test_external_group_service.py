"""Integration tests for ExternalGroupService.

Each service owns its session and commits per operation, so these tests
also check that results are visible to other sessions after commit.
"""

from __future__ import annotations

import pytest

from iam.domain.exceptions import InvalidFilterError
from iam.ports.exceptions import GroupNotFoundError

pytestmark = pytest.mark.integration


class TestRoundTrip:
    """Mappings written by one request are read by the next."""

    @pytest.mark.asyncio
    async def test_three_groups_round_trip(self, service_for, tenant_a):
        """Each external name maps back to exactly the three groups."""
        groups = [tenant_a.groups[name] for name in ("g1", "g2", "g3")]
        writer = service_for(tenant_a)
        for group_id in groups:
            for external_group in ("eng", "hr", "mgmt"):
                await writer.map_external_group(group_id, external_group, "ldap")

        reader = service_for(tenant_a)
        for external_group in ("eng", "hr", "mgmt"):
            mappings = await reader.get_external_group_maps_by_external_group(
                external_group, "ldap"
            )
            assert {m.group_id for m in mappings} == set(groups)

        for group_id in groups:
            mappings = await reader.get_external_group_maps_by_group_id(
                group_id, "ldap"
            )
            assert sorted(m.external_group for m in mappings) == [
                "eng",
                "hr",
                "mgmt",
            ]

        assert len(await reader.query()) == 9

    @pytest.mark.asyncio
    async def test_repeat_map_is_idempotent_across_sessions(
        self, service_for, tenant_a
    ):
        """Re-mapping from a new request does not duplicate the row."""
        g1 = tenant_a.groups["g1"]
        first = await service_for(tenant_a).map_external_group(g1, "cn=Ops", "ldap")
        second = await service_for(tenant_a).map_external_group(g1, "CN=OPS", "ldap")

        assert first.id == second.id
        assert len(await service_for(tenant_a).query()) == 1


class TestScopedService:
    """A service only ever acts on its own tenant."""

    @pytest.mark.asyncio
    async def test_delete_leaves_other_tenant_untouched(
        self, service_for, tenant_a, tenant_b
    ):
        """Deleting everything in A leaves B's mappings intact."""
        for tenant in (tenant_a, tenant_b):
            await service_for(tenant).map_external_group(
                tenant.groups["admins"], "cn=admins", "ldap"
            )

        deleted = await service_for(tenant_a).delete()

        assert deleted == 1
        assert await service_for(tenant_a).query() == []
        remaining = await service_for(tenant_b).query()
        assert [m.tenant_id for m in remaining] == [tenant_b.tenant_id]

    @pytest.mark.asyncio
    async def test_foreign_group_rejected(self, service_for, tenant_a, tenant_b):
        """Tenant B cannot map tenant A's group."""
        with pytest.raises(GroupNotFoundError):
            await service_for(tenant_b).map_external_group(
                tenant_a.groups["g1"], "cn=x", "ldap"
            )

        assert await service_for(tenant_a).query() == []

    @pytest.mark.asyncio
    async def test_invalid_filter_keeps_rows(self, service_for, tenant_a):
        """An invalid delete filter removes nothing."""
        service = service_for(tenant_a)
        await service.map_external_group(tenant_a.groups["g1"], "cn=x", "ldap")

        with pytest.raises(InvalidFilterError):
            await service.delete('origin co "l"')

        assert len(await service.query()) == 1

    @pytest.mark.asyncio
    async def test_unmap_all_commits(self, service_for, tenant_a):
        """unmap_all is visible to later requests."""
        g1 = tenant_a.groups["g1"]
        service = service_for(tenant_a)
        await service.map_external_group(g1, "cn=a", "ldap")
        await service.map_external_group(g1, "cn=b", "uaa")

        removed = await service.unmap_all(g1)

        assert len(removed) == 2
        assert await service_for(tenant_a).query() == []
