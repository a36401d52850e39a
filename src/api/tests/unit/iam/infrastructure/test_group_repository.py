"""Unit tests for GroupRepository.

Following TDD principles - tests verify repository behavior with mocked dependencies.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.dialects import postgresql

from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId, TenantId
from iam.infrastructure.group_repository import GroupRepository
from iam.infrastructure.models import GroupModel
from iam.ports.repositories import IGroupRepository

TENANT_ID = TenantId(value="01HQ8Z3K4M5N6P7Q8R9S0T1V2W")
GROUP_ID = GroupId(value="01HQ8Z3K4M5N6P7Q8R9S0T1V2X")


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    return session


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    probe = MagicMock()
    return probe


@pytest.fixture
def repository(mock_session, mock_probe):
    """Create repository with mock dependencies."""
    return GroupRepository(session=mock_session, probe=mock_probe)


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_implements_protocol(self, repository):
        """Repository should implement IGroupRepository protocol."""
        assert isinstance(repository, IGroupRepository)


class TestGetById:
    """Tests for get_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_group_in_tenant(self, repository, mock_session, mock_probe):
        """Should return a Group when it exists in the tenant."""
        model = GroupModel(
            id=GROUP_ID.value, tenant_id=TENANT_ID.value, name="developers"
        )
        result = MagicMock()
        result.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = result

        group = await repository.get_by_id(GROUP_ID, TENANT_ID)

        assert group == Group(id=GROUP_ID, tenant_id=TENANT_ID, name="developers")
        mock_probe.group_retrieved.assert_called_once_with(
            GROUP_ID.value, TENANT_ID.value
        )

    @pytest.mark.asyncio
    async def test_returns_none_when_not_found(
        self, repository, mock_session, mock_probe
    ):
        """Should return None and record the miss when no row matches."""
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        group = await repository.get_by_id(GROUP_ID, TENANT_ID)

        assert group is None
        mock_probe.group_not_found.assert_called_once_with(
            GROUP_ID.value, TENANT_ID.value
        )

    @pytest.mark.asyncio
    async def test_filters_on_tenant(self, repository, mock_session):
        """The lookup binds both the group id and the tenant id."""
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        await repository.get_by_id(GROUP_ID, TENANT_ID)

        stmt = mock_session.execute.call_args[0][0]
        params = stmt.compile(dialect=postgresql.dialect()).params
        assert set(params.values()) == {GROUP_ID.value, TENANT_ID.value}
