"""Unit tests for IAM repository domain probes."""

from unittest.mock import Mock

from iam.infrastructure.observability import (
    DefaultExternalGroupMappingRepositoryProbe,
    DefaultGroupRepositoryProbe,
)
from infrastructure.observability import ObservationContext


class TestDefaultGroupRepositoryProbe:
    """Tests for DefaultGroupRepositoryProbe."""

    def test_creates_with_default_logger(self):
        """Test that probe can be created without providing a logger."""
        probe = DefaultGroupRepositoryProbe()
        assert probe._logger is not None

    def test_group_not_found_logs_debug(self):
        """Test that a missing group is logged at debug level."""
        mock_logger = Mock()
        probe = DefaultGroupRepositoryProbe(logger=mock_logger)

        probe.group_not_found(group_id="01GROUP", tenant_id="01TENANT")

        mock_logger.debug.assert_called_once()
        call_args = mock_logger.debug.call_args
        assert call_args[0][0] == "group_not_found"
        assert call_args[1]["group_id"] == "01GROUP"
        assert call_args[1]["tenant_id"] == "01TENANT"


class TestDefaultExternalGroupMappingRepositoryProbe:
    """Tests for DefaultExternalGroupMappingRepositoryProbe."""

    def test_accepts_custom_logger(self):
        """Test that probe accepts a custom logger."""
        custom_logger = Mock()
        probe = DefaultExternalGroupMappingRepositoryProbe(logger=custom_logger)
        assert probe._logger is custom_logger

    def test_mapping_created_logs_info(self):
        """Test that a new mapping is logged with its key."""
        mock_logger = Mock()
        probe = DefaultExternalGroupMappingRepositoryProbe(logger=mock_logger)

        probe.mapping_created("01GROUP", "cn=dev", "ldap", "01TENANT")

        mock_logger.info.assert_called_once()
        call_args = mock_logger.info.call_args
        assert call_args[0][0] == "external_group_mapping_created"
        assert call_args[1]["external_group"] == "cn=dev"
        assert call_args[1]["origin"] == "ldap"

    def test_mapping_already_exists_logs_debug(self):
        """Test that an idempotent re-map is logged at debug level."""
        mock_logger = Mock()
        probe = DefaultExternalGroupMappingRepositoryProbe(logger=mock_logger)

        probe.mapping_already_exists("01GROUP", "cn=dev", "ldap", "01TENANT")

        mock_logger.debug.assert_called_once()
        assert (
            mock_logger.debug.call_args[0][0]
            == "external_group_mapping_already_exists"
        )

    def test_mappings_deleted_logs_count(self):
        """Test that deletions are logged with their count."""
        mock_logger = Mock()
        probe = DefaultExternalGroupMappingRepositoryProbe(logger=mock_logger)

        probe.mappings_deleted(count=4, tenant_id="01TENANT")

        call_args = mock_logger.info.call_args
        assert call_args[0][0] == "external_group_mappings_deleted"
        assert call_args[1]["count"] == 4


class TestWithContext:
    """Tests for context binding."""

    def test_context_fields_are_logged(self):
        """Test that bound context metadata is added to every event."""
        mock_logger = Mock()
        context = ObservationContext(request_id="req-1", tenant_id="01TENANT")
        probe = DefaultExternalGroupMappingRepositoryProbe(
            logger=mock_logger
        ).with_context(context)

        probe.mappings_retrieved(count=2, tenant_id="01TENANT")

        call_args = mock_logger.debug.call_args
        assert call_args[1]["request_id"] == "req-1"

    def test_with_context_keeps_logger(self):
        """Test that with_context returns a new probe sharing the logger."""
        mock_logger = Mock()
        probe = DefaultGroupRepositoryProbe(logger=mock_logger)

        bound = probe.with_context(ObservationContext(request_id="req-1"))

        assert bound is not probe
        assert bound._logger is mock_logger
