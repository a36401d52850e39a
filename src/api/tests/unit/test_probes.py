"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from iam.application.observability import DefaultExternalGroupServiceProbe
from infrastructure.observability import ObservationContext
from infrastructure.observability.probes import DefaultConnectionProbe
from shared_kernel.middleware.observability import DefaultTenantContextProbe


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_default_probe_accepts_custom_logger(self):
        """Default probe should accept a custom logger."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)
        assert probe._logger is mock_logger

    def test_engine_created_logs_info(self):
        """engine_created should log the engine kind and safe connection string."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(kind="write", connection_string="postgresql://u@h/d")

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            kind="write",
            connection="postgresql://u@h/d",
        )

    def test_engine_disposed_logs_info(self):
        """engine_disposed should log the engine kind."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_disposed(kind="read")

        mock_logger.info.assert_called_once_with(
            "database_engine_disposed", kind="read"
        )


class TestExternalGroupServiceProbe:
    """Tests for DefaultExternalGroupServiceProbe."""

    def test_invalid_filter_logs_warning(self):
        """Rejected filters are warnings carrying the expression and error."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultExternalGroupServiceProbe(logger=mock_logger)

        probe.invalid_filter(
            filter_expression="origin eq", tenant_id="01TENANT", error="bad"
        )

        mock_logger.warning.assert_called_once_with(
            "external_group_filter_invalid",
            filter="origin eq",
            tenant_id="01TENANT",
            error="bad",
        )

    def test_operation_failed_logs_error(self):
        """Store failures are logged at error level."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultExternalGroupServiceProbe(logger=mock_logger)

        probe.operation_failed(operation="delete", tenant_id="01TENANT", error="x")

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[1]["operation"] == "delete"

    def test_explicit_fields_win_over_context(self):
        """Context keys that collide with explicit fields are left out."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(
            request_id="req-1", tenant_id="01OTHER", extra={"client": "cli"}
        )
        probe = DefaultExternalGroupServiceProbe(logger=mock_logger).with_context(
            context
        )

        probe.external_groups_deleted(
            filter_expression="", count=1, tenant_id="01TENANT"
        )

        mock_logger.info.assert_called_once_with(
            "external_groups_deleted",
            filter="",
            count=1,
            tenant_id="01TENANT",
            request_id="req-1",
            client="cli",
        )


class TestTenantContextProbe:
    """Tests for DefaultTenantContextProbe."""

    def test_header_missing_logs_warning(self):
        """A missing header is a warning."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantContextProbe(logger=mock_logger)

        probe.tenant_header_missing()

        mock_logger.warning.assert_called_once_with("tenant_header_missing")

    def test_resolved_logs_debug(self):
        """Successful resolution is a debug event."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantContextProbe(logger=mock_logger)

        probe.tenant_resolved_from_header(tenant_id="01TENANT")

        mock_logger.debug.assert_called_once_with(
            "tenant_resolved_from_header", tenant_id="01TENANT"
        )


class TestObservationContext:
    """Tests for ObservationContext."""

    def test_as_dict_skips_none(self):
        """Unset fields are not logged."""
        assert ObservationContext(request_id="r").as_dict() == {"request_id": "r"}

    def test_with_origin_and_extra_return_new_contexts(self):
        """Builders never mutate the original context."""
        base = ObservationContext(tenant_id="t")

        derived = base.with_origin("ldap").with_extra(filter="x")

        assert base.as_dict() == {"tenant_id": "t"}
        assert derived.as_dict() == {"tenant_id": "t", "origin": "ldap", "filter": "x"}
