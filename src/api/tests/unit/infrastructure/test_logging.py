"""Unit tests for structlog configuration."""

import pytest
import structlog

from infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_binds_service_name(self):
        configure_logging(app_name="Ratebook API")

        assert structlog.contextvars.get_contextvars() == {"service": "Ratebook API"}

    def test_no_service_without_app_name(self):
        configure_logging()

        assert "service" not in structlog.contextvars.get_contextvars()

    def test_debug_enables_debug_events(self, capsys):
        configure_logging(debug=True)

        structlog.get_logger().debug("rule_set_selected", kind="RATE_CARD")

        assert "rule_set_selected" in capsys.readouterr().out

    def test_info_level_drops_debug_events(self, capsys):
        configure_logging(debug=False)

        structlog.get_logger().debug("rule_set_selected", kind="RATE_CARD")
        structlog.get_logger().info("candidate_resolved", score=2)

        out = capsys.readouterr().out
        assert "rule_set_selected" not in out
        assert "candidate_resolved" in out
