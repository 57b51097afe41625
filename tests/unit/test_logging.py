"""
Unit tests for structured logging.
"""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from workforce_engine.config.logging import QUIET_LOGGERS, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)


class TestLogging:
    """Test cases for logging configuration."""

    def test_configure_levels(self, restore_logging):
        configure_logging("debug", json_logs=True)

        assert logging.getLogger().level == logging.DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_bound_fields(self):
        with capture_logs() as logs:
            logger = get_logger(__name__).bind(request_id="req-1")
            logger.info("Job deleted", job_id="job-1")

        assert logs == [
            {
                "event": "Job deleted",
                "job_id": "job-1",
                "request_id": "req-1",
                "log_level": "info",
            }
        ]

    @pytest.mark.asyncio
    async def test_manager_logs_events(self, manager):
        with capture_logs() as logs:
            await manager.delete_job("missing")

        assert {
            "event": "Job deleted",
            "job_id": "missing",
            "deleted": False,
            "log_level": "info",
        } in logs
