"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from workforce_engine.config.settings import Settings


class TestSettings:
    """Test cases for Settings."""

    def test_test_settings(self, test_settings):
        assert test_settings.ENVIRONMENT == "test"
        assert test_settings.DATABASE_URL == "sqlite+aiosqlite:///:memory:"
        assert test_settings.LOG_LEVEL == "DEBUG"

    def test_database_url_assembled_from_parts(self):
        settings = Settings(
            POSTGRES_USER="dispatch",
            POSTGRES_PASSWORD="secret",
            POSTGRES_SERVER="db",
            POSTGRES_DB="jobs",
        )
        assert settings.DATABASE_URL == "postgresql+asyncpg://dispatch:secret@db:5432/jobs"

    def test_log_level_normalised(self):
        assert Settings(LOG_LEVEL="warning").LOG_LEVEL == "WARNING"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"ENVIRONMENT": "qa"},
            {"LOG_LEVEL": "VERBOSE"},
            {"MAX_PAGE_SIZE": 0},
            {"RECOMMENDATION_CANDIDATE_MULTIPLIER": -1},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)
