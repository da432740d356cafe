"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from flight_tracker.config import Settings


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.timezone == "Europe/Zurich"
        assert settings.default_bucket_days == 1
        assert settings.max_flex_days == 30

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("field", ["default_bucket_days", "max_flex_days"])
    def test_non_positive_windows_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_allowed_origins_list(self):
        settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,")
        assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MAX_FLEX_DAYS", "14")
        assert Settings(_env_file=None).max_flex_days == 14
