"""Tests for settings loading and validation."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from givenfixture.config import Settings, load_settings


class TestSettings:
    """Test configuration loading and validation."""

    def test_defaults(self) -> None:
        """Defaults give strict doubles verifying flagged expectations."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.strict is True
        assert settings.verify_all_expectations is False
        assert settings.collection_size == 3
        assert settings.log_level == "WARNING"
        assert settings.log_format == "text"

    def test_load_settings_from_env(self) -> None:
        """Environment variables use the GIVENFIXTURE_ prefix."""
        with patch.dict(
            os.environ,
            {
                "GIVENFIXTURE_STRICT": "false",
                "GIVENFIXTURE_VERIFY_ALL_EXPECTATIONS": "true",
                "GIVENFIXTURE_COLLECTION_SIZE": "5",
                "GIVENFIXTURE_LOG_LEVEL": "DEBUG",
                "GIVENFIXTURE_LOG_FORMAT": "json",
            },
        ):
            settings = load_settings()
        assert settings.strict is False
        assert settings.verify_all_expectations is True
        assert settings.collection_size == 5
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_unprefixed_variables_are_ignored(self) -> None:
        with patch.dict(os.environ, {"STRICT": "false"}):
            assert load_settings().strict is True

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "test.env"
        env_file.write_text("GIVENFIXTURE_COLLECTION_SIZE=7\n")
        assert load_settings(str(env_file)).collection_size == 7

    @pytest.mark.parametrize("size", ["0", "-1"])
    def test_collection_size_must_be_positive(self, size: str) -> None:
        with patch.dict(os.environ, {"GIVENFIXTURE_COLLECTION_SIZE": size}):
            with pytest.raises(ValidationError, match="collection_size must be positive"):
                load_settings()

    def test_invalid_log_format(self) -> None:
        with patch.dict(os.environ, {"GIVENFIXTURE_LOG_FORMAT": "xml"}):
            with pytest.raises(ValidationError):
                load_settings()
