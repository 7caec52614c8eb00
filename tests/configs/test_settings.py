"""
Test suite for configuration classes.

System role: Verification of environment-driven settings
"""

import pytest
from pydantic import ValidationError

from faq_rag.configs import Settings
from faq_rag.configs.base import BaseSettings
from faq_rag.configs.vector_store import VectorStoreSettings


class TestBaseSettings:
    """Test suite for shared settings fields."""

    def test_log_level_should_accept_lowercase_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("LOG_LEVEL", " debug ")

        # Act
        settings = BaseSettings()

        # Assert
        assert settings.log_level == "DEBUG"

    def test_log_level_should_reject_unknown_names(self) -> None:
        with pytest.raises(ValidationError):
            BaseSettings(log_level="VERBOSE")

    def test_environment_should_reject_unknown_values(self) -> None:
        with pytest.raises(ValidationError):
            BaseSettings(environment="qa")

    def test_settings_should_read_environment_and_prefixed_fields(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test unprefixed base fields and VECTOR_STORE_* fields load together."""
        # Arrange
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("VECTOR_STORE_EMBEDDING_DIMENSION", "256")

        # Act
        settings = Settings()

        # Assert
        assert settings.environment == "production"
        assert settings.vector_store.embedding_dimension == 256
        assert isinstance(settings.vector_store, VectorStoreSettings)
