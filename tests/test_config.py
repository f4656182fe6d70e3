"""
Tests for configuration, logging setup and validation helpers.
"""

import logging
from unittest.mock import patch

import pytest

from petclinic_core.exceptions import DatabaseConfigException, EnvironmentException
from petclinic_core.utils import (
    DEFAULT_DATABASE_URL,
    DatabaseURLValidator,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
    PetClinicSettings,
    configure_logging,
    normalize_telephone,
    require_text,
    sanitize_string,
)


class TestEnvironmentConfig:
    """Test cases for typed environment variable access."""

    def test_get_str(self, monkeypatch):
        monkeypatch.setenv("PETCLINIC_TEST_VALUE", "hello")

        assert EnvironmentConfig.get_str("PETCLINIC_TEST_VALUE") == "hello"
        assert EnvironmentConfig.get_str("PETCLINIC_MISSING", "fallback") == "fallback"

    def test_get_str_required_missing(self, monkeypatch):
        monkeypatch.delenv("PETCLINIC_MISSING", raising=False)

        with pytest.raises(EnvironmentException):
            EnvironmentConfig.get_str("PETCLINIC_MISSING", required=True)

    def test_get_int(self, monkeypatch):
        monkeypatch.setenv("PETCLINIC_DB_POOL_SIZE", "12")

        assert EnvironmentConfig.get_int("PETCLINIC_DB_POOL_SIZE") == 12

    def test_get_int_invalid(self, monkeypatch):
        monkeypatch.setenv("PETCLINIC_DB_POOL_SIZE", "twelve")

        with pytest.raises(EnvironmentException) as exc_info:
            EnvironmentConfig.get_int("PETCLINIC_DB_POOL_SIZE")

        assert exc_info.value.details["config_value"] == "twelve"

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("YES", True), ("1", True), ("on", True),
         ("false", False), ("0", False), ("no", False), ("off", False)],
    )
    def test_get_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("PETCLINIC_DB_ECHO", raw)

        assert EnvironmentConfig.get_bool("PETCLINIC_DB_ECHO") is expected

    def test_get_bool_invalid(self, monkeypatch):
        monkeypatch.setenv("PETCLINIC_DB_ECHO", "maybe")

        with pytest.raises(EnvironmentException):
            EnvironmentConfig.get_bool("PETCLINIC_DB_ECHO")


class TestDatabaseURLValidator:
    """Test cases for database URL validation."""

    def test_postgres_url(self):
        info = DatabaseURLValidator.validate_url(
            "postgresql+asyncpg://petclinic:pw@localhost:5432/petclinic"
        )

        assert info["dialect"] == "postgresql"
        assert info["hostname"] == "localhost"
        assert info["port"] == 5432
        assert info["database"] == "petclinic"

    def test_sqlite_url(self):
        info = DatabaseURLValidator.validate_url(DEFAULT_DATABASE_URL)

        assert info["dialect"] == "sqlite"
        assert info["hostname"] is None

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "localhost/petclinic",
            "mysql+aiomysql://localhost/petclinic",
            "postgresql://localhost/petclinic",
            "postgresql+asyncpg:///petclinic",
            "postgresql+asyncpg://localhost",
        ],
    )
    def test_invalid_urls(self, url):
        with pytest.raises(DatabaseConfigException):
            DatabaseURLValidator.validate_url(url)


class TestPetClinicSettings:
    """Test cases for the package settings."""

    def test_defaults(self):
        settings = PetClinicSettings()

        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.is_sqlite
        assert settings.echo is False
        assert settings.pool_size == 5
        assert settings.last_name_case_sensitive is False
        assert settings.log_level == "INFO"

    def test_log_level_normalized(self):
        assert PetClinicSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(EnvironmentException):
            PetClinicSettings(log_level="chatty")

    def test_invalid_pool_size(self):
        with pytest.raises(DatabaseConfigException):
            PetClinicSettings(pool_size=0)

    def test_invalid_database_url(self):
        with pytest.raises(DatabaseConfigException):
            PetClinicSettings(database_url="mysql://localhost/petclinic")

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv(
            "PETCLINIC_DATABASE_URL", "postgresql+asyncpg://pc@db:5432/petclinic"
        )
        monkeypatch.setenv("PETCLINIC_DB_ECHO", "true")
        monkeypatch.setenv("PETCLINIC_DB_POOL_SIZE", "10")
        monkeypatch.setenv("PETCLINIC_LAST_NAME_CASE_SENSITIVE", "1")
        monkeypatch.setenv("PETCLINIC_LOG_LEVEL", "warning")

        settings = PetClinicSettings.from_environment()

        assert not settings.is_sqlite
        assert settings.echo is True
        assert settings.pool_size == 10
        assert settings.last_name_case_sensitive is True
        assert settings.log_level == "WARNING"

    def test_from_empty_environment(self, monkeypatch):
        for name in (
            "PETCLINIC_DATABASE_URL",
            "PETCLINIC_DB_ECHO",
            "PETCLINIC_DB_POOL_SIZE",
            "PETCLINIC_LAST_NAME_CASE_SENSITIVE",
            "PETCLINIC_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        assert PetClinicSettings.from_environment() == PetClinicSettings()


class TestLoggingConfiguration:
    """Test cases for logging setup."""

    @patch("petclinic_core.utils.config.logging.basicConfig")
    def test_configure_basic_logging(self, mock_basic_config):
        LoggingConfigurator.configure_basic_logging(level=LogLevel.DEBUG)

        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs["level"] == "DEBUG"
        assert kwargs["format"] == LoggingConfigurator.DEFAULT_FORMAT
        assert "filename" not in kwargs

    @patch("petclinic_core.utils.config.logging.basicConfig")
    def test_configure_basic_logging_to_file(self, mock_basic_config, tmp_path):
        log_file = str(tmp_path / "petclinic.log")

        LoggingConfigurator.configure_basic_logging(log_file=log_file)

        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs["filename"] == log_file
        assert kwargs["filemode"] == "a"

    @patch("petclinic_core.utils.config.logging.basicConfig")
    def test_configure_logging_from_settings(self, mock_basic_config):
        configure_logging(PetClinicSettings(log_level="error"))

        assert mock_basic_config.call_args.kwargs["level"] == "ERROR"

    def test_package_logger_name(self):
        from petclinic_core.repositories import base

        assert base.logger.name == "petclinic_core.repositories.base"
        assert isinstance(base.logger, logging.Logger)


class TestValidationHelpers:
    """Test cases for input sanitization helpers."""

    def test_sanitize_string(self):
        assert sanitize_string("  George   Franklin ") == "George Franklin"
        assert sanitize_string("abcdef", max_length=3) == "abc"

    @pytest.mark.parametrize(
        "raw,expected",
        [("6085551023", "6085551023"), ("(608) 555-1023", "6085551023"), ("608.555.1023", "6085551023")],
    )
    def test_normalize_telephone(self, raw, expected):
        assert normalize_telephone(raw) == expected

    @pytest.mark.parametrize("raw", ["", "60855510231", "608-CALL-ME"])
    def test_normalize_telephone_invalid(self, raw):
        with pytest.raises(ValueError):
            normalize_telephone(raw)

    def test_require_text(self):
        assert require_text(" Leo ", "name") == "Leo"

        with pytest.raises(ValueError):
            require_text("   ", "name")
        with pytest.raises(ValueError):
            require_text(None, "name")
