"""Tests for configuration and logging setup."""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from socialgallery.config import (
    Config,
    get_config,
    get_db_path,
    get_debug_mode,
    get_seed_example_images,
    get_storage_backend,
)
from socialgallery.logging_config import (
    configure_structured_logging,
    get_log_level,
    is_development_environment,
    log_context,
)


@pytest.fixture(autouse=True)
def clear_config_cache():
    get_config().clear_cache()
    yield
    get_config().clear_cache()


class TestConfig:
    """Test the Config class."""

    def test_get_from_environment(self, monkeypatch):
        monkeypatch.setenv("GALLERY_TEST_VALUE", "42")
        assert Config().get("GALLERY_TEST_VALUE", cast_type=int) == 42

    def test_default(self):
        assert Config().get("GALLERY_TEST_MISSING", "fallback") == "fallback"

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("yes", True), ("off", False), ("", False)])
    def test_bool_cast(self, monkeypatch, raw, expected):
        monkeypatch.setenv("GALLERY_TEST_FLAG", raw)
        assert Config().get("GALLERY_TEST_FLAG", cast_type=bool) is expected

    def test_failed_cast_uses_default(self, monkeypatch):
        monkeypatch.setenv("GALLERY_TEST_VALUE", "many")
        assert Config().get("GALLERY_TEST_VALUE", 7, int) == 7

    def test_values_are_cached(self, monkeypatch):
        config = Config()
        monkeypatch.setenv("GALLERY_TEST_VALUE", "first")
        assert config.get("GALLERY_TEST_VALUE") == "first"

        monkeypatch.setenv("GALLERY_TEST_VALUE", "second")
        assert config.get("GALLERY_TEST_VALUE") == "first"

        config.clear_cache()
        assert config.get("GALLERY_TEST_VALUE") == "second"

    @pytest.mark.parametrize(
        "environment,development",
        [("development", True), ("dev", True), ("local", True), ("production", False), ("test", False)],
    )
    def test_environment_modes(self, monkeypatch, environment, development):
        monkeypatch.setenv("ENVIRONMENT", environment)
        assert Config().is_development() is development


class TestGallerySettings:
    """Test gallery-specific settings."""

    def test_storage_backend(self, monkeypatch):
        monkeypatch.setenv("GALLERY_STORAGE_BACKEND", "MEMORY")
        assert get_storage_backend() == "memory"

    def test_unknown_storage_backend_falls_back(self, monkeypatch):
        monkeypatch.setenv("GALLERY_STORAGE_BACKEND", "redis")
        assert get_storage_backend() == "duckdb"

    def test_db_path(self, monkeypatch):
        monkeypatch.setenv("GALLERY_DB_PATH", "/tmp/other.duckdb")
        assert get_db_path() == "/tmp/other.duckdb"

    def test_db_path_default(self, monkeypatch):
        monkeypatch.delenv("GALLERY_DB_PATH", raising=False)
        assert get_db_path() == "data/gallery.duckdb"

    def test_seed_examples(self, monkeypatch):
        monkeypatch.setenv("SEED_EXAMPLE_IMAGES", "0")
        assert get_seed_example_images() is False

    def test_debug_mode(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        assert get_debug_mode()

    def test_debug_mode_off_outside_development(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        assert not get_debug_mode()


class TestLoggingConfig:
    """Test structured logging setup."""

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        assert get_log_level() == logging.INFO

    def test_environment_detection(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "dev")
        assert is_development_environment()

        monkeypatch.setenv("ENVIRONMENT", "production")
        assert not is_development_environment()

    def test_configure_structured_logging(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        configure_structured_logging()

        assert logging.getLogger().level == logging.WARNING
        assert structlog.is_configured()

    def test_log_context_binds_values(self):
        with capture_logs() as captured:
            with log_context("socialgallery.test", operation="publish_image") as log:
                log.info("step_done")

        assert captured[0]["event"] == "step_done"
        assert captured[0]["operation"] == "publish_image"

    def test_log_context_logs_exceptions(self):
        with capture_logs() as captured:
            with pytest.raises(RuntimeError):
                with log_context("socialgallery.test", operation="save"):
                    raise RuntimeError("disk full")

        assert captured[-1]["event"] == "context_exception"
        assert captured[-1]["exception_type"] == "RuntimeError"
