"""
Tests for environment-driven configuration.
"""
import logging

import pytest

from shor_backend.backend_config import (
    DEFAULT_SECRET_KEY,
    configure_logging,
    get_settings,
)

ENV_VARS = [
    "SHOR_MAX_ATTEMPTS",
    "SHOR_STEP_DELAY",
    "SHOR_MIN_N",
    "SHOR_MAX_N",
    "SHOR_RNG_SEED",
    "SHOR_DEFAULT_LANGUAGE",
    "LOG_LEVEL",
    "SECRET_KEY",
    "PORT",
    "FLASK_ENV",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-1234")
    return monkeypatch


class TestGetSettings:
    """Tests for get_settings."""

    def test_defaults(self, clean_env):
        settings = get_settings()
        assert settings.max_attempts == 10
        assert settings.step_delay == 0.5
        assert (settings.min_n, settings.max_n) == (4, 100000)
        assert settings.rng_seed is None
        assert settings.default_language == "en"
        assert settings.log_level == "INFO"
        assert settings.port == 5505
        assert settings.production is False

    def test_overrides(self, clean_env):
        clean_env.setenv("SHOR_MAX_ATTEMPTS", "25")
        clean_env.setenv("SHOR_STEP_DELAY", "0")
        clean_env.setenv("SHOR_RNG_SEED", "1234")
        clean_env.setenv("SHOR_DEFAULT_LANGUAGE", "ZH")
        clean_env.setenv("FLASK_ENV", "production")
        settings = get_settings()
        assert settings.max_attempts == 25
        assert settings.step_delay == 0.0
        assert settings.rng_seed == 1234
        assert settings.default_language == "zh"
        assert settings.production is True

    def test_malformed_integer(self, clean_env):
        clean_env.setenv("SHOR_MAX_ATTEMPTS", "ten")
        with pytest.raises(ValueError, match="SHOR_MAX_ATTEMPTS"):
            get_settings()

    def test_malformed_delay(self, clean_env):
        clean_env.setenv("SHOR_STEP_DELAY", "soon")
        with pytest.raises(ValueError, match="SHOR_STEP_DELAY"):
            get_settings()

    def test_negative_delay(self, clean_env):
        clean_env.setenv("SHOR_STEP_DELAY", "-1")
        with pytest.raises(ValueError, match="negative"):
            get_settings()

    def test_zero_attempts(self, clean_env):
        clean_env.setenv("SHOR_MAX_ATTEMPTS", "0")
        with pytest.raises(ValueError, match="at least 1"):
            get_settings()

    def test_inverted_range(self, clean_env):
        clean_env.setenv("SHOR_MIN_N", "500")
        clean_env.setenv("SHOR_MAX_N", "100")
        with pytest.raises(ValueError, match="Invalid range"):
            get_settings()

    def test_negative_seed(self, clean_env):
        clean_env.setenv("SHOR_RNG_SEED", "-5")
        with pytest.raises(ValueError, match="SHOR_RNG_SEED"):
            get_settings()

    def test_seed(self, clean_env):
        clean_env.setenv("SHOR_RNG_SEED", "42")
        assert get_settings().rng_seed == 42

    def test_unknown_language(self, clean_env):
        clean_env.setenv("SHOR_DEFAULT_LANGUAGE", "fr")
        with pytest.raises(ValueError, match="SHOR_DEFAULT_LANGUAGE"):
            get_settings()

    def test_default_secret_warns(self, clean_env):
        clean_env.delenv("SECRET_KEY")
        with pytest.warns(UserWarning, match="default secret key"):
            settings = get_settings()
        assert settings.secret_key == DEFAULT_SECRET_KEY

    def test_secret_quotes_stripped(self, clean_env):
        clean_env.setenv("SECRET_KEY", '"quoted-secret"')
        assert get_settings().secret_key == "quoted-secret"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_root_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("debug")
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("chatty")
