# Backend Configuration for the Shor's Algorithm Explorer
import os
import logging
import warnings
from collections import namedtuple

DEFAULT_SECRET_KEY = "your-secret-key-change-in-production"
SUPPORTED_LANGUAGES = ("en", "zh")

ExplorerSettings = namedtuple(
    "ExplorerSettings",
    [
        "max_attempts",
        "step_delay",
        "min_n",
        "max_n",
        "rng_seed",
        "default_language",
        "log_level",
        "secret_key",
        "port",
        "production",
    ],
)


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _get_secret_key():
    """Secret key from the environment, warning when the development key is used"""
    key = os.getenv('SECRET_KEY')
    if key:
        return key.strip().strip('"').strip("'")
    warnings.warn("Using default secret key - change for production!", UserWarning)
    return DEFAULT_SECRET_KEY


def get_settings():
    """
    Read explorer settings from the environment.

    Returns:
        ExplorerSettings: Current configuration

    Raises:
        ValueError: If a variable is malformed or out of range
    """
    max_attempts = _env_int('SHOR_MAX_ATTEMPTS', 10)
    if max_attempts < 1:
        raise ValueError("SHOR_MAX_ATTEMPTS must be at least 1")

    step_delay = _env_float('SHOR_STEP_DELAY', 0.5)
    if step_delay < 0:
        raise ValueError("SHOR_STEP_DELAY cannot be negative")

    min_n = _env_int('SHOR_MIN_N', 4)
    max_n = _env_int('SHOR_MAX_N', 100000)
    if min_n < 2 or max_n < min_n:
        raise ValueError(f"Invalid range SHOR_MIN_N={min_n}, SHOR_MAX_N={max_n}")

    rng_seed = _env_int('SHOR_RNG_SEED', None)
    if rng_seed is not None and rng_seed < 0:
        raise ValueError("SHOR_RNG_SEED cannot be negative")

    language = os.getenv('SHOR_DEFAULT_LANGUAGE', 'en').strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"SHOR_DEFAULT_LANGUAGE must be one of {SUPPORTED_LANGUAGES}")

    return ExplorerSettings(
        max_attempts=max_attempts,
        step_delay=step_delay,
        min_n=min_n,
        max_n=max_n,
        rng_seed=rng_seed,
        default_language=language,
        log_level=os.getenv('LOG_LEVEL', 'INFO').strip().upper(),
        secret_key=_get_secret_key(),
        port=_env_int('PORT', 5505),
        production=os.getenv('FLASK_ENV') == 'production',
    )


def configure_logging(level="INFO"):
    """Set up root logging for the entry points"""
    numeric = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(numeric)
