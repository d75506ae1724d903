# tests/core/test_config.py

import pytest

from fau_portal.core.config import Settings
from fau_portal.core.exceptions import ConfigurationError

STRONG_SECRET = "s" * 48


def test_production_requires_a_strong_secret():
    settings = Settings(ENV="prod", DATABASE_URL="postgresql://db/fau", JWT_SECRET="short")

    with pytest.raises(ConfigurationError) as exc_info:
        settings.validate_for_startup()

    assert "JWT_SECRET" in exc_info.value.message


def test_production_requires_database_url():
    settings = Settings(ENV="prod", DATABASE_URL=None, JWT_SECRET=STRONG_SECRET)

    with pytest.raises(ConfigurationError) as exc_info:
        settings.validate_for_startup()

    assert "DATABASE_URL" in exc_info.value.message


def test_production_never_gets_a_generated_secret():
    settings = Settings(ENV="prod", DATABASE_URL="postgresql://db/fau", JWT_SECRET=None)

    assert settings.JWT_SECRET is None
    with pytest.raises(ConfigurationError):
        settings.validate_for_startup()


def test_local_mode_generates_an_ephemeral_secret():
    first = Settings(ENV="local", JWT_SECRET=None)
    second = Settings(ENV="local", JWT_SECRET=None)

    assert first.JWT_SECRET and len(first.JWT_SECRET) >= 32
    assert first.JWT_SECRET != second.JWT_SECRET
    first.validate_for_startup()


def test_bcrypt_rounds_have_a_floor():
    settings = Settings(ENV="local", BCRYPT_ROUNDS=4)

    with pytest.raises(ConfigurationError):
        settings.validate_for_startup()


def test_cookie_secure_follows_environment():
    assert Settings(ENV="local").cookie_secure is False
    assert Settings(ENV="prod", JWT_SECRET=STRONG_SECRET).cookie_secure is True
    assert Settings(ENV="prod", JWT_SECRET=STRONG_SECRET, COOKIE_SECURE=False).cookie_secure is False


def test_cors_origins_are_split():
    settings = Settings(CORS_ORIGINS="https://fau-erdal.no, http://localhost:5000,")
    assert settings.cors_origins == ["https://fau-erdal.no", "http://localhost:5000"]
