"""Tests for settings loading and the startup secret check."""
import pytest
from fastapi.testclient import TestClient

from credential_platform.credential_platform.account_service.config import load_settings
from credential_platform.credential_platform.account_service.errors import ConfigurationError
from credential_platform.credential_platform.account_service.main import create_app


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    # Keep a developer's .env file out of these tests
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("TOKEN_EXPIRE_DAYS", raising=False)


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert "JWT_SECRET" in str(exc_info.value)


def test_blank_secret_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "   ")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret-value")
    settings = load_settings()

    assert settings.JWT_SECRET == "s3cret-value"
    assert settings.TOKEN_EXPIRE_DAYS == 30
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.PASSWORD_HASH_ROUNDS == 29000
    assert settings.is_development is False


def test_overrides_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret-value")
    monkeypatch.setenv("TOKEN_EXPIRE_DAYS", "7")
    monkeypatch.setenv("ENVIRONMENT", "dev")

    settings = load_settings()

    assert settings.TOKEN_EXPIRE_DAYS == 7
    assert settings.is_development is True


def test_app_refuses_to_start_without_secret():
    with pytest.raises(ConfigurationError):
        with TestClient(create_app()):
            pass
