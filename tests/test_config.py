"""Tests for environment-driven gateway settings."""

import pytest

from cardconnect.config import DEFAULT_LIVE_URL, DEFAULT_TEST_URL, GatewaySettings
from cardconnect.errors import CallerContractError


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "CARDCONNECT_MERCHANT_ID",
        "CARDCONNECT_USERNAME",
        "CARDCONNECT_PASSWORD",
        "CARDCONNECT_TEST_URL",
        "CARDCONNECT_LIVE_URL",
        "CARDCONNECT_TEST_MODE",
        "CARDCONNECT_TIMEOUT_SECONDS",
        "CARDCONNECT_DEFAULT_CURRENCY",
        "CARDCONNECT_INTEGRATIONS_MODE",
    ):
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_from_env_reads_variables(clean_env):
    clean_env.setenv("CARDCONNECT_MERCHANT_ID", "496160873888")
    clean_env.setenv("CARDCONNECT_USERNAME", "testing")
    clean_env.setenv("CARDCONNECT_PASSWORD", "testing123")
    clean_env.setenv("CARDCONNECT_TEST_MODE", "false")
    clean_env.setenv("CARDCONNECT_TIMEOUT_SECONDS", "7.5")
    clean_env.setenv("CARDCONNECT_DEFAULT_CURRENCY", "cad")
    clean_env.setenv("CARDCONNECT_INTEGRATIONS_MODE", "Mock")

    settings = GatewaySettings.from_env(load_env_file=False)

    assert settings.merchant_id == "496160873888"
    assert settings.test_mode is False
    assert settings.base_url == DEFAULT_LIVE_URL
    assert settings.timeout_seconds == 7.5
    assert settings.default_currency == "CAD"
    assert settings.integrations_mode == "mock"


def test_defaults(clean_env):
    settings = GatewaySettings.from_env(load_env_file=False)
    assert settings.test_mode is True
    assert settings.base_url == DEFAULT_TEST_URL
    assert settings.default_currency == "USD"
    assert settings.missing_credentials() == ["merchant_id", "username", "password"]


def test_overrides_win_over_environment(clean_env):
    clean_env.setenv("CARDCONNECT_MERCHANT_ID", "from-env")
    settings = GatewaySettings.from_env(load_env_file=False, merchant_id="explicit")
    assert settings.merchant_id == "explicit"


def test_require_credentials_names_missing_values():
    with pytest.raises(CallerContractError) as exc:
        GatewaySettings(merchant_id="m").require_credentials()
    assert "username" in str(exc.value)
    assert "merchant_id" not in str(exc.value)


def test_invalid_timeout_is_a_caller_error(clean_env):
    clean_env.setenv("CARDCONNECT_TIMEOUT_SECONDS", "soon")
    with pytest.raises(CallerContractError):
        GatewaySettings.from_env(load_env_file=False)


def test_env_file_is_loaded(clean_env, tmp_path):
    (tmp_path / ".env").write_text("CARDCONNECT_MERCHANT_ID=from-dotenv\n", encoding="utf-8")
    clean_env.chdir(tmp_path)
    settings = GatewaySettings.from_env()
    assert settings.merchant_id == "from-dotenv"
