import pytest
import streamlit as st

from groomdash import config
from groomdash.errors import ConfigError

ENV_KEYS = [
    "WEBHOOK_URL",
    "REFRESH_INTERVAL_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "DASHBOARD_TIMEZONE",
    "USE_SAMPLE_DATA",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(st, "secrets", {}, raising=False)


def test_defaults() -> None:
    settings = config.get_settings()

    assert settings.webhook_url is None
    assert settings.refresh_interval == 300
    assert settings.request_timeout == 15.0
    assert settings.timezone == "UTC"
    assert settings.use_sample_data is False
    assert settings.log_level == "INFO"


def test_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBHOOK_URL", "  https://hooks.example.com/grooming  ")
    monkeypatch.setenv("REFRESH_INTERVAL_SECONDS", "120")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "4.5")
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "America/Chicago")
    monkeypatch.setenv("USE_SAMPLE_DATA", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config.get_settings()

    assert settings.webhook_url == "https://hooks.example.com/grooming"
    assert settings.refresh_interval == 120
    assert settings.request_timeout == 4.5
    assert settings.timezone == "America/Chicago"
    assert settings.use_sample_data is True
    assert settings.log_level == "DEBUG"


def test_secrets_are_used_when_env_is_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(st, "secrets", {"WEBHOOK_URL": "https://hooks.example.com/from-secrets"}, raising=False)

    assert config.get_settings().webhook_url == "https://hooks.example.com/from-secrets"


@pytest.mark.parametrize(
    "key, value",
    [
        ("REFRESH_INTERVAL_SECONDS", "soon"),
        ("REFRESH_INTERVAL_SECONDS", "0"),
        ("REQUEST_TIMEOUT_SECONDS", "-1"),
        ("DASHBOARD_TIMEZONE", "Mars/Olympus_Mons"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError):
        config.get_settings()


def test_tabs_are_ordered() -> None:
    assert [tab.key for tab in config.TABS] == ["appointments", "customers"]
