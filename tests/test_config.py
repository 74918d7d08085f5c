"""Tests for opsgenie_sdk.config module."""

import pytest
from pydantic import ValidationError

from opsgenie_sdk.config import DEFAULT_RETRY_COUNT, TIMEOUT, ApiUrl, ClientSettings


def test_defaults() -> None:
    settings = ClientSettings()

    assert settings.api_key.get_secret_value() == ""
    assert settings.api_url == "https://api.opsgenie.com"
    assert settings.retry_count == DEFAULT_RETRY_COUNT == 4
    assert settings.timeout == TIMEOUT == 30
    assert settings.log_level == "INFO"
    assert settings.log_format_json is True


@pytest.mark.parametrize(
    ("api_url", "expected"),
    [
        pytest.param(ApiUrl.EU, "https://api.eu.opsgenie.com", id="eu"),
        pytest.param(ApiUrl.SANDBOX, "https://api.sandbox.opsgenie.com", id="sandbox"),
        pytest.param(
            "https://proxy.example.com/opsgenie/",
            "https://proxy.example.com/opsgenie",
            id="custom",
        ),
    ],
)
def test_api_url(api_url: str, expected: str) -> None:
    assert ClientSettings(api_url=api_url).api_url == expected


def test_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPSGENIE_API_KEY", "env-key")
    monkeypatch.setenv("OPSGENIE_RETRY_COUNT", "0")
    monkeypatch.setenv("OPSGENIE_TIMEOUT", "2.5")
    monkeypatch.setenv("OPSGENIE_LOG_FORMAT_JSON", "false")

    settings = ClientSettings()

    assert settings.api_key.get_secret_value() == "env-key"
    assert settings.retry_count == 0
    assert settings.timeout == 2.5
    assert settings.log_format_json is False


def test_api_key_is_not_printed() -> None:
    settings = ClientSettings(api_key="super-secret")
    assert "super-secret" not in repr(settings)


@pytest.mark.parametrize(
    "overrides",
    [
        pytest.param({"retry_count": -1}, id="negative-retry-count"),
        pytest.param({"timeout": 0}, id="zero-timeout"),
    ],
)
def test_invalid_values_rejected(overrides: dict[str, float]) -> None:
    with pytest.raises(ValidationError):
        ClientSettings(**overrides)
