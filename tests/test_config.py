"""Tests for settings loading and time unit conversion."""

import pytest
from pydantic import ValidationError

from crpt_client.core.config import ClientSettings, TimeUnit


@pytest.mark.parametrize(
    ("unit", "seconds"),
    [
        (TimeUnit.MILLISECONDS, 0.001),
        (TimeUnit.SECONDS, 1.0),
        (TimeUnit.MINUTES, 60.0),
        (TimeUnit.HOURS, 3600.0),
        (TimeUnit.DAYS, 86400.0),
    ],
)
def test_time_unit_seconds(unit: TimeUnit, seconds: float) -> None:
    assert unit.seconds == pytest.approx(seconds)


def test_client_settings_read_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRPT_TIME_UNIT", "minutes")
    monkeypatch.setenv("CRPT_REQUEST_LIMIT", "3")
    monkeypatch.setenv("CRPT_TIMEOUT_SECONDS", "5")

    client_settings = ClientSettings()

    assert client_settings.time_unit is TimeUnit.MINUTES
    assert client_settings.request_limit == 3
    assert client_settings.timeout_seconds == 5.0


def test_client_settings_default_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CRPT_API_URL", raising=False)

    assert ClientSettings().api_url == "https://ismp.crpt.ru/api/v3/lk/documents/create"


@pytest.mark.parametrize("value", ["0", "-2"])
def test_client_settings_reject_non_positive_limit(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    monkeypatch.setenv("CRPT_REQUEST_LIMIT", value)

    with pytest.raises(ValidationError):
        ClientSettings()


def test_unknown_time_unit_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRPT_TIME_UNIT", "fortnights")

    with pytest.raises(ValidationError):
        ClientSettings()
