"""Settings read from TAINTFLOAT_* environment variables."""

import pytest
from pydantic import ValidationError

from taintfloat.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TAINTFLOAT_DIAGNOSTICS", "TAINTFLOAT_POLICY", "TAINTFLOAT_CAPTURE_LOCATION"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.diagnostics is __debug__
    assert settings.policy == "unbounded"
    assert settings.capture_location is True


@pytest.mark.parametrize("value,expected", [("0", False), ("false", False), ("1", True), ("true", True)])
def test_diagnostics_from_env(monkeypatch, value: str, expected: bool):
    monkeypatch.setenv("TAINTFLOAT_DIAGNOSTICS", value)
    assert Settings().diagnostics is expected


@pytest.mark.parametrize("value", ["bounded", "BOUNDED", " Bounded "])
def test_policy_is_normalized(monkeypatch, value: str):
    monkeypatch.setenv("TAINTFLOAT_POLICY", value)
    assert Settings().policy == "bounded"


def test_invalid_policy_rejected(monkeypatch):
    monkeypatch.setenv("TAINTFLOAT_POLICY", "strict")
    with pytest.raises(ValidationError):
        Settings()


def test_capture_location_from_env(monkeypatch):
    monkeypatch.setenv("TAINTFLOAT_CAPTURE_LOCATION", "no")
    assert Settings().capture_location is False


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
