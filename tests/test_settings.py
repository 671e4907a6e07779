import logging
from datetime import datetime, timezone

import pytest
import tzlocal
from pydantic import ValidationError

from whattimeisit.config import settings as settings_module
from whattimeisit.config.settings import Settings, get_settings
from whattimeisit.config.timezones import build_timezone_options, is_valid_zone, iter_zones
from whattimeisit.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "9000")
    settings = get_settings()
    assert settings.default_timezone == "Asia/Tokyo"
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


def test_settings_reject_unknown_timezone(monkeypatch):
    monkeypatch.setenv("DEFAULT_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_reject_bad_port():
    with pytest.raises(ValidationError):
        Settings(default_timezone="UTC", port=70000)


def test_detect_timezone_prefers_environment(monkeypatch):
    monkeypatch.setenv("TZ", "America/Chicago")
    assert settings_module._detect_timezone() == "America/Chicago"


def test_detect_timezone_falls_back_to_utc(monkeypatch):
    monkeypatch.delenv("TZ", raising=False)
    monkeypatch.delenv("LOCAL_TIMEZONE", raising=False)

    def broken():
        raise RuntimeError("no local zone")

    monkeypatch.setattr(tzlocal, "get_localzone_name", broken)
    assert settings_module._detect_timezone() == "UTC"


def test_registry_membership():
    assert is_valid_zone("UTC")
    assert is_valid_zone("America/New_York")
    assert not is_valid_zone("America/Springfield")
    assert not is_valid_zone(None)
    zones = iter_zones()
    assert list(zones) == sorted(zones)
    assert "UTC" in zones


def test_timezone_options_carry_abbreviation():
    options = {option.value: option.label for option in build_timezone_options(datetime(2023, 1, 15, tzinfo=timezone.utc))}
    assert options["America/New_York"] == "America/New_York (EST)"
    assert options["UTC"] == "UTC (UTC)"


def test_setup_logging_is_idempotent():
    logger = setup_logging("whattimeisit.test_setup", level="debug")
    again = setup_logging("whattimeisit.test_setup")
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
