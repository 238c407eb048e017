"""Tests for settings and logging configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from service_client import ClientSettings, configure_logging, get_settings


class DummySettings(ClientSettings):
    model_config = {"env_file": None}


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVICE_NAME", "billing")
    monkeypatch.setenv("SERVICE_USE_TLS", "true")
    monkeypatch.setenv("SERVICE_REQUEST_TIMEOUT", "3.5")

    settings = DummySettings()

    assert settings.service_name == "billing"
    assert settings.use_tls is True
    assert settings.request_timeout == pytest.approx(3.5)


def test_settings_reject_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVICE_REQUEST_TIMEOUT", "0")

    with pytest.raises(ValidationError):
        DummySettings()


def test_configure_logging_writes_file_and_quiets_httpx(tmp_path) -> None:
    log_file = tmp_path / "logs" / "client.log"

    configure_logging("debug", log_file)
    logging.getLogger("service_client.test").debug("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_configure_logging_defaults_to_settings_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    get_settings.cache_clear()
    try:
        configure_logging()
    finally:
        get_settings.cache_clear()

    assert logging.getLogger().level == logging.WARNING
