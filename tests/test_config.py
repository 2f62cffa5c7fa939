"""Tests for settings loading."""

import pytest

from twinkly_client.config import Settings


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TWINKLY_HOST", "10.0.0.5")
    monkeypatch.setenv("TWINKLY_LED_COUNT", "250")
    monkeypatch.setenv("TWINKLY_USE_PROXY", "true")

    settings = Settings(_env_file=None)

    assert settings.host == "10.0.0.5"
    assert settings.led_count == 250
    assert settings.use_proxy is True
    assert settings.proxy_url == "http://127.0.0.1:8888"
