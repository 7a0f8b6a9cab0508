import pytest

from localtalk.config import (
    DEFAULT_SELFTEST_TIMEOUT,
    LOCALTALK_COMMAND_TIMEOUT_ENV,
    LOCALTALK_EN_VOICE_ENV,
    LOCALTALK_JA_VOICE_ENV,
    LOCALTALK_LINUX_ENGINE_ENV,
    LOCALTALK_SELFTEST_TIMEOUT_ENV,
    describe_environment,
    get_overrides,
    resolve_settings,
    round_half_up,
    scale_rate,
)
from localtalk.errors import ConfigError


def test_defaults_without_environment():
    settings = resolve_settings()
    assert settings.japanese_voice is None
    assert settings.english_voice is None
    assert settings.linux_engine is None
    assert settings.selftest_timeout == DEFAULT_SELFTEST_TIMEOUT
    assert settings.command_timeout is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv(LOCALTALK_JA_VOICE_ENV, "Otoya")
    monkeypatch.setenv(LOCALTALK_EN_VOICE_ENV, " Alex ")
    monkeypatch.setenv(LOCALTALK_LINUX_ENGINE_ENV, "festival")
    monkeypatch.setenv(LOCALTALK_SELFTEST_TIMEOUT_ENV, "2.5")
    monkeypatch.setenv(LOCALTALK_COMMAND_TIMEOUT_ENV, "30")

    settings = resolve_settings()

    assert settings.japanese_voice == "Otoya"
    assert settings.english_voice == "Alex"
    assert settings.linux_engine == "festival"
    assert settings.selftest_timeout == 2.5
    assert settings.command_timeout == 30.0
    assert get_overrides()[LOCALTALK_JA_VOICE_ENV] == "Otoya"


def test_blank_values_are_ignored(monkeypatch):
    monkeypatch.setenv(LOCALTALK_JA_VOICE_ENV, "   ")
    assert resolve_settings().japanese_voice is None


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_timeout_raises(monkeypatch, value):
    monkeypatch.setenv(LOCALTALK_COMMAND_TIMEOUT_ENV, value)
    with pytest.raises(ConfigError):
        resolve_settings()


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (-0.5, 0), (-1.5, -1), (2.4, 2), (-2.6, -3)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "rate, expected",
    [(200, 0), (210, 1), (100, -5), (400, 10), (1000, 10), (1, -10)],
)
def test_scale_rate_clamps(rate, expected):
    assert scale_rate(rate, base=200, step=20, limit=10) == expected


def test_describe_environment(monkeypatch):
    monkeypatch.setenv(LOCALTALK_EN_VOICE_ENV, "Alex")
    summary = describe_environment()
    assert "platform=" in summary
    assert "en_voice=Alex" in summary
    assert "ja_voice=default" in summary
    assert "command_timeout=unset" in summary
