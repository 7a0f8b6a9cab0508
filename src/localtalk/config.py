"""Environment overrides and tuning constants for the speech engines."""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
import platform
from typing import Dict, Optional

from .errors import ConfigError

LOCALTALK_JA_VOICE_ENV = "LOCALTALK_JA_VOICE"
LOCALTALK_EN_VOICE_ENV = "LOCALTALK_EN_VOICE"
LOCALTALK_LINUX_ENGINE_ENV = "LOCALTALK_LINUX_ENGINE"
LOCALTALK_SELFTEST_TIMEOUT_ENV = "LOCALTALK_SELFTEST_TIMEOUT"
LOCALTALK_COMMAND_TIMEOUT_ENV = "LOCALTALK_COMMAND_TIMEOUT"

DEFAULT_SELFTEST_TIMEOUT = 5.0

# `say` has no default rate for English; Japanese voices default to this.
MACOS_JAPANESE_RATE = 200

# SpeechSynthesizer.Rate = clamp(round((rate - BASE) / STEP), -LIMIT, LIMIT)
WINDOWS_RATE_BASE = 200
WINDOWS_RATE_STEP = 20
WINDOWS_RATE_LIMIT = 10

# spd-say -r = clamp(round((rate - BASE) / STEP), -LIMIT, LIMIT)
SPD_RATE_BASE = 200
SPD_RATE_STEP = 2
SPD_RATE_LIMIT = 100


@dataclass(frozen=True)
class Settings:
    """Resolved environment overrides."""

    japanese_voice: Optional[str] = None
    english_voice: Optional[str] = None
    linux_engine: Optional[str] = None
    selftest_timeout: float = DEFAULT_SELFTEST_TIMEOUT
    command_timeout: Optional[float] = None


def _env_text(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def _env_seconds(name: str, fallback: Optional[float]) -> Optional[float]:
    value = _env_text(name)
    if value is None:
        return fallback
    try:
        seconds = float(value)
    except ValueError as exc:
        raise ConfigError(
            f"Invalid {name} value '{value}'. Provide a number of seconds."
        ) from exc
    if seconds <= 0:
        raise ConfigError(f"Invalid {name} value '{value}'. It must be positive.")
    return seconds


def resolve_settings() -> Settings:
    """Read the LOCALTALK_* variables into a Settings record."""

    return Settings(
        japanese_voice=_env_text(LOCALTALK_JA_VOICE_ENV),
        english_voice=_env_text(LOCALTALK_EN_VOICE_ENV),
        linux_engine=_env_text(LOCALTALK_LINUX_ENGINE_ENV),
        selftest_timeout=_env_seconds(
            LOCALTALK_SELFTEST_TIMEOUT_ENV, DEFAULT_SELFTEST_TIMEOUT
        ),
        command_timeout=_env_seconds(LOCALTALK_COMMAND_TIMEOUT_ENV, None),
    )


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity instead of to even."""

    return math.floor(value + 0.5)


def scale_rate(rate: int, base: int, step: int, limit: int) -> int:
    """Map a words-per-minute style rate onto a bounded native range."""

    return max(-limit, min(limit, round_half_up((rate - base) / step)))


def get_overrides() -> Dict[str, Optional[str]]:
    """Return the raw LOCALTALK_* environment values."""

    return {
        name: os.environ.get(name)
        for name in (
            LOCALTALK_JA_VOICE_ENV,
            LOCALTALK_EN_VOICE_ENV,
            LOCALTALK_LINUX_ENGINE_ENV,
            LOCALTALK_SELFTEST_TIMEOUT_ENV,
            LOCALTALK_COMMAND_TIMEOUT_ENV,
        )
    }


def describe_environment() -> str:
    """Human friendly summary used when --describe is invoked."""

    settings = resolve_settings()
    fields = [
        f"platform={platform.platform()}",
        f"ja_voice={settings.japanese_voice or 'default'}",
        f"en_voice={settings.english_voice or 'default'}",
        f"linux_engine={settings.linux_engine or 'auto'}",
        f"selftest_timeout={settings.selftest_timeout:g}s",
        f"command_timeout={_format_timeout(settings.command_timeout)}",
    ]
    return ", ".join(fields)


def _format_timeout(value: Optional[float]) -> str:
    if value is None:
        return "unset"
    return f"{value:g}s"
