from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from localtalk import speaker
from localtalk.config import (
    LOCALTALK_COMMAND_TIMEOUT_ENV,
    LOCALTALK_EN_VOICE_ENV,
    LOCALTALK_JA_VOICE_ENV,
    LOCALTALK_LINUX_ENGINE_ENV,
    LOCALTALK_SELFTEST_TIMEOUT_ENV,
)
from localtalk.engines import base
from localtalk.process import CommandError


@dataclass
class Call:
    args: List[str]
    timeout: Optional[float] = None
    input_text: Optional[str] = None
    env: Optional[Dict[str, str]] = None


@dataclass
class FakeRunner:
    """Stands in for run_command; answers by matching argument prefixes."""

    calls: List[Call] = field(default_factory=list)
    responses: list = field(default_factory=list)

    def add(self, prefix, output="", error=None):
        self.responses.append((list(prefix), output, error))

    def fail(self, prefix, message="boom"):
        self.add(prefix, error=message)

    def __call__(self, args, *, timeout=None, input_text=None, env=None):
        args = list(args)
        self.calls.append(Call(args, timeout, input_text, env))
        for prefix, output, error in reversed(self.responses):
            if args[: len(prefix)] == prefix:
                if error is not None:
                    raise CommandError(args, error)
                return output
        return ""

    def commands(self, program=None):
        return [call.args for call in self.calls if program is None or call.args[0] == program]


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep LOCALTALK_* overrides from the host out of every test."""

    for name in (
        LOCALTALK_JA_VOICE_ENV,
        LOCALTALK_EN_VOICE_ENV,
        LOCALTALK_LINUX_ENGINE_ENV,
        LOCALTALK_SELFTEST_TIMEOUT_ENV,
        LOCALTALK_COMMAND_TIMEOUT_ENV,
    ):
        monkeypatch.delenv(name, raising=False)
    speaker.reset_engine()
    yield
    speaker.reset_engine()


@pytest.fixture
def runner(monkeypatch):
    """Replace every native command issued by the engines."""

    fake = FakeRunner()
    monkeypatch.setattr(base, "run_command", fake)
    return fake
