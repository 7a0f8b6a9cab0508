"""Plain data records passed between the tokenizer, facade and engines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Token:
    """A maximal run of text written in a single script."""

    text: str
    is_japanese: bool

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class VoiceDescriptor:
    """Normalized metadata about one native voice."""

    name: str
    lang: Optional[str]
    platform: str
    gender: Optional[str] = None
    description: Optional[str] = None
    engine: Optional[str] = None


@dataclass(frozen=True)
class SpeakOptions:
    """Caller supplied settings; engines fill in their own defaults."""

    voice: Optional[str] = None
    rate: Optional[int] = None
    tokenize: bool = False

    def __post_init__(self) -> None:
        if self.rate is None:
            return
        if isinstance(self.rate, bool) or not isinstance(self.rate, int):
            raise ValueError(f"rate must be an integer, got {self.rate!r}")
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")
