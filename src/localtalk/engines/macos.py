"""macOS engine built on the ``say`` command."""

from __future__ import annotations

import re
import sys
from typing import List, Optional

from ..config import MACOS_JAPANESE_RATE
from ..models import VoiceDescriptor
from ..system import is_command_available
from .base import VoiceEngine

# "Kyoko               ja_JP    # こんにちは、私の名前はKyokoです。"
# Names may contain spaces and parentheses, e.g. "Eddy (Japanese (Japan))".
VOICE_LINE_RE = re.compile(r"^(.+?)\s+([a-z]{2,3}_[A-Z0-9]{2,3})\s+#\s*(.*)$")

JAPANESE_VOICE_NAMES = ("kyoko", "otoya", "kyoto")


def parse_voice_list(output: str) -> List[VoiceDescriptor]:
    """Parse the output of ``say -v ?``."""

    voices = []
    for line in output.splitlines():
        match = VOICE_LINE_RE.match(line.strip())
        if not match:
            continue
        name, lang, sample = match.groups()
        voices.append(
            VoiceDescriptor(
                name=name.strip(),
                lang=lang,
                description=sample.strip() or None,
                platform="macos",
            )
        )
    return voices


class MacOSVoiceEngine(VoiceEngine):
    platform = "macos"
    japanese_voice = "Kyoko"
    english_voice = "Samantha"

    def check_availability(self) -> bool:
        return is_command_available("say")

    def unavailable_message(self) -> str:
        return "The 'say' command is not available on this macOS system"

    def show_install_instructions(self) -> None:
        print("The 'say' command ships with every macOS release.", file=sys.stderr)
        print(
            "If it cannot be found, check your PATH includes /usr/bin or update macOS.",
            file=sys.stderr,
        )
        print(
            "Japanese voices (Kyoko, Otoya) can be added in System Settings > "
            "Accessibility > Spoken Content > System Voice > Manage Voices.",
            file=sys.stderr,
        )

    def list_voices(self) -> List[VoiceDescriptor]:
        return parse_voice_list(self.run(["say", "-v", "?"]))

    def matches_japanese_voice(self, voice: VoiceDescriptor) -> bool:
        name = voice.name.lower()
        if name in JAPANESE_VOICE_NAMES:
            return True
        if "(日本語" in voice.name or "ja_jp" in name:
            return True
        return (voice.lang or "").lower() == "ja_jp"

    def default_rate(self, is_japanese: bool) -> Optional[int]:
        return MACOS_JAPANESE_RATE if is_japanese else None

    def build_command(self, text: str, voice: str, rate: Optional[int]) -> List[str]:
        args = ["say", "-v", voice]
        if rate is not None:
            args.extend(["-r", str(rate)])
        args.extend(["--", text])
        return args

    def synthesize(
        self, text: str, voice: str, rate: Optional[int], is_japanese: bool
    ) -> None:
        self.run(self.build_command(text, voice, rate))
