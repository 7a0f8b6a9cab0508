"""Linux engine choosing between several command line synthesizers."""

from __future__ import annotations

from dataclasses import dataclass
import re
import sys
from typing import List, Optional, Tuple
import warnings

from ..config import SPD_RATE_BASE, SPD_RATE_LIMIT, SPD_RATE_STEP, Settings, scale_rate
from ..errors import VoiceUnavailableWarning
from ..models import VoiceDescriptor
from ..process import CommandError
from ..system import detect_linux_distribution, is_command_available
from .base import VoiceEngine


@dataclass(frozen=True)
class LinuxBackend:
    """A candidate synthesizer and how to check that it really runs."""

    command: str
    package: str
    priority: int
    description: str
    test_args: Tuple[str, ...]


SUPPORTED_BACKENDS: Tuple[LinuxBackend, ...] = (
    LinuxBackend(
        command="espeak-ng",
        package="espeak-ng",
        priority=1,
        description="Lightweight and multilingual, includes a Japanese voice",
        test_args=("--voices",),
    ),
    LinuxBackend(
        command="espeak",
        package="espeak",
        priority=2,
        description="The predecessor of espeak-ng, stable",
        test_args=("--voices",),
    ),
    LinuxBackend(
        command="festival",
        package="festival",
        priority=3,
        description="High quality synthesis, strongest in English",
        test_args=("--version",),
    ),
    LinuxBackend(
        command="spd-say",
        package="speech-dispatcher",
        priority=4,
        description="Accessibility speech service used by desktop screen readers",
        test_args=("--version",),
    ),
)

INSTALL_COMMANDS = {
    "debian": "sudo apt-get install {package}",
    "redhat": "sudo yum install {package}",
    "arch": "sudo pacman -S {package}",
    "alpine": "sudo apk add {package}",
    "suse": "sudo zypper install {package}",
    "unknown": "# install {package} with your package manager",
}

FESTIVAL_VOICES = (
    ("default", "en", "Default English voice"),
    ("us1", "en_US", "US English male"),
    ("us2", "en_US", "US English female"),
    ("us3", "en_US", "US English male"),
)

JAPANESE_VOICE_RE = re.compile(r"\b(ja|jp|japan|japanese)\b|日本語", re.IGNORECASE)


def get_install_command(distribution: str, package: str) -> str:
    template = INSTALL_COMMANDS.get(distribution, INSTALL_COMMANDS["unknown"])
    return template.format(package=package)


def map_spd_rate(rate: int) -> int:
    """Map a words-per-minute rate onto speech-dispatcher's -100..100 scale."""

    return scale_rate(rate, SPD_RATE_BASE, SPD_RATE_STEP, SPD_RATE_LIMIT)


def parse_espeak_voices(output: str, engine: str) -> List[VoiceDescriptor]:
    """Parse the table printed by ``espeak --voices``.

    Pty Language       Age/Gender VoiceName          File          Other Languages
     5  ja              --/M      Japanese           jpx/ja
    """

    voices = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 4 or parts[0] == "Pty":
            continue
        _, language, age_gender, voice_name = parts[:4]
        gender = age_gender.split("/")[-1] if "/" in age_gender else None
        voices.append(
            VoiceDescriptor(
                name=language,
                lang=language,
                gender=gender or None,
                description=" ".join([voice_name, *parts[4:]]),
                platform="linux",
                engine=engine,
            )
        )
    return voices


def parse_spd_voices(output: str) -> List[VoiceDescriptor]:
    """Parse ``spd-say -O``: one output module per line after a header."""

    voices = []
    for line in output.splitlines():
        name = line.strip()
        if not name or name.endswith(":") or name.upper() == "OUTPUT MODULES":
            continue
        voices.append(
            VoiceDescriptor(
                name=name,
                lang=None,
                description=f"Speech Dispatcher voice: {name}",
                platform="linux",
                engine="spd-say",
            )
        )
    return voices


class LinuxVoiceEngine(VoiceEngine):
    platform = "linux"
    japanese_voice = "ja"
    english_voice = "en"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        backends: Tuple[LinuxBackend, ...] = SUPPORTED_BACKENDS,
    ) -> None:
        super().__init__(settings)
        self.supported_backends = backends
        self.active_engine: Optional[LinuxBackend] = None

    # detection -----------------------------------------------------------

    def candidate_backends(self) -> List[LinuxBackend]:
        backends = sorted(self.supported_backends, key=lambda backend: backend.priority)
        forced = self.settings.linux_engine
        if forced:
            backends = [backend for backend in backends if backend.command == forced]
        return backends

    def detect_available_engine(self) -> Optional[LinuxBackend]:
        """Adopt the first installed backend whose self-test passes."""

        self.active_engine = None
        for backend in self.candidate_backends():
            if not is_command_available(backend.command):
                continue
            try:
                self.run(
                    [backend.command, *backend.test_args],
                    timeout=self.settings.selftest_timeout,
                )
            except CommandError:
                continue
            self.active_engine = backend
            break
        return self.active_engine

    def check_availability(self) -> bool:
        return self.detect_available_engine() is not None

    def invalidate(self) -> None:
        super().invalidate()
        self.active_engine = None

    def unavailable_message(self) -> str:
        if self.settings.linux_engine:
            return (
                f"Speech engine '{self.settings.linux_engine}' was requested "
                "but is not installed or not working."
            )
        return (
            "No speech synthesis engine found. "
            "Please install one of the supported engines."
        )

    def show_install_instructions(self) -> None:
        distribution = detect_linux_distribution()
        print(
            "No speech synthesis engine was found. Install one of the following:\n",
            file=sys.stderr,
        )
        total = len(self.supported_backends)
        for index, backend in enumerate(self.supported_backends, start=1):
            print(
                f"{index}. {backend.package} "
                f"(recommended: {total + 1 - backend.priority}/{total})",
                file=sys.stderr,
            )
            print(f"   {backend.description}", file=sys.stderr)
            print(f"   {get_install_command(distribution, backend.package)}", file=sys.stderr)
            print("", file=sys.stderr)
        print("Run the command again once installation has finished.", file=sys.stderr)
        print(
            "Note: Japanese voices may require an additional language package.",
            file=sys.stderr,
        )

    # voices --------------------------------------------------------------

    def list_voices(self) -> List[VoiceDescriptor]:
        if self.active_engine is None:
            return []
        command = self.active_engine.command
        if command in ("espeak-ng", "espeak"):
            return parse_espeak_voices(self.run([command, "--voices"]), command)
        if command == "festival":
            return [
                VoiceDescriptor(
                    name=name,
                    lang=lang,
                    description=description,
                    platform="linux",
                    engine="festival",
                )
                for name, lang, description in FESTIVAL_VOICES
            ]
        if command == "spd-say":
            try:
                return parse_spd_voices(self.run(["spd-say", "-O"]))
            except CommandError:
                return [
                    VoiceDescriptor(
                        name="default",
                        lang="en",
                        description="Default voice",
                        platform="linux",
                        engine="spd-say",
                    )
                ]
        return []

    def matches_japanese_voice(self, voice: VoiceDescriptor) -> bool:
        if (voice.lang or "").lower().startswith("ja"):
            return True
        return JAPANESE_VOICE_RE.search(voice.name) is not None

    # speech --------------------------------------------------------------

    def build_espeak_command(self, text: str, voice: str, rate: Optional[int]) -> List[str]:
        args = [self.active_engine.command, "-v", voice]
        if rate is not None:
            args.extend(["-s", str(rate)])
        args.extend(["--", text])
        return args

    def build_spd_command(self, text: str, voice: str, rate: Optional[int]) -> List[str]:
        args = ["spd-say", "--wait"]
        # Listed output modules carry no language; everything else is a language code.
        module = self.find_voice(voice) if voice else None
        if module is not None and module.engine == "spd-say" and module.lang is None:
            args.extend(["-o", voice])
        elif voice:
            args.extend(["-l", voice])
        if rate is not None:
            args.extend(["-r", str(map_spd_rate(rate))])
        args.extend(["--", text])
        return args

    def synthesize(
        self, text: str, voice: str, rate: Optional[int], is_japanese: bool
    ) -> None:
        if self.active_engine is None:
            raise CommandError([], "no speech engine available")

        command = self.active_engine.command
        if command in ("espeak-ng", "espeak"):
            self.run(self.build_espeak_command(text, voice, rate))
        elif command == "festival":
            if is_japanese:
                warnings.warn(
                    "festival has limited Japanese support.",
                    VoiceUnavailableWarning,
                    stacklevel=4,
                )
            self.run(["festival", "--tts"], input_text=text)
        elif command == "spd-say":
            self.run(self.build_spd_command(text, voice, rate))
        else:
            raise CommandError([command], f"unsupported engine '{command}'")
