"""Windows engine driving System.Speech through PowerShell."""

from __future__ import annotations

import re
import sys
from typing import Dict, List, Optional

from ..config import WINDOWS_RATE_BASE, WINDOWS_RATE_LIMIT, WINDOWS_RATE_STEP, scale_rate
from ..models import VoiceDescriptor
from ..process import CommandError
from ..system import is_command_available
from .base import VoiceEngine

POWERSHELL = "powershell"
POWERSHELL_FLAGS = ("-NoProfile", "-NonInteractive", "-Command")

# User supplied values travel in these variables, never inside the script.
TEXT_ENV = "LOCALTALK_SPEAK_TEXT"
VOICE_ENV = "LOCALTALK_SPEAK_VOICE"
RATE_ENV = "LOCALTALK_SPEAK_RATE"

CHECK_SCRIPT = (
    "try { Add-Type -AssemblyName System.Speech; Write-Output 'OK' } "
    "catch { Write-Output 'NG' }"
)

SPEAK_SCRIPT = f"""
$ErrorActionPreference = 'Stop'
Add-Type -AssemblyName System.Speech
$synth = New-Object System.Speech.Synthesis.SpeechSynthesizer
if ($env:{VOICE_ENV}) {{
    try {{ $synth.SelectVoice($env:{VOICE_ENV}) }}
    catch {{ Write-Warning "Voice '$($env:{VOICE_ENV})' not found, using default" }}
}}
if ($env:{RATE_ENV}) {{ $synth.Rate = [int]$env:{RATE_ENV} }}
$synth.Speak($env:{TEXT_ENV})
"""

LIST_SCRIPT = """
$ErrorActionPreference = 'Stop'
[Console]::OutputEncoding = [System.Text.Encoding]::UTF8
Add-Type -AssemblyName System.Speech
$synth = New-Object System.Speech.Synthesis.SpeechSynthesizer
foreach ($installed in $synth.GetInstalledVoices()) {
    $info = $installed.VoiceInfo
    Write-Output ($info.Name + '|' + $info.Culture + '|' + $info.Gender + '|' + $info.Description)
}
"""

JAPANESE_VOICE_RE = re.compile(r"haruka|ayumi|ichiro|sayaka|ja-JP|japanese|日本語", re.IGNORECASE)


def powershell_command(script: str) -> List[str]:
    return [POWERSHELL, *POWERSHELL_FLAGS, script]


def map_rate(rate: int) -> int:
    """Map a words-per-minute rate onto SpeechSynthesizer's -10..10 scale."""

    return scale_rate(rate, WINDOWS_RATE_BASE, WINDOWS_RATE_STEP, WINDOWS_RATE_LIMIT)


def parse_voice_list(output: str) -> List[VoiceDescriptor]:
    """Parse ``name|culture|gender|description`` records."""

    voices = []
    for line in output.splitlines():
        if not line.strip():
            continue
        fields = [field.strip() for field in line.split("|", 3)]
        fields += [""] * (4 - len(fields))
        name, culture, gender, description = fields
        if not name:
            continue
        voices.append(
            VoiceDescriptor(
                name=name,
                lang=culture or None,
                gender=gender or None,
                description=description or None,
                platform="windows",
            )
        )
    return voices


class WindowsVoiceEngine(VoiceEngine):
    platform = "windows"
    japanese_voice = "Microsoft Haruka Desktop"
    english_voice = "Microsoft Zira Desktop"

    def check_availability(self) -> bool:
        if not is_command_available(POWERSHELL):
            return False
        try:
            output = self.run(powershell_command(CHECK_SCRIPT))
        except CommandError:
            return False
        return output.strip() == "OK"

    def unavailable_message(self) -> str:
        return "PowerShell or System.Speech is not available on this Windows system"

    def show_install_instructions(self) -> None:
        lines = [
            "Check the following on Windows:",
            "",
            "1. PowerShell is available:",
            '   run "powershell" from a command prompt',
            "",
            "2. Speech features are enabled:",
            "   Settings > Time & Language > Speech",
            "",
            "3. A Japanese voice pack is installed:",
            "   Settings > Time & Language > Language > add Japanese",
            "   or fetch the language pack through Windows Update",
            "",
            "4. The .NET Framework is up to date",
        ]
        for line in lines:
            print(line, file=sys.stderr)

    def list_voices(self) -> List[VoiceDescriptor]:
        return parse_voice_list(self.run(powershell_command(LIST_SCRIPT)))

    def matches_japanese_voice(self, voice: VoiceDescriptor) -> bool:
        if JAPANESE_VOICE_RE.search(voice.name):
            return True
        return (voice.lang or "").lower().startswith("ja")

    def build_environment(self, text: str, voice: str, rate: Optional[int]) -> Dict[str, str]:
        env = {TEXT_ENV: text, VOICE_ENV: voice, RATE_ENV: ""}
        if rate is not None:
            env[RATE_ENV] = str(map_rate(rate))
        return env

    def synthesize(
        self, text: str, voice: str, rate: Optional[int], is_japanese: bool
    ) -> None:
        self.run(
            powershell_command(SPEAK_SCRIPT),
            env=self.build_environment(text, voice, rate),
        )
