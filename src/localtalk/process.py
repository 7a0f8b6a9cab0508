"""Running native speech commands as argument vectors."""

from __future__ import annotations

import os
import subprocess
from typing import Dict, Optional, Sequence


class CommandError(RuntimeError):
    """Raised when a native command cannot be spawned, fails or times out."""

    def __init__(self, args: Sequence[str], message: str) -> None:
        super().__init__(message)
        self.command = list(args)


def run_command(
    args: Sequence[str],
    *,
    timeout: Optional[float] = None,
    input_text: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> str:
    """Run ``args`` without a shell, wait for it and return its stdout.

    ``env`` entries are added on top of the current environment.
    """

    merged_env = None
    if env:
        merged_env = dict(os.environ)
        merged_env.update(env)

    try:
        result = subprocess.run(
            list(args),
            input=input_text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            env=merged_env,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandError(args, f"'{args[0]}' timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise CommandError(args, f"could not run '{args[0]}': {exc}") from exc

    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip() or "no output"
        raise CommandError(
            args, f"'{args[0]}' exited with status {result.returncode}: {detail}"
        )
    return result.stdout
