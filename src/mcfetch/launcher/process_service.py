from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable

from mcfetch.common.config import RuntimeConfig
from mcfetch.common.errors import LaunchError


log = logging.getLogger(__name__)

Spawn = Callable[..., "subprocess.CompletedProcess"]


class ProcessService:
    """Runs a downloaded client jar with an external Java runtime.

    The jar alone is not a working client: libraries, natives and credentials
    are never assembled, so this is only a smoke test of the artifact.
    """

    def __init__(self, runtime: RuntimeConfig, spawn: Spawn | None = None):
        self.runtime = runtime
        self.spawn = spawn if spawn is not None else subprocess.run

    def build_command(self, jar_path: Path) -> list[str]:
        return [self.runtime.java_executable, "-jar", str(jar_path)]

    def run_client(self, jar_path: Path) -> int:
        cmd = self.build_command(jar_path)
        log.info("Launching client: %s", cmd)
        try:
            completed = self.spawn(cmd, shell=False, check=False)
        except OSError as exc:
            raise LaunchError(f"Could not start {cmd[0]}: {exc}") from exc
        if completed.returncode != 0:
            raise LaunchError(f"{cmd[0]} exited with code {completed.returncode}", returncode=completed.returncode)
        return completed.returncode
