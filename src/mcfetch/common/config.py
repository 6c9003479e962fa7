from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from mcfetch import __version__ as MCFETCH_VERSION
from mcfetch.common.errors import ConfigError, InstallIOError


DEFAULT_MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
PARTIAL_SUFFIX = ".partial"


@dataclass(frozen=True)
class GamePaths:
    game_dir: Path

    @classmethod
    def default(cls) -> "GamePaths":
        override = os.environ.get("MCFETCH_GAME_DIR", "").strip()
        if override:
            return cls(game_dir=Path(override))
        home = Path(os.environ.get("HOME", "").strip() or Path.home())
        return cls(game_dir=home / ".minecraft")

    @property
    def versions_dir(self) -> Path:
        return self.game_dir / "versions"

    @staticmethod
    def _safe_version_id(version_id: str) -> str:
        raw = str(version_id or "").strip()
        if not raw or raw in {".", ".."}:
            raise InstallIOError(f"Invalid version id for a directory name: {version_id!r}")
        if any(ch in raw for ch in ("/", "\\")) or Path(raw).is_absolute():
            raise InstallIOError(f"Invalid version id for a directory name: {version_id!r}")
        return raw

    def version_dir(self, version_id: str) -> Path:
        return self.versions_dir / self._safe_version_id(version_id)

    def client_jar(self, version_id: str) -> Path:
        vid = self._safe_version_id(version_id)
        return self.version_dir(vid) / f"{vid}.jar"

    def partial_jar(self, version_id: str) -> Path:
        jar = self.client_jar(version_id)
        return jar.with_name(jar.name + PARTIAL_SUFFIX)


@dataclass(frozen=True)
class RuntimeConfig:
    manifest_url: str = DEFAULT_MANIFEST_URL
    metadata_timeout_seconds: float = 20.0
    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    download_chunk_size: int = 64 * 1024
    max_retries: int = 0
    java_executable: str = "java"
    user_agent: str = f"mcfetch/{MCFETCH_VERSION}"

    @property
    def download_timeout(self) -> tuple[float, float]:
        return (self.connect_timeout_seconds, self.read_timeout_seconds)

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        try:
            return cls(
                manifest_url=os.environ.get("MCFETCH_MANIFEST_URL", DEFAULT_MANIFEST_URL),
                metadata_timeout_seconds=float(os.environ.get("MCFETCH_METADATA_TIMEOUT", "20")),
                connect_timeout_seconds=float(os.environ.get("MCFETCH_CONNECT_TIMEOUT", "10")),
                read_timeout_seconds=float(os.environ.get("MCFETCH_READ_TIMEOUT", "60")),
                download_chunk_size=int(os.environ.get("MCFETCH_DOWNLOAD_CHUNK", str(64 * 1024))),
                max_retries=int(os.environ.get("MCFETCH_MAX_RETRIES", "0")),
                java_executable=os.environ.get("MCFETCH_JAVA", "").strip() or "java",
            )
        except ValueError as exc:
            raise ConfigError(f"Invalid MCFETCH_* setting in environment: {exc}") from exc
