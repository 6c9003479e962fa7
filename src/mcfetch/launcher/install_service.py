from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from mcfetch.common.config import GamePaths, RuntimeConfig
from mcfetch.common.http import build_session
from mcfetch.common.types import VersionDescriptor
from mcfetch.launcher.download_service import DownloadOutcome, DownloadProgress, DownloadService
from mcfetch.launcher.manifest_service import ManifestService, resolve_version


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallRequest:
    version: str = ""
    game_dir: Path | None = None
    run_offline: bool = False
    username: str = "Player"
    check_only: bool = False
    verify: bool = True


@dataclass(frozen=True)
class InstallResult:
    version_id: str
    jar_path: Path
    descriptor: VersionDescriptor
    outcome: DownloadOutcome | None


class InstallService:
    def __init__(
        self,
        runtime: RuntimeConfig,
        manifests: ManifestService | None = None,
        downloads: DownloadService | None = None,
    ):
        self.runtime = runtime
        if manifests is None or downloads is None:
            session = build_session(runtime)
            manifests = manifests or ManifestService(runtime, session=session)
            downloads = downloads or DownloadService(runtime, session=session)
        self.manifests = manifests
        self.downloads = downloads

    def install(
        self,
        request: InstallRequest,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
    ) -> InstallResult:
        paths = GamePaths(request.game_dir) if request.game_dir is not None else GamePaths.default()
        log.debug("Install request: %s", request)

        manifest = self.manifests.fetch_manifest()
        if not request.version.strip():
            log.info("No version specified; using latest release: %s", manifest.latest_release)
        ref = resolve_version(manifest, request.version)

        log.info("Fetching version JSON for %s", ref.id)
        descriptor = self.manifests.fetch_descriptor(ref.url)
        jar_path = paths.client_jar(ref.id)

        if request.check_only:
            log.info("Check-only: %s client jar is %s at %s", ref.id, descriptor.client.url, jar_path)
            return InstallResult(version_id=ref.id, jar_path=jar_path, descriptor=descriptor, outcome=None)

        log.info("Downloading client jar to %s", jar_path)
        outcome = self.downloads.download(
            descriptor.client.url,
            jar_path,
            expected_sha1=descriptor.client.sha1 if request.verify else None,
            expected_size=descriptor.client.size if request.verify else None,
            progress_callback=progress_callback,
        )
        return InstallResult(version_id=ref.id, jar_path=jar_path, descriptor=descriptor, outcome=outcome)
