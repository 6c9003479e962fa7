from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import requests

from mcfetch.common.config import PARTIAL_SUFFIX, RuntimeConfig
from mcfetch.common.errors import (
    ChecksumMismatchError,
    HTTPStatusError,
    InstallIOError,
    TransportError,
)
from mcfetch.common.hashing import hash_file
from mcfetch.common.http import build_session


log = logging.getLogger(__name__)


class DownloadOutcome(enum.Enum):
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class DownloadProgress:
    phase: str
    message: str
    bytes_done: int | None = None
    bytes_total: int | None = None


def format_bytes(value: int | None) -> str:
    if value is None:
        return "?"
    units = ["B", "KB", "MB", "GB", "TB"]
    amount = float(value)
    idx = 0
    while amount >= 1024.0 and idx < len(units) - 1:
        amount /= 1024.0
        idx += 1
    return f"{amount:.1f}{units[idx]}"


class DownloadService:
    """Streams one artifact to disk behind a ``.partial`` file and renames it into place.

    A file already present at the destination is trusted as-is: it is never
    re-hashed or re-downloaded.
    """

    def __init__(self, runtime: RuntimeConfig, session: requests.Session | None = None):
        self.runtime = runtime
        self.session = session if session is not None else build_session(runtime)

    def _emit(
        self,
        callback: Callable[[DownloadProgress], None] | None,
        progress: DownloadProgress,
    ) -> None:
        if callback is None:
            return
        try:
            callback(progress)
        except Exception:
            log.exception("Download progress callback failed.")

    @staticmethod
    def partial_path(dest: Path) -> Path:
        return dest.with_name(dest.name + PARTIAL_SUFFIX)

    def download(
        self,
        url: str,
        dest: Path,
        expected_sha1: str | None = None,
        expected_size: int | None = None,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
    ) -> DownloadOutcome:
        if dest.is_file():
            log.info("Already present, skipping download: %s", dest)
            return DownloadOutcome.SKIPPED

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InstallIOError(f"Could not create directory {dest.parent}: {exc}") from exc

        partial = self.partial_path(dest)
        if partial.exists():
            log.info("Overwriting stale partial download %s", partial)

        self._stream_to(url, partial, expected_size, progress_callback)
        self._verify(partial, expected_sha1, expected_size, progress_callback)

        try:
            partial.replace(dest)
        except OSError as exc:
            raise InstallIOError(f"Could not move {partial} to {dest}: {exc}") from exc
        log.info("Saved %s", dest)
        return DownloadOutcome.DOWNLOADED

    def _stream_to(
        self,
        url: str,
        partial: Path,
        expected_size: int | None,
        progress_callback: Callable[[DownloadProgress], None] | None,
    ) -> int:
        chunk_size = self.runtime.download_chunk_size
        emit_threshold = max(1024 * 1024, chunk_size * 16)
        bytes_done = 0
        last_emitted = 0
        try:
            resp = self.session.get(url, stream=True, timeout=self.runtime.download_timeout)
        except requests.RequestException as exc:
            raise TransportError(url, exc) from exc

        with resp:
            if not resp.ok:
                raise HTTPStatusError(url, resp.status_code)
            content_len_raw = str(resp.headers.get("Content-Length", "")).strip()
            bytes_total = int(content_len_raw) if content_len_raw.isdigit() else None
            if bytes_total is None and expected_size:
                bytes_total = expected_size

            self._emit(
                progress_callback,
                DownloadProgress(
                    phase="download-start",
                    message=f"Downloading {url}",
                    bytes_done=0,
                    bytes_total=bytes_total,
                ),
            )
            try:
                with partial.open("wb") as fh:
                    for chunk in resp.iter_content(chunk_size=chunk_size):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        bytes_done += len(chunk)
                        if (bytes_done - last_emitted) >= emit_threshold:
                            self._emit(
                                progress_callback,
                                DownloadProgress(
                                    phase="download-progress",
                                    message=f"{format_bytes(bytes_done)} / {format_bytes(bytes_total)}",
                                    bytes_done=bytes_done,
                                    bytes_total=bytes_total,
                                ),
                            )
                            last_emitted = bytes_done
            except requests.RequestException as exc:
                raise TransportError(url, exc) from exc
            except OSError as exc:
                raise InstallIOError(f"Could not write {partial}: {exc}") from exc

        self._emit(
            progress_callback,
            DownloadProgress(
                phase="download-done",
                message=f"Downloaded {format_bytes(bytes_done)}",
                bytes_done=bytes_done,
                bytes_total=bytes_total if bytes_total is not None else bytes_done,
            ),
        )
        return bytes_done

    def _verify(
        self,
        partial: Path,
        expected_sha1: str | None,
        expected_size: int | None,
        progress_callback: Callable[[DownloadProgress], None] | None,
    ) -> None:
        if not expected_sha1 and not expected_size:
            return
        self._emit(progress_callback, DownloadProgress(phase="verify", message=f"Verifying {partial.name}"))

        try:
            actual_size = partial.stat().st_size
            digest = hash_file(partial, "sha1") if expected_sha1 else ""
        except OSError as exc:
            raise InstallIOError(f"Could not read {partial} for verification: {exc}") from exc

        if expected_size and actual_size != expected_size:
            self._remove_partial(partial)
            raise ChecksumMismatchError(f"Size mismatch for {partial.name}: {actual_size} != {expected_size}")
        if expected_sha1 and digest.lower() != expected_sha1.lower():
            self._remove_partial(partial)
            raise ChecksumMismatchError(f"Checksum mismatch for {partial.name}: {digest} != {expected_sha1}")

    @staticmethod
    def _remove_partial(partial: Path) -> None:
        try:
            partial.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("Could not remove %s: %s", partial, exc)
