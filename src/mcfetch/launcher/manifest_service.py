from __future__ import annotations

import logging
from typing import Any

import requests

from mcfetch.common.config import RuntimeConfig
from mcfetch.common.errors import DecodeError, HTTPStatusError, TransportError, VersionNotFoundError
from mcfetch.common.http import build_session
from mcfetch.common.types import ClientDownload, VersionDescriptor, VersionManifest, VersionReference


log = logging.getLogger(__name__)


def resolve_version(manifest: VersionManifest, requested: str | None = None) -> VersionReference:
    """Return the manifest entry for ``requested``, or for the latest release when it is empty.

    Entries are scanned in manifest order and the first id match wins.
    """
    target = (requested or "").strip() or manifest.latest_release
    for ref in manifest.versions:
        if ref.id == target:
            return ref
    raise VersionNotFoundError(target)


class ManifestService:
    def __init__(self, runtime: RuntimeConfig, session: requests.Session | None = None):
        self.runtime = runtime
        self.session = session if session is not None else build_session(runtime)

    def _get_json(self, url: str) -> Any:
        try:
            resp = self.session.get(url, timeout=self.runtime.metadata_timeout_seconds)
        except requests.RequestException as exc:
            raise TransportError(url, exc) from exc
        with resp:
            if not resp.ok:
                raise HTTPStatusError(url, resp.status_code)
            try:
                return resp.json()
            except ValueError as exc:
                raise DecodeError(f"Malformed JSON from {url}: {exc}") from exc

    def fetch_manifest(self) -> VersionManifest:
        log.info("Fetching version manifest from %s", self.runtime.manifest_url)
        data = self._get_json(self.runtime.manifest_url)
        manifest = self._parse_manifest(data)
        log.debug(
            "Manifest lists %d versions (latest release=%s snapshot=%s)",
            len(manifest.versions),
            manifest.latest_release,
            manifest.latest_snapshot,
        )
        return manifest

    def fetch_descriptor(self, url: str) -> VersionDescriptor:
        log.debug("Fetching version descriptor from %s", url)
        return self._parse_descriptor(self._get_json(url))

    @staticmethod
    def _parse_manifest(data: Any) -> VersionManifest:
        if not isinstance(data, dict):
            raise DecodeError("Version manifest is not a JSON object.")
        latest = data.get("latest") or {}
        if not isinstance(latest, dict):
            raise DecodeError("Version manifest 'latest' is not an object.")
        if not str(latest.get("release", "")).strip():
            raise DecodeError("Version manifest has no 'latest.release'.")
        raw_versions = data.get("versions")
        if not isinstance(raw_versions, list):
            raise DecodeError("Version manifest has no 'versions' list.")

        versions: list[VersionReference] = []
        for idx, item in enumerate(raw_versions):
            if not isinstance(item, dict):
                raise DecodeError(f"Manifest version at index {idx} is not an object.")
            missing = [k for k in ("id", "url") if k not in item]
            if missing:
                raise DecodeError(f"Manifest version at index {idx} missing fields: {missing}")
            versions.append(
                VersionReference(
                    id=str(item["id"]),
                    url=str(item["url"]),
                    type=str(item.get("type", "")),
                )
            )
        return VersionManifest(
            latest_release=str(latest.get("release", "")),
            latest_snapshot=str(latest.get("snapshot", "")),
            versions=tuple(versions),
        )

    @staticmethod
    def _parse_descriptor(data: Any) -> VersionDescriptor:
        if not isinstance(data, dict):
            raise DecodeError("Version descriptor is not a JSON object.")
        downloads = data.get("downloads")
        client = downloads.get("client") if isinstance(downloads, dict) else None
        if not isinstance(client, dict) or not client.get("url"):
            raise DecodeError(f"Version descriptor {data.get('id', '?')!r} has no client download.")
        try:
            size = int(client.get("size", 0) or 0)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Invalid client download size: {client.get('size')!r}") from exc
        return VersionDescriptor(
            id=str(data.get("id", "")),
            assets=str(data.get("assets", "")),
            client=ClientDownload(
                sha1=str(client.get("sha1", "")),
                size=size,
                url=str(client["url"]),
            ),
        )
