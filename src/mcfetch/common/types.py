from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VersionReference:
    id: str
    url: str
    type: str = ""


@dataclass(frozen=True)
class VersionManifest:
    latest_release: str
    latest_snapshot: str
    versions: tuple[VersionReference, ...]


@dataclass(frozen=True)
class ClientDownload:
    sha1: str
    size: int
    url: str


@dataclass(frozen=True)
class VersionDescriptor:
    id: str
    assets: str
    client: ClientDownload
