from mcfetch.common.config import GamePaths, RuntimeConfig
from mcfetch.common.types import ClientDownload, VersionDescriptor, VersionManifest, VersionReference

__all__ = [
    "GamePaths",
    "RuntimeConfig",
    "ClientDownload",
    "VersionDescriptor",
    "VersionManifest",
    "VersionReference",
]
