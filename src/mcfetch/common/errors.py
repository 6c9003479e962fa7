from __future__ import annotations


class McFetchError(Exception):
    """Base class for every failure that ends a run with exit code 1."""


class TransportError(McFetchError):
    def __init__(self, url: str, cause: BaseException):
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class HTTPStatusError(McFetchError):
    def __init__(self, url: str, status_code: int):
        super().__init__(f"HTTP {status_code} fetching {url}")
        self.url = url
        self.status_code = status_code


class DecodeError(McFetchError, ValueError):
    pass


class VersionNotFoundError(McFetchError, LookupError):
    def __init__(self, version_id: str):
        super().__init__(f"Version not found in manifest: {version_id}")
        self.version_id = version_id


class InstallIOError(McFetchError, OSError):
    pass


class ChecksumMismatchError(McFetchError):
    pass


class LaunchError(McFetchError):
    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class ConfigError(McFetchError, ValueError):
    pass
