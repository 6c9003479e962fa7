from __future__ import annotations

import json
from typing import Any, Iterable

import requests


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        body: bytes | None = None,
        chunks: Iterable[bytes] | None = None,
        url: str = "",
        fail_after: int | None = None,
    ):
        self.status_code = status_code
        self.url = url
        if body is None and payload is not None:
            body = json.dumps(payload).encode("utf-8")
        self._body = body or b""
        self._chunks = list(chunks) if chunks is not None else [self._body]
        self._fail_after = fail_after
        self.headers = {"Content-Length": str(sum(len(c) for c in self._chunks))}
        self.closed = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        return json.loads(self._body.decode("utf-8"))

    def iter_content(self, chunk_size: int = 1):
        for idx, chunk in enumerate(self._chunks):
            if self._fail_after is not None and idx >= self._fail_after:
                raise requests.ConnectionError("connection reset")
            yield chunk

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class FakeSession:
    """Serves canned responses keyed by URL and records every request."""

    def __init__(self, routes: dict[str, FakeResponse | Exception] | None = None):
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.calls.append((url, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status_code=404, url=url)
        if isinstance(route, Exception):
            raise route
        route.url = url
        return route

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]
