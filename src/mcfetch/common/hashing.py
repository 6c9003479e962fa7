from __future__ import annotations

import hashlib
from pathlib import Path


def hash_file(path: Path, algorithm: str = "sha1", chunk_size: int = 1024 * 1024) -> str:
    """Hex digest of ``path`` read in chunks; ``algorithm`` is any name ``hashlib.new`` accepts."""
    digest = hashlib.new(algorithm)
    with path.open("rb") as fh:
        for block in iter(lambda: fh.read(chunk_size), b""):
            digest.update(block)
    return digest.hexdigest()
