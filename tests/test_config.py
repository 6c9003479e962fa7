from __future__ import annotations

import os
import unittest
from pathlib import Path
from unittest.mock import patch

from mcfetch.common.config import DEFAULT_MANIFEST_URL, GamePaths, RuntimeConfig
from mcfetch.common.errors import ConfigError, InstallIOError


class GamePathsTests(unittest.TestCase):
    def test_default_uses_home(self) -> None:
        with patch.dict(os.environ, {"HOME": "/home/steve", "MCFETCH_GAME_DIR": ""}):
            self.assertEqual(GamePaths.default().game_dir, Path("/home/steve") / ".minecraft")

    def test_game_dir_override(self) -> None:
        with patch.dict(os.environ, {"MCFETCH_GAME_DIR": "/srv/mc"}):
            self.assertEqual(GamePaths.default().game_dir, Path("/srv/mc"))

    def test_layout(self) -> None:
        paths = GamePaths(Path("/g"))
        self.assertEqual(paths.client_jar("1.20.2"), Path("/g/versions/1.20.2/1.20.2.jar"))
        self.assertEqual(paths.partial_jar("1.20.2"), Path("/g/versions/1.20.2/1.20.2.jar.partial"))

    def test_rejects_path_like_ids(self) -> None:
        paths = GamePaths(Path("/g"))
        for bad in ("", "..", "../evil", "a/b", "a\\b"):
            with self.assertRaises(InstallIOError):
                paths.client_jar(bad)


class RuntimeConfigTests(unittest.TestCase):
    def test_from_env_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = RuntimeConfig.from_env()
        self.assertEqual(cfg.manifest_url, DEFAULT_MANIFEST_URL)
        self.assertEqual(cfg.metadata_timeout_seconds, 20.0)
        self.assertEqual(cfg.max_retries, 0)
        self.assertEqual(cfg.java_executable, "java")
        self.assertEqual(cfg.download_timeout, (10.0, 60.0))

    def test_from_env_overrides(self) -> None:
        with patch.dict(os.environ, {"MCFETCH_READ_TIMEOUT": "5", "MCFETCH_JAVA": "/usr/bin/java17"}):
            cfg = RuntimeConfig.from_env()
        self.assertEqual(cfg.read_timeout_seconds, 5.0)
        self.assertEqual(cfg.java_executable, "/usr/bin/java17")

    def test_from_env_rejects_non_numeric_values(self) -> None:
        with patch.dict(os.environ, {"MCFETCH_READ_TIMEOUT": "soon"}):
            with self.assertRaises(ConfigError):
                RuntimeConfig.from_env()


if __name__ == "__main__":
    unittest.main()
