import os
import unittest
from pathlib import Path
from unittest.mock import patch

from airport_finder.config import Config


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = Config()
        self.assertIsNone(config.reference_path)
        self.assertEqual(config.strategy, "kdtree")
        self.assertEqual(config.max_file_size_bytes, 100 * 1024 * 1024)
        self.assertIn(os.getcwd(), config.allowed_base_dirs)

    def test_from_env(self):
        env = {
            "AIRPORT_REFERENCE_PATH": "data/airports.csv",
            "AIRPORT_FINDER": "brute",
            "AIRPORT_ALLOWED_DIRS": os.pathsep.join(["/srv/reference", "/opt/data"]),
        }
        with patch.dict(os.environ, env):
            config = Config.from_env()
        self.assertEqual(config.reference_path, Path("data/airports.csv"))
        self.assertEqual(config.strategy, "brute")
        self.assertEqual(config.allowed_base_dirs[-2:], ("/srv/reference", "/opt/data"))

    def test_from_env_without_reference(self):
        with patch.dict(os.environ, {"AIRPORT_FINDER": ""}):
            os.environ.pop("AIRPORT_REFERENCE_PATH", None)
            config = Config.from_env()
        self.assertIsNone(config.reference_path)
        self.assertEqual(config.strategy, "kdtree")


if __name__ == "__main__":
    unittest.main()
