import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from buildcache.config.env_expand import expand_env
from buildcache.config.loader import create_store, load_config
from buildcache.config.schema import AppConfig, StoreConfig
from buildcache.store.hash_file_store import DefaultHashFileStore, RacePolicy


class TestConfigLoader(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.test_dir.name) / "config.yaml"

    def tearDown(self):
        self.test_dir.cleanup()

    def _write(self, content: str):
        with open(self.config_path, "w") as f:
            f.write(content)

    def test_load_valid_config(self):
        store_dir = Path(self.test_dir.name) / "cache"
        self._write(f"""
        store:
          base_dir: "{store_dir}"
          race_policy: last_rename_wins
          fsync: false
        log_level: debug
        """)
        config = load_config(self.config_path)
        self.assertIsInstance(config, AppConfig)
        self.assertEqual(config.store.base_dir, store_dir)
        self.assertIs(config.store.race_policy, RacePolicy.LAST_RENAME_WINS)
        self.assertFalse(config.store.fsync)
        self.assertEqual(config.log_level, "DEBUG")

    def test_env_expansion(self):
        self._write("""
        store:
          base_dir: "${BUILDCACHE_TEST_DIR}/entries"
        """)
        with patch.dict(os.environ, {"BUILDCACHE_TEST_DIR": self.test_dir.name}):
            config = load_config(self.config_path)
        self.assertEqual(config.store.base_dir, Path(self.test_dir.name) / "entries")

    def test_expand_env_default_value(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(expand_env("${MISSING:-fallback}/x"), "fallback/x")
            self.assertEqual(expand_env("${MISSING}/x"), "/x")

    def test_empty_file_uses_defaults(self):
        self._write("")
        with patch.dict(os.environ, {"BUILDCACHE_DIR": self.test_dir.name}):
            config = load_config(self.config_path)
        self.assertEqual(config.store.base_dir, Path(self.test_dir.name).resolve())
        self.assertIs(config.store.race_policy, RacePolicy.FIRST_WRITER_WINS)
        self.assertTrue(config.store.fsync)
        self.assertEqual(config.log_level, "INFO")

    def test_invalid_race_policy(self):
        self._write("""
        store:
          race_policy: whoever
        """)
        with self.assertRaises(ValueError):
            load_config(self.config_path)

    def test_invalid_log_level(self):
        with self.assertRaises(ValueError):
            AppConfig(log_level="loud")

    def test_empty_base_dir_rejected(self):
        with self.assertRaises(ValueError):
            StoreConfig(base_dir="  ")

    def test_non_mapping_rejected(self):
        self._write("- just\n- a list\n")
        with self.assertRaises(ValueError):
            load_config(self.config_path)

    def test_base_dir_pointing_at_file_rejected(self):
        occupied = Path(self.test_dir.name) / "occupied"
        occupied.write_text("x")
        self._write(f"""
        store:
          base_dir: "{occupied}"
        """)
        with self.assertRaises(ValueError):
            load_config(self.config_path)

    def test_create_store(self):
        config = StoreConfig(base_dir=Path(self.test_dir.name) / "s", race_policy="last_rename_wins", fsync=False)
        store = create_store(config)
        self.assertIsInstance(store, DefaultHashFileStore)
        self.assertTrue(store.base_dir.is_dir())
        self.assertIs(store.race_policy, RacePolicy.LAST_RENAME_WINS)
        self.assertFalse(store.fsync)


if __name__ == "__main__":
    unittest.main()
