"""Tests for config override behavior with defaults."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from WineRunner.config import DEFAULT_CONFIG_PATH, load_config, load_config_with_defaults


def _temp_dir(case: unittest.TestCase) -> Path:
    tmp = tempfile.TemporaryDirectory()
    case.addCleanup(tmp.cleanup)
    return Path(tmp.name)


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

prefix:
  path: /opt/base
  library_paths:
    - /usr/local/lib
  esync: false
  msync: false

debug:
  - channel: all
    enabled: false
"""


class TestConfigOverride(unittest.TestCase):
    def _write(self, directory: Path, name: str, text: str) -> Path:
        path = directory / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_override_merges_nested_sections(self) -> None:
        tmp = _temp_dir(self)
        base = self._write(tmp, "default.yml", _BASE_YAML)
        override = self._write(tmp, "custom.yml", "prefix:\n  msync: true\nlog:\n  level: DEBUG\n")
        cfg = load_config_with_defaults(override, default_path=base)
        self.assertEqual(cfg.prefix.path, "/opt/base")
        self.assertTrue(cfg.prefix.msync)
        self.assertFalse(cfg.prefix.esync)
        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.debug.encode(), "-all")

    def test_override_replaces_debug_list(self) -> None:
        tmp = _temp_dir(self)
        base = self._write(tmp, "default.yml", _BASE_YAML)
        override = self._write(tmp, "custom.yml", "debug:\n  - channel: seh\n  - channel: relay\n    enabled: false\n")
        cfg = load_config_with_defaults(override, default_path=base)
        self.assertEqual(cfg.debug.encode(), "+seh,-relay")

    def test_same_path_loads_defaults_only(self) -> None:
        tmp = _temp_dir(self)
        base = self._write(tmp, "default.yml", _BASE_YAML)
        cfg = load_config_with_defaults(base, default_path=base)
        self.assertEqual(cfg.prefix.library_paths, ("/usr/local/lib",))

    def test_non_mapping_root_rejected(self) -> None:
        tmp = _temp_dir(self)
        base = self._write(tmp, "default.yml", _BASE_YAML)
        override = self._write(tmp, "custom.yml", "- a\n- b\n")
        with self.assertRaisesRegex(ValueError, "Config root"):
            load_config_with_defaults(override, default_path=base)

    def test_packaged_defaults(self) -> None:
        self.assertTrue(DEFAULT_CONFIG_PATH.is_file())
        cfg = load_config()
        self.assertIsNone(cfg.prefix.path)
        self.assertEqual(cfg.prefix.library_paths, ("/usr/local/lib",))
        self.assertEqual(len(cfg.debug), 0)
        self.assertEqual(cfg.runtime.level, "INFO")


if __name__ == "__main__":
    unittest.main()
