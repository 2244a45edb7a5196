"""Tests for the netvisualizer host script -- config assembly."""

import argparse
import unittest

from netprobe.config import DEFAULTS
from netprobe.exceptions import ConfigError


def _args(**overrides):
    values = dict(
        download_url=None,
        upload_url=None,
        upload_size=None,
        pause=None,
        timeout=None,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


class TestBuildConfig(unittest.TestCase):
    def _build(self, base=None, **overrides):
        # Import here to avoid triggering side effects at module level
        from netvisualizer import _build_config
        return _build_config(_args(**overrides), base=dict(DEFAULTS) if base is None else base)

    def test_defaults(self):
        cfg = self._build()
        self.assertEqual(cfg.download_url, DEFAULTS["download_url"])
        self.assertEqual(cfg.upload_size, DEFAULTS["upload_size"])

    def test_overrides(self):
        cfg = self._build(upload_url="http://localhost:8080/post", upload_size=1024, pause=0.5, timeout=3.0)
        self.assertEqual(cfg.upload_url, "http://localhost:8080/post")
        self.assertEqual(cfg.upload_size, 1024)
        self.assertEqual(cfg.cycle_pause, 0.5)
        self.assertEqual(cfg.transfer_timeout, 3.0)

    def test_file_values_kept_when_not_overridden(self):
        base = dict(DEFAULTS, download_url="http://mirror.local/")
        cfg = self._build(base=base, upload_size=2048)
        self.assertEqual(cfg.download_url, "http://mirror.local/")
        self.assertEqual(cfg.upload_size, 2048)

    def test_invalid_override(self):
        with self.assertRaises(ConfigError):
            self._build(upload_size=0)
        with self.assertRaises(ConfigError):
            self._build(download_url="ftp://nope")


if __name__ == "__main__":
    unittest.main()
