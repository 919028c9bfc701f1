"""
Unit tests for the listing snapshot cache.

Cache contract:
- Missing file -> None (refetch)
- Age < 300s -> file contents, age >= 300s -> None
- force_refresh -> None, regardless of age
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from canvasfzf.cache import CACHE_FILENAME, FRESHNESS_SECONDS, save_listing, should_use_cache
from canvasfzf.errors import FilesystemError

LISTING = "Syllabus || https://x/1 || Algorithms\n"
MTIME = 1_700_000_000


class TestCache(unittest.TestCase):
    def _write_cache(self, d: str) -> Path:
        p = save_listing(LISTING, d)
        os.utime(p, (MTIME, MTIME))
        return p

    def test_missing_file_is_a_miss(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self.assertIsNone(should_use_cache(d))

    def test_fresh_file_is_used(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self._write_cache(d)
            self.assertEqual(should_use_cache(d, now=MTIME + 10), LISTING)
            self.assertEqual(should_use_cache(d, now=MTIME + FRESHNESS_SECONDS - 0.5), LISTING)

    def test_exactly_300_seconds_is_stale(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self._write_cache(d)
            self.assertIsNone(should_use_cache(d, now=MTIME + 300))

    def test_old_file_is_stale(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self._write_cache(d)
            self.assertIsNone(should_use_cache(d, now=MTIME + 3600))

    def test_force_refresh_ignores_fresh_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self._write_cache(d)
            self.assertIsNone(should_use_cache(d, force_refresh=True, now=MTIME + 1))

    def test_save_overwrites(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            save_listing("old\n", d)
            p = save_listing(LISTING, d)
            self.assertEqual(p, Path(d) / CACHE_FILENAME)
            self.assertEqual(p.read_text(encoding="utf-8"), LISTING)

    def test_probe_error_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with mock.patch("pathlib.Path.stat", side_effect=PermissionError("denied")):
                with self.assertRaises(FilesystemError):
                    should_use_cache(d)

    def test_undecodable_cache_is_a_filesystem_error(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / CACHE_FILENAME
            p.write_bytes(b"Caf\xe9 || https://x/1 || Algorithms\n")
            os.utime(p, (MTIME, MTIME))
            with self.assertRaises(FilesystemError):
                should_use_cache(d, now=MTIME + 1)

    def test_save_into_missing_dir_fails(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(FilesystemError):
                save_listing(LISTING, Path(d) / "does-not-exist")


if __name__ == "__main__":
    unittest.main()
