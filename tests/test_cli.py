"""
Tests for the CLI entry point.

These tests focus on:
- exit codes (0 on success, 1 on any canvasfzf error)
- --print serving a fresh cache without touching the network
- the default run wiring config -> platform -> run()
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from canvasfzf.cache import save_listing
from canvasfzf.cli import build_parser, main

ENV = {
    "TOKEN": "secret",
    "CANVAS_API_URL": "https://canvas.example.edu",
    "COURSE_IDS": "101",
    "COURSE_NAMES": "Algorithms",
}


class TestCLI(unittest.TestCase):
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        self.assertFalse(args.refresh)
        self.assertFalse(args.print_only)
        self.assertEqual(args.verbose, 0)

    def test_missing_configuration_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.dict(os.environ, {}, clear=True):
                with self.assertRaises(SystemExit) as ctx:
                    main(["--dir", d, "--print"])
        self.assertEqual(ctx.exception.code, 1)

    def test_print_uses_fresh_cache(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            save_listing("Syllabus || https://x/1 || Algorithms\n", d)
            out = io.StringIO()
            with mock.patch.dict(os.environ, ENV, clear=True), mock.patch("requests.Session.get") as get:
                with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
                    main(["--dir", d, "--print"])
            get.assert_not_called()
        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(out.getvalue(), "Syllabus || https://x/1 || Algorithms\n")

    def test_undecodable_cache_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "buf").write_bytes(b"Caf\xe9 || https://x/1 || Algorithms\n")
            with mock.patch.dict(os.environ, ENV, clear=True):
                with self.assertRaises(SystemExit) as ctx:
                    main(["--dir", d, "--print"])
        self.assertEqual(ctx.exception.code, 1)

    def test_default_run_opens_link(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.dict(os.environ, ENV, clear=True), mock.patch("canvasfzf.cli.run") as run:
                with self.assertRaises(SystemExit) as ctx:
                    main(["--dir", d])
            self.assertEqual(ctx.exception.code, 0)
            config, platform = run.call_args.args
            self.assertEqual(config.work_dir, Path(d))
            self.assertEqual(platform.work_dir, Path(d))
            self.assertFalse(run.call_args.kwargs["force_refresh"])


if __name__ == "__main__":
    unittest.main()
