"""CLI argument handling and output tests for ``asmhover.cli.main``."""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from asmhover import cli
from asmhover.config import HoverSettings
from asmhover.render import render_hover


def _write_project(root: Path) -> Path:
    (root / "lib.asm").write_text("; computes checksum\n; of input buffer\nchecksum:\n  ret\n", encoding="utf-8")
    main = root / "main.asm"
    main.write_text("start:\n  call checksum\n", encoding="utf-8")
    return main


class CliTests(unittest.TestCase):
    def test_prints_hover_for_one_based_position(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            main = _write_project(root)
            stdout = io.StringIO()
            with mock.patch("asmhover.cli.load_settings", return_value=HoverSettings()), mock.patch(
                "asmhover.search.grep.shutil.which", return_value=None
            ), mock.patch("sys.stdout", new=stdout):
                status = cli.main([str(main), "2", "10", "--root", str(root), "--no-color"])

        self.assertEqual(status, 0)
        self.assertEqual(stdout.getvalue(), "computes checksum\nof input buffer\n")

    def test_disabled_provider_prints_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            main = _write_project(root)
            stdout = io.StringIO()
            with mock.patch(
                "asmhover.cli.load_settings", return_value=HoverSettings(enable_hover_provider=False)
            ), mock.patch("sys.stdout", new=stdout):
                status = cli.main([str(main), "2", "10", "--root", str(root)])

        self.assertEqual(status, 1)
        self.assertEqual(stdout.getvalue(), "")

    def test_missing_file_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["/nonexistent/file.asm", "1", "1"])
        self.assertIn("File not found", str(ctx.exception))

    def test_rejects_non_positive_line(self) -> None:
        with mock.patch("sys.stderr", new=io.StringIO()), self.assertRaises(SystemExit):
            cli.main(["file.asm", "0", "1"])


class RenderHoverTests(unittest.TestCase):
    def test_plain_rendering_is_one_fragment_per_line(self) -> None:
        self.assertEqual(render_hover(["a", "============", "b"], no_color=True), "a\n============\nb\n")

    def test_plain_rendering_escapes_control_bytes(self) -> None:
        self.assertEqual(render_hover(["bell\x07"], no_color=True), "bell\\x07\n")

    def test_color_rendering_highlights_fragments(self) -> None:
        rendered = render_hover(["entry A", "============", "entry B"], style="not-a-style")
        self.assertIn("\x1b[", rendered)
        self.assertIn("entry A", rendered)
        self.assertIn("\n============\n", rendered)


if __name__ == "__main__":
    unittest.main()
