"""Tests for the callreplay CLI."""

import contextlib
import io
import json
import os
import tempfile
import unittest

from callreplay.cli import main
from callreplay.core.canon import render_record
from callreplay.core.types import CallRecord, Outcome
from callreplay.storage.store import FileRecordStore


def run_cli(argv):
    """Run the CLI, returning (exit_code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    code = 0
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code or 0
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.folder = self._tmp.name
        self.store = FileRecordStore(folder=self.folder)
        for index, (args, data) in enumerate([([6, 2], 3), ([10, 5], 2)], start=1):
            self.store.save("div", index, render_record(CallRecord(args=args, outcome=Outcome.ok(data))))
        self.store.save(
            "fetch",
            1,
            render_record(CallRecord(args=["u1"], outcome=Outcome.failed({"message": "404"}))),
        )

    def tearDown(self):
        self._tmp.cleanup()

    def test_list(self):
        code, out, _ = run_cli(["list", self.folder])
        self.assertEqual(code, 0)
        self.assertIn("div: 2 record(s) [1, 2]", out)
        self.assertIn("fetch: 1 record(s) [1]", out)

    def test_list_single_fixture(self):
        code, out, _ = run_cli(["list", self.folder, "--name", "fetch"])
        self.assertEqual(code, 0)
        self.assertNotIn("div", out)

    def test_list_missing_folder(self):
        code, _, err = run_cli(["list", os.path.join(self.folder, "nope")])
        self.assertEqual(code, 1)
        self.assertIn("does not exist", err)

    def test_check_passes_for_valid_records(self):
        code, out, _ = run_cli(["check", self.folder])
        self.assertEqual(code, 0)
        self.assertIn("ok   div (2 record(s))", out)

    def test_check_reports_invalid_records_and_gaps(self):
        self.store.save("div", 4, '{"args": []}')
        code, out, _ = run_cli(["check", self.folder, "--format", "json"])
        self.assertEqual(code, 1)

        report = json.loads(out)
        self.assertFalse(report["ok"])
        div = next(f for f in report["fixtures"] if f["name"] == "div")
        self.assertEqual(div["gaps"], [3])
        self.assertEqual([i["index"] for i in div["invalid"]], [4])

    def test_show(self):
        code, out, _ = run_cli(["show", self.folder, "fetch", "1"])
        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(out), {"args": ["u1"], "result": {"success": False, "error": {"message": "404"}}}
        )

    def test_show_missing_record(self):
        code, _, err = run_cli(["show", self.folder, "div", "9"])
        self.assertEqual(code, 1)
        self.assertIn("no record for 'div' call #9", err)

    def test_no_command_prints_help(self):
        code, out, _ = run_cli([])
        self.assertEqual(code, 1)
        self.assertIn("usage: callreplay", out)


if __name__ == "__main__":
    unittest.main()
