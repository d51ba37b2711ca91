"""Tests for the canonical record text and its validating parse."""

import json
import unittest

from callreplay.core.canon import parse_record, render_record
from callreplay.core.types import CallRecord, Outcome


class TestRenderRecord(unittest.TestCase):
    def test_success_layout(self):
        text = render_record(CallRecord(args=[6, 2], outcome=Outcome.ok(3)))
        self.assertEqual(
            text,
            '{\n    "args": [\n        6,\n        2\n    ],\n'
            '    "result": {\n        "success": true,\n        "data": 3\n    }\n}\n',
        )

    def test_args_come_before_result(self):
        text = render_record(
            CallRecord(args={"z": 1, "a": 2}, outcome=Outcome.failed({"message": "boom"}))
        )
        self.assertLess(text.index('"args"'), text.index('"result"'))
        # Serializer key order is kept, not sorted
        self.assertLess(text.index('"z"'), text.index('"a"'))
        self.assertTrue(text.endswith("}\n"))
        self.assertEqual(
            json.loads(text)["result"], {"success": False, "error": {"message": "boom"}}
        )

    def test_rendering_is_deterministic(self):
        record = CallRecord(args=["é", {"k": [1, None]}], outcome=Outcome.ok({"v": 1.5}))
        self.assertEqual(render_record(record), render_record(record))
        self.assertIn("é", render_record(record))

    def test_nan_is_rejected(self):
        with self.assertRaises(ValueError):
            render_record(CallRecord(args=[float("nan")], outcome=Outcome.ok(None)))


class TestParseRecord(unittest.TestCase):
    def test_round_trip(self):
        record = CallRecord(args=[10, 0], outcome=Outcome.failed({"message": "Division by zero"}))
        parsed = parse_record(render_record(record))
        self.assertTrue(parsed.ok)
        self.assertEqual(parsed.record, record)

    def test_success_with_null_data(self):
        parsed = parse_record('{"args": [], "result": {"success": true, "data": null}}')
        self.assertTrue(parsed.ok)
        self.assertIsNone(parsed.record.outcome.data)

    def test_malformed_content_is_reported_not_raised(self):
        cases = {
            "not json": "invalid JSON",
            "[1, 2]": "JSON object",
            '{"result": {"success": true, "data": 1}}': "'args'",
            '{"args": []}': "'result'",
            '{"args": [], "result": 3}': "'result' must be",
            '{"args": [], "result": {"data": 1}}': "'result.success'",
            '{"args": [], "result": {"success": "yes", "data": 1}}': "'result.success'",
            '{"args": [], "result": {"success": true}}': "'data'",
            '{"args": [], "result": {"success": false}}': "'error'",
        }
        for text, reason in cases.items():
            parsed = parse_record(text)
            self.assertFalse(parsed.ok, text)
            self.assertIsNone(parsed.record)
            self.assertIn(reason, parsed.error, text)


if __name__ == "__main__":
    unittest.main()
