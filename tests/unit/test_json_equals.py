"""Tests for structural equality and structural diffs of JSON-like values."""

import unittest

from callreplay.core.json_diff import format_ops, json_diff
from callreplay.core.json_equals import json_equals, json_kind


class TestJsonKind(unittest.TestCase):
    def test_kinds(self):
        self.assertEqual(json_kind(None), "null")
        self.assertEqual(json_kind("a"), "string")
        self.assertEqual(json_kind(1), "number")
        self.assertEqual(json_kind(1.5), "number")
        self.assertEqual(json_kind(True), "boolean")
        self.assertEqual(json_kind([1]), "array")
        self.assertEqual(json_kind((1,)), "array")
        self.assertEqual(json_kind({"a": 1}), "object")

    def test_non_json_value_fails_loudly(self):
        with self.assertRaises(TypeError):
            json_kind(object())
        with self.assertRaises(TypeError):
            json_equals({1, 2}, {1, 2})


class TestJsonEquals(unittest.TestCase):
    def test_reflexive(self):
        values = [None, "x", 0, 2.5, True, [], [1, [2]], {}, {"a": {"b": [None]}}]
        for value in values:
            self.assertTrue(json_equals(value, value), value)

    def test_object_key_order_is_irrelevant(self):
        self.assertTrue(json_equals({"a": 1, "b": 2}, {"b": 2, "a": 1}))
        self.assertTrue(json_equals({"x": {"a": 1, "b": 2}}, {"x": {"b": 2, "a": 1}}))

    def test_array_order_matters(self):
        self.assertFalse(json_equals([1, 2], [2, 1]))
        self.assertFalse(json_equals([1, 2], [1, 2, 3]))

    def test_null_false_zero_are_distinct(self):
        self.assertFalse(json_equals(None, False))
        self.assertFalse(json_equals(False, 0))
        self.assertFalse(json_equals(None, 0))
        self.assertFalse(json_equals(True, 1))
        self.assertFalse(json_equals("", None))

    def test_int_and_float_are_both_numbers(self):
        self.assertTrue(json_equals(3, 3.0))
        self.assertFalse(json_equals(3, 3.5))

    def test_tuple_equals_list(self):
        self.assertTrue(json_equals((6, 2), [6, 2]))

    def test_objects_need_same_key_set(self):
        self.assertFalse(json_equals({"a": 1}, {"a": 1, "b": 2}))
        self.assertFalse(json_equals({"a": 1, "b": 2}, {"a": 1}))
        self.assertFalse(json_equals({"a": 1}, {"b": 1}))
        self.assertFalse(json_equals({"a": None}, {"b": None}))

    def test_symmetric(self):
        pairs = [
            ({"a": 1}, {"a": 1, "b": 2}),
            ([1], [1.0]),
            (None, {}),
            ("1", 1),
        ]
        for a, b in pairs:
            self.assertEqual(json_equals(a, b), json_equals(b, a), (a, b))


class TestJsonDiff(unittest.TestCase):
    def test_equal_values_have_empty_patch(self):
        self.assertEqual(json_diff({"a": [1, 2], "b": 1}, {"b": 1.0, "a": [1, 2]}), [])

    def test_ordered_operations(self):
        ops = json_diff({"a": 1, "gone": True, "same": 0}, {"a": 2, "new": None, "same": 0})
        self.assertEqual(
            ops,
            [
                {"op": "remove", "path": "$.gone", "old": True},
                {"op": "add", "path": "$.new", "value": None},
                {"op": "replace", "path": "$.a", "old": 1, "new": 2},
            ],
        )

    def test_bool_versus_number_is_a_replacement(self):
        self.assertEqual(
            json_diff([1], [True]),
            [{"op": "replace", "path": "$[0]", "old": 1, "new": True}],
        )

    def test_array_tail(self):
        self.assertEqual(
            json_diff([6, 2], [6, 2, 1]),
            [{"op": "add", "path": "$[2]", "value": 1}],
        )

    def test_format_ops_caps_output(self):
        ops = json_diff(list(range(12)), list(range(100, 112)))
        lines = format_ops(ops, limit=10)
        self.assertEqual(len(lines), 11)
        self.assertEqual(lines[0], "replace $[0]: 0 -> 100")
        self.assertEqual(lines[-1], "... and 2 more operations")


if __name__ == "__main__":
    unittest.main()
