"""Tests for the ordered call-list mock and the unittest helpers."""

import unittest

from callreplay import (
    CallListMock,
    ExpectedCall,
    FixtureAssertionsMixin,
    FixtureNotFulfilledError,
    MemoryRecordStore,
    RecordMismatchError,
    assert_fulfilled,
    record_and_replay,
)


def make_add_mock():
    return CallListMock(
        [
            ExpectedCall(args=(1, 2), return_value=3),
            ExpectedCall(args=(5, 7), return_value=12),
        ]
    )


class TestCallListMock(unittest.TestCase):
    def test_expected_calls_in_order(self):
        add = make_add_mock()
        self.assertFalse(add.is_fulfilled())
        self.assertEqual(add(1, 2), 3)
        self.assertEqual(add(5, 7), 12)
        self.assertTrue(add.is_fulfilled())
        self.assertEqual(add.call_count, 2)

    def test_out_of_order_call_fails(self):
        add = make_add_mock()
        with self.assertRaises(RecordMismatchError) as ctx:
            add(5, 7)
        self.assertIn("Arguments of call #1 differ", str(ctx.exception))
        self.assertIn("replace $[0]: 1 -> 5", str(ctx.exception))

    def test_extra_call_fails(self):
        add = make_add_mock()
        add(1, 2)
        add(5, 7)
        with self.assertRaises(RecordMismatchError) as ctx:
            add(0, 0)
        self.assertIn("2 calls were available (this was #3)", str(ctx.exception))

    def test_unfulfilled_reports_remaining(self):
        add = make_add_mock()
        add(1, 2)
        self.assertEqual(add.is_fulfilled().error, "1 expected calls were not made")

    def test_custom_serializer(self):
        greet = CallListMock(
            [ExpectedCall(kwargs={"name": "Ada", "loud": True}, return_value="HI ADA")],
            serialize=lambda args, kwargs: kwargs["name"],
        )
        self.assertEqual(greet(name="Ada", loud=False), "HI ADA")


class TestAssertFulfilled(FixtureAssertionsMixin, unittest.TestCase):
    def test_fulfilled_fixture_passes(self):
        add = make_add_mock()
        add(1, 2)
        add(5, 7)
        assert_fulfilled(add)
        self.assertFulfilled(add)

    def test_unfulfilled_fixture_fails(self):
        add = make_add_mock()
        with self.assertRaises(FixtureNotFulfilledError) as ctx:
            assert_fulfilled(add)
        self.assertIn("2 expected calls were not made", str(ctx.exception))

        with self.assertRaises(self.failureException):
            self.assertFulfilled(add)

    def test_record_and_replay_fixture(self):
        store = MemoryRecordStore()
        fixture = record_and_replay("neg", lambda x: -x, store=store, mode="new")
        fixture(3)
        self.assertFulfilled(fixture)

        replay = record_and_replay("neg", lambda x: -x, store=store, mode="none")
        with self.assertRaisesRegex(AssertionError, "0 of 1 calls were made"):
            assert_fulfilled(replay)

    def test_objects_without_is_fulfilled(self):
        with self.assertRaises(FixtureNotFulfilledError):
            assert_fulfilled(object())


if __name__ == "__main__":
    unittest.main()
