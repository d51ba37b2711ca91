import os
import tempfile
import unittest

from callreplay import FileRecordStore, record_and_replay, update_mode


class SmokeTest(unittest.TestCase):
    def test_record_then_replay(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            calls = []

            def shout(text):
                calls.append(text)
                return text.upper()

            with update_mode("new"):
                fixture = record_and_replay("shout", shout, records_folder=temp_dir)
                self.assertEqual("HELLO", fixture("hello"))
                self.assertEqual("WORLD", fixture("world"))

            self.assertEqual(["shout-001.json", "shout-002.json"], sorted(os.listdir(temp_dir)))

            with update_mode("none"):
                replay = record_and_replay("shout", shout, records_folder=temp_dir)
                self.assertEqual("HELLO", replay("hello"))
                self.assertEqual("WORLD", replay("world"))
                self.assertTrue(replay.is_fulfilled())

            self.assertEqual(["hello", "world"], calls)
            self.assertEqual([1, 2], FileRecordStore(folder=temp_dir).list_indices("shout"))


if __name__ == "__main__":
    unittest.main()
