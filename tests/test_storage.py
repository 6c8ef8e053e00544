"""
Unit tests for the preferences store.

Storage contract:
- Missing file or missing key -> None
- Corrupt file -> treated as empty (never crashes)
- put() keeps other keys and creates parent directories
"""

import json
import tempfile
import unittest
from pathlib import Path

from todayschedule.storage import JsonPrefsStore, KeyValueStore, MemoryStore


class TestJsonPrefsStore(unittest.TestCase):
    def test_missing_file_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            store = JsonPrefsStore(Path(d) / "missing.json")
            self.assertIsNone(store.get("courses_data"))

    def test_put_and_get_roundtrip_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "prefs.json"
            store = JsonPrefsStore(p)
            store.put("other", "x")
            store.put("courses_data", "[]")

            self.assertEqual(store.get("courses_data"), "[]")
            self.assertEqual(store.get("other"), "x")
            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data, {"other": "x", "courses_data": "[]"})

    def test_corrupt_file_is_treated_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "prefs.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertLogs("todayschedule.storage", level="ERROR"):
                self.assertIsNone(JsonPrefsStore(p).get("courses_data"))

    def test_deeply_nested_file_is_treated_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "prefs.json"
            p.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
            with self.assertLogs("todayschedule.storage", level="ERROR"):
                self.assertIsNone(JsonPrefsStore(p).get("courses_data"))

    def test_reads_fresh_on_every_get(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "prefs.json"
            store = JsonPrefsStore(p)
            self.assertIsNone(store.get("courses_data"))
            p.write_text(json.dumps({"courses_data": "[]"}), encoding="utf-8")
            self.assertEqual(store.get("courses_data"), "[]")

    def test_non_string_value_is_returned_as_json(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "prefs.json"
            p.write_text(json.dumps({"courses_data": 42}), encoding="utf-8")
            self.assertEqual(JsonPrefsStore(p).get("courses_data"), "42")


class TestMemoryStore(unittest.TestCase):
    def test_base_store_cannot_be_created(self) -> None:
        with self.assertRaises(TypeError):
            KeyValueStore()

    def test_get(self) -> None:
        store = MemoryStore({"a": "1"})
        self.assertEqual(store.get("a"), "1")
        self.assertIsNone(store.get("b"))


if __name__ == "__main__":
    unittest.main()
