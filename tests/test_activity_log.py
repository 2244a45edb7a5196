"""Unit tests for netprobe.activity_log -- bounded newest-first log."""

import unittest
from datetime import datetime

from netprobe.activity_log import ActivityLog, LogEntry, format_preview
from netprobe.probe import Direction

from helpers import make_entry, make_result


class TestActivityLog(unittest.TestCase):
    def test_newest_first(self):
        log = ActivityLog()
        entries = [make_entry(n) for n in range(1, 6)]
        for e in entries:
            log.append(e)
        self.assertEqual(list(log.snapshot()), list(reversed(entries)))

    def test_capacity_is_ten(self):
        log = ActivityLog()
        for n in range(25):
            log.append(make_entry(n))
            self.assertLessEqual(len(log), 10)
        self.assertEqual(len(log), 10)
        self.assertEqual(log.capacity, 10)

    def test_eleventh_evicts_oldest(self):
        log = ActivityLog()
        entries = [make_entry(n) for n in range(1, 12)]
        for e in entries[:10]:
            log.append(e)
        oldest = log.snapshot()[-1]
        self.assertIs(oldest, entries[0])

        log.append(entries[10])
        snap = log.snapshot()
        self.assertEqual(len(snap), 10)
        self.assertIs(snap[0], entries[10])
        self.assertNotIn(entries[0], snap)
        self.assertIs(snap[-1], entries[1])

    def test_snapshot_is_a_copy(self):
        log = ActivityLog()
        log.append(make_entry(1))
        snap = log.snapshot()
        log.append(make_entry(2))
        self.assertEqual(len(snap), 1)
        self.assertIsInstance(snap, tuple)

    def test_render_joins_entries(self):
        log = ActivityLog()
        log.append(make_entry(1))
        log.append(make_entry(2))
        text = log.render()
        self.assertLess(text.index("example.com/2"), text.index("example.com/1"))

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            ActivityLog(capacity=0)


class TestFormatPreview(unittest.TestCase):
    def test_short(self):
        self.assertEqual(format_preview(b"<!d"), "3C-21-64")

    def test_empty(self):
        self.assertEqual(format_preview(b""), "")

    def test_exactly_fifty_has_no_ellipsis(self):
        text = format_preview(bytes(50))
        self.assertFalse(text.endswith("..."))
        self.assertEqual(len(text.split("-")), 50)

    def test_long_is_truncated(self):
        text = format_preview(bytes(range(51)))
        self.assertTrue(text.endswith("..."))
        self.assertEqual(len(text[:-3].split("-")), 50)
        self.assertTrue(text.startswith("00-01-02"))


class TestLogEntry(unittest.TestCase):
    def test_from_result(self):
        result = make_result(Direction.UPLOAD, 123.456, payload=b"\xff\x00")
        entry = LogEntry.from_result(result)
        self.assertEqual(entry.direction, Direction.UPLOAD)
        self.assertEqual(entry.status, 200)
        self.assertEqual(entry.preview, "FF-00")
        self.assertEqual(entry.timestamp.microsecond, 0)

    def test_format(self):
        entry = LogEntry(
            direction=Direction.DOWNLOAD,
            url="https://www.google.com",
            status=200,
            kbps=42.0,
            preview="3C-21",
            timestamp=datetime(2024, 5, 1, 9, 5, 7),
        )
        self.assertEqual(
            entry.format(),
            "[09:05:07] Download\n"
            "URL: https://www.google.com\n"
            "Status: 200\n"
            "Speed: 42.00 KB/s\n"
            "Raw Data: 3C-21",
        )

    def test_immutable(self):
        entry = make_entry(1)
        with self.assertRaises(AttributeError):
            entry.kbps = 5.0

    def test_to_dict(self):
        d = make_entry(7).to_dict()
        self.assertEqual(d["direction"], "Download")
        self.assertEqual(d["kbps"], 7.0)


if __name__ == "__main__":
    unittest.main()
