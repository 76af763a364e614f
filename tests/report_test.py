import io
import json
import unittest
from datetime import datetime

from mapwatch.diff import diff
from mapwatch.events import Added, Removed, Modified
from mapwatch.parser import parse_snapshot
from mapwatch.report import format_event, format_details, TextReporter, JsonReporter
from tests.utils.smaps import region, snapshot, smaps

T0 = datetime(2020, 1, 1, 12, 0, 0)
T1 = datetime(2020, 1, 1, 12, 0, 5)


class FormatTest(unittest.TestCase):
    def test_added(self):
        self.assertEqual("MMAP: 1000-2000 size=4096 rss=4096 /lib/a.so",
                         format_event(Added(region(0x1000, 0x2000, 4))))

    def test_removed(self):
        self.assertEqual("DROP: 5000-6000 size=4096 rss=0 [heap]",
                         format_event(Removed(region(0x5000, 0x6000, 0, '[heap]'))))

    def test_modified_all(self):
        event = Modified(region(0x1000, 0x2000, 4), region(0x1000, 0x3000, 8))
        self.assertEqual("CHANGED: 1000-3000 (was 2000) size=8192 (was 4096) rss=8192 (was 4096) /lib/a.so",
                         format_event(event))

    def test_modified_rss(self):
        event = Modified(region(0x1000, 0x2000, 4), region(0x1000, 0x2000, 0))
        self.assertEqual("CHANGED: 1000-2000 size=4096 rss=0 (was 4096) /lib/a.so", format_event(event))

    def test_unknown(self):
        with self.assertRaises(ValueError):
            format_event(object())

    def test_details(self):
        parsed = parse_snapshot(smaps((0x1000, 0x2000, '/lib/a.so', 4)))[0x1000]
        lines = format_details(parsed)

        self.assertEqual("Range: 1000-2000", lines[0])
        self.assertEqual("Flags: r-xp, offset: 00000000, device: 08:01, inode: 0", lines[1])
        self.assertEqual("Name: /lib/a.so", lines[2])
        self.assertEqual("Size: 4096, Rss: 4096", lines[3])
        self.assertIn("VmFlags: rd ex mr mw me sd", lines)


class TextReporterTest(unittest.TestCase):
    def setUp(self):
        self.output = io.StringIO()

    def test_initial(self):
        current = snapshot(region(0x1000, 0x2000), pid=7, time=T0)
        TextReporter(self.output).initial(current, diff(None, current))

        self.assertEqual([
            "Got initial maps of process 7:",
            "MMAP: 1000-2000 size=4096 rss=0 /lib/a.so",
            "Starting to observe...",
        ], self.output.getvalue().splitlines())

    def test_initial_details(self):
        current = snapshot(region(0x1000, 0x2000), pid=7, time=T0)
        TextReporter(self.output, details=True).initial(current, diff(None, current))

        self.assertIn("Name: /lib/a.so", self.output.getvalue().splitlines())

    def test_changes(self):
        previous = snapshot(region(0x1000, 0x2000), pid=7, time=T0)
        current = snapshot(region(0x3000, 0x4000), pid=7, time=T1)
        TextReporter(self.output).changes(previous, current, diff(previous, current))

        self.assertEqual([
            "",
            "Differences in maps of pid 7 between 2020-01-01T12:00:00 and 2020-01-01T12:00:05:",
            "DROP: 1000-2000 size=4096 rss=0 /lib/a.so",
            "MMAP: 3000-4000 size=4096 rss=0 /lib/a.so",
        ], self.output.getvalue().splitlines())


class JsonReporterTest(unittest.TestCase):
    def test_changes(self):
        output = io.StringIO()
        previous = snapshot(region(0x1000, 0x2000, 4), pid=7, time=T0)
        current = snapshot(region(0x1000, 0x2000, 8), pid=7, time=T1)

        JsonReporter(output).changes(previous, current, diff(previous, current))

        lines = output.getvalue().splitlines()
        self.assertEqual(1, len(lines))
        data = json.loads(lines[0])
        self.assertEqual('modified', data['type'])
        self.assertEqual(7, data['pid'])
        self.assertEqual('2020-01-01T12:00:05', data['time'])
        self.assertEqual(['rss'], data['changed'])
        self.assertEqual(4096, data['old']['rss'])
        self.assertEqual(8192, data['new']['rss'])
        self.assertEqual('/lib/a.so', data['new']['name'])

    def test_initial(self):
        output = io.StringIO()
        current = parse_snapshot(smaps((0x1000, 0x2000, '/lib/a.so', 4)), pid=7, time=T0)

        JsonReporter(output).initial(current, diff(None, current))

        data = json.loads(output.getvalue())
        self.assertEqual('added', data['type'])
        self.assertEqual(0x1000, data['region']['start'])
        self.assertEqual(4096, data['region']['attributes']['Pss'])
