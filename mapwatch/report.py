import json
import sys

from mapwatch.events import Added, Removed, Modified
from mapwatch.json_encode import AppJSONEncoder
from mapwatch.utils import format_address, format_range


def _format_time(time):
    return time.isoformat() if time else "unknown"


def _was(old, new, formatter=str):
    if old == new:
        return ""
    return " (was {})".format(formatter(old))


def format_event(event):
    if isinstance(event, Modified):
        old, new = event.old, event.new
        return "CHANGED: {}{} size={}{} rss={}{} {}".format(
            format_range(new.start, new.end), _was(old.end, new.end, format_address),
            new.size, _was(old.size, new.size),
            new.rss, _was(old.rss, new.rss),
            new.name
        )

    if isinstance(event, Added):
        label = "MMAP"
    elif isinstance(event, Removed):
        label = "DROP"
    else:
        raise ValueError("Unknown event {!r}".format(event))

    region = event.region
    return "{}: {} size={} rss={} {}".format(
        label, format_range(region.start, region.end), region.size, region.rss, region.name
    )


def format_details(region):
    lines = [
        "Range: {}".format(format_range(region.start, region.end)),
        "Flags: {}, offset: {}, device: {}, inode: {}".format(region.perms, region.offset, region.device,
                                                             region.inode),
        "Name: {}".format(region.name),
        "Size: {}, Rss: {}".format(region.size, region.rss),
    ]
    lines.extend("{}: {}".format(key, value) for key, value in region.attributes.items())
    return lines


class TextReporter:
    def __init__(self, output=None, details=False):
        self.output = output if output else sys.stdout
        self.details = details

    def _print(self, line=""):
        self.output.write(line + "\n")
        self.output.flush()

    def initial(self, snapshot, events):
        self._print("Got initial maps of process {}:".format(snapshot.pid))
        for event in events:
            if self.details:
                for line in format_details(event.region):
                    self._print(line)
                self._print()
            else:
                self._print(format_event(event))
        self._print("Starting to observe...")

    def changes(self, previous, current, events):
        self._print()
        self._print("Differences in maps of pid {} between {} and {}:".format(
            current.pid, _format_time(previous.time), _format_time(current.time)
        ))
        for event in events:
            self._print(format_event(event))


class JsonReporter:
    def __init__(self, output=None):
        self.output = output if output else sys.stdout

    def _dump(self, data):
        self.output.write(json.dumps(data, cls=AppJSONEncoder, sort_keys=True) + "\n")
        self.output.flush()

    def initial(self, snapshot, events):
        self.changes(None, snapshot, events)

    def changes(self, previous, current, events):
        for event in events:
            data = event.to_json()
            data['pid'] = current.pid
            data['time'] = current.time
            self._dump(data)
