import logging
import threading
from datetime import datetime

from mapwatch.diff import diff
from mapwatch.errors import MapWatchError, ProcessNotFound, ProcessExited
from mapwatch.parser import parse_snapshot
from mapwatch.reader import read_report
from mapwatch.report import TextReporter


class Watcher:
    """
     Polls the maps of one process and reports what changed between ticks.

     previous holds the last snapshot that was read completely, a failed tick never replaces it.
    """

    def __init__(self, pid, reporter=None, reader=read_report, kind='smaps', region_filter=None,
                 clock=datetime.now, sleep=None):
        self.pid = pid
        self.reporter = reporter if reporter else TextReporter()
        self.reader = reader
        self.kind = kind
        self.region_filter = region_filter
        self.clock = clock
        self._stopped = threading.Event()
        self.sleep = sleep if sleep else self._stopped.wait
        self.previous = None
        self.exited = False
        self.running = False

    def take_snapshot(self):
        try:
            text = self.reader(self.pid, self.kind)
        except ProcessNotFound as err:
            if self.previous is not None:
                raise ProcessExited(self.pid, err.message) from err
            raise

        return parse_snapshot(text, pid=self.pid, time=self.clock(), region_filter=self.region_filter)

    def tick(self):
        current = self.take_snapshot()
        events = diff(self.previous, current)

        if self.previous is None:
            self.reporter.initial(current, events)
        else:
            self.reporter.changes(self.previous, current, events)

        self.previous = current
        return events

    def start(self):
        events = self.tick()
        logging.info("Watching %d maps of process %s", len(self.previous), self.pid)
        return events

    def try_tick(self):
        try:
            events = self.tick()
            self.exited = False
            return events
        except ProcessExited as err:
            self.exited = True
            logging.warning("Process %s is gone: %s", self.pid, err.message)
        except MapWatchError as err:
            logging.error("Could not get maps: %s", err)
        return None

    def run(self, delay, count=None, exit_on_gone=False):
        self.running = True
        self.start()

        ticks = 1
        while self.running and (count is None or ticks < count):
            self.sleep(delay)
            if not self.running:
                break

            self.try_tick()
            ticks += 1

            if self.exited and exit_on_gone:
                break

    def stop(self):
        self.running = False
        self._stopped.set()
