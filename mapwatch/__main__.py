import logging
import math
import os
import signal
import sys
from argparse import ArgumentParser, ArgumentTypeError

import colorlog

from mapwatch.errors import MapWatchError
from mapwatch.report import TextReporter, JsonReporter
from mapwatch.watcher import Watcher

CONFIG_FILES = ['~/.mapwatchrc', 'mapwatch.conf.py']


def delay_type(value):
    try:
        delay = float(value)
    except ValueError:
        raise ArgumentTypeError("invalid delay: {}".format(value))
    if not math.isfinite(delay):
        raise ArgumentTypeError("delay must be a finite number: {}".format(value))
    if delay < 0:
        raise ArgumentTypeError("delay must not be negative: {}".format(value))
    return delay


def count_type(value):
    try:
        count = int(value)
    except ValueError:
        raise ArgumentTypeError("invalid count: {}".format(value))
    if count < 1:
        raise ArgumentTypeError("count must be at least 1: {}".format(value))
    return count


class MapWatch:
    LOGGING_FORMAT = "==MAPWATCH== %(levelname)s:%(name)s:%(message)s"

    def __init__(self, argv=None, output=None):
        self.output = output if output else sys.stdout
        self.options = self.parse_options(argv)
        self.watcher = None

    @staticmethod
    def create_parser():
        parser = ArgumentParser(prog='mapwatch', description='Report changes in memory maps of a running process')
        parser.add_argument("-v", dest="logging_level", default=0, action="count")
        parser.add_argument("--json", action="store_true", default=False, help="print changes as JSON lines")
        parser.add_argument("--details", action="store_true", default=False,
                            help="print all attributes of the initial maps")
        parser.add_argument("--maps", dest="kind", action="store_const", const="maps", default="smaps",
                            help="read /proc/PID/maps instead of smaps, rss is not available")
        parser.add_argument("--count", type=count_type, default=None, help="stop after this many reads")
        parser.add_argument("--exit-on-gone", action="store_true", default=False,
                            help="stop when the process exits")
        parser.add_argument("pid", type=int)
        parser.add_argument("delay", type=delay_type, help="seconds between reads")

        return parser

    def parse_options(self, argv):
        options = self.create_parser().parse_args(argv)
        self.setup_logging(sys.stderr, options.logging_level)

        options.region_filter = None

        # override from settings file
        options.__dict__.update(self.load_config())

        logging.debug("Current configuration: %s", options)
        return options

    @staticmethod
    def load_config():
        options = {}
        for config_file in [os.path.expanduser(path) for path in CONFIG_FILES]:
            try:
                with open(config_file) as file:
                    loc = {}
                    exec(file.read(), {}, loc)
                    options.update(loc)
                    logging.info("Configuration file %s loaded", config_file)

            except FileNotFoundError:
                logging.debug("Configuration file %s not found", config_file)
        return options

    def setup_logging(self, fd, level):  # pylint: disable=C0103
        logger = logging.getLogger()
        logger.handlers.clear()

        handler = logging.StreamHandler(fd)
        handler.setFormatter(colorlog.ColoredFormatter('%(log_color)s' + self.LOGGING_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(max(logging.ERROR - (level * 10), 1))

    def create_reporter(self):
        if self.options.json:
            return JsonReporter(self.output)
        return TextReporter(self.output, details=self.options.details)

    def main(self):
        signal.signal(signal.SIGTERM, self.handle_sigterm)
        signal.signal(signal.SIGINT, self.handle_sigterm)

        self.watcher = Watcher(
            self.options.pid,
            reporter=self.create_reporter(),
            kind=self.options.kind,
            region_filter=self.options.region_filter,
        )

        try:
            self.watcher.run(self.options.delay, count=self.options.count, exit_on_gone=self.options.exit_on_gone)
        except MapWatchError as err:
            logging.error("Could not read initial maps: %s", err)
            return 1

        logging.info("Goodbye!")
        return 0

    def handle_sigterm(self, signum, frame):
        if self.watcher:
            self.watcher.stop()


def main(argv=None):
    return MapWatch(argv).main()


if __name__ == '__main__':
    sys.exit(main())
