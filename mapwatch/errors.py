class MapWatchError(Exception):
    pass


class ReportError(MapWatchError):
    def __init__(self, pid, message):
        super().__init__("pid {}: {}".format(pid, message))
        self.pid = pid
        self.message = message


class ProcessNotFound(ReportError):
    pass


class PermissionDenied(ReportError):
    pass


class ProcessExited(ReportError):
    pass


class ParseError(MapWatchError):
    def __init__(self, line, reason):
        super().__init__("{}: {!r}".format(reason, line))
        self.line = line
        self.reason = reason
