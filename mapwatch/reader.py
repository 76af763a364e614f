import errno
import logging

from ptrace.linux_proc import ProcError, readProcessStat

from mapwatch.errors import ReportError, ProcessNotFound, PermissionDenied, ProcessExited

ZOMBIE = 'Z'

ERRORS = {
    errno.ENOENT: ProcessNotFound,
    errno.ESRCH: ProcessExited,
    errno.EACCES: PermissionDenied,
    errno.EPERM: PermissionDenied,
}


def read_proc_file(pid, kind):
    # raw bytes, mapped paths are not guaranteed to be valid utf-8
    with open("/proc/{}/{}".format(pid, kind), 'rb') as file:
        return file.read()


def is_zombie(pid):
    try:
        return readProcessStat(pid).state == ZOMBIE
    except ProcError:
        return False


def read_report(pid, kind='smaps'):
    try:
        raw = read_proc_file(pid, kind)
    except OSError as err:
        error_class = ERRORS.get(err.errno, ReportError)
        raise error_class(pid, str(err)) from err

    if not raw and is_zombie(pid):
        raise ProcessExited(pid, "process is a zombie")

    logging.debug("Read %d bytes from /proc/%s/%s", len(raw), pid, kind)
    return raw.decode('utf-8', errors='backslashreplace')
