KILOBYTE = 1024

UNITS = {
    'B': 1,
    'kB': KILOBYTE,
    'MB': KILOBYTE ** 2,
    'GB': KILOBYTE ** 3,
}


def to_bytes(value, unit):
    if unit not in UNITS:
        raise ValueError('Unknown unit {}'.format(unit))
    return int(value) * UNITS[unit]


def format_address(address):
    return "%x" % address


def format_range(start, end):
    return "%s-%s" % (format_address(start), format_address(end))


def build_repr(obj, items):
    return " ".join([
                        "{}='{}'".format(attr, getattr(obj, attr))
                        for attr in items
                        ])
