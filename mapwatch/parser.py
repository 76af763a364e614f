import logging
import re

from mapwatch.errors import ParseError
from mapwatch.region import MapRegion, Snapshot
from mapwatch.utils import UNITS, to_bytes

ATTRIBUTE = re.compile(r'^(?P<key>[A-Za-z_][A-Za-z0-9_]*):\s*(?P<value>.*)$')
RSS_KEY = 'Rss'


def split_blocks(text):
    """ yields (header, attribute lines) for every mapping in smaps or maps text """
    header = None
    attributes = []
    for line in text.splitlines():
        if not line.strip():
            continue

        if ATTRIBUTE.match(line):
            if header is None:
                raise ParseError(line, "attribute line before first map header")
            attributes.append(line)
            continue

        if header is not None:
            yield header, attributes
        header = line
        attributes = []

    if header is not None:
        yield header, attributes


def parse_header(line):
    fields = line.split(None, 5)
    if len(fields) < 5:
        raise ParseError(line, "malformed map header")

    bounds = fields[0].split('-')
    if len(bounds) != 2:
        raise ParseError(line, "malformed address range")

    try:
        start = int(bounds[0], 16)
        end = int(bounds[1], 16)
    except ValueError:
        raise ParseError(line, "malformed address range")

    if end <= start:
        raise ParseError(line, "map ends before it starts")

    return {
        'start': start,
        'end': end,
        'perms': fields[1],
        'offset': fields[2],
        'device': fields[3],
        'inode': fields[4],
        'name': fields[5].strip() if len(fields) > 5 else '',
    }


def parse_attribute(line):
    match = ATTRIBUTE.match(line)
    key = match.group('key')
    value = match.group('value').strip()
    parts = value.split()

    if len(parts) == 2 and parts[1] in UNITS:
        try:
            return key, to_bytes(parts[0], parts[1])
        except ValueError:
            raise ParseError(line, "malformed {} value".format(key))

    if len(parts) == 1 and parts[0].isdigit():
        return key, int(parts[0])

    if key == RSS_KEY:
        raise ParseError(line, "malformed {} value".format(key))

    return key, value


def parse_block(header, lines):
    """
     Parses one mapping, returns None for anonymous mappings.
     Every attribute line is validated even when the mapping is anonymous
     so a broken report never passes as a shorter snapshot.
    """
    fields = parse_header(header)
    attributes = dict(parse_attribute(line) for line in lines)

    if not fields['name']:
        return None

    rss = attributes.pop(RSS_KEY, 0)
    return MapRegion(rss=rss, attributes=attributes, **fields)


def parse_snapshot(text, pid=None, time=None, region_filter=None):
    regions = []
    for header, lines in split_blocks(text):
        region = parse_block(header, lines)
        if region is None:
            continue

        if region_filter and not region_filter(region):
            logging.debug("Map %r excluded by filter", region)
            continue

        regions.append(region)

    return Snapshot(regions, pid=pid, time=time)
