import collections
import logging
import types

from mapwatch.utils import build_repr, format_address, format_range

_Region = collections.namedtuple('_Region', [
    'start', 'end', 'size', 'rss', 'name',
    'perms', 'offset', 'device', 'inode', 'attributes'
])


class MapRegion(_Region):
    """
     One named mapping of a process at the moment its report was read.
     Size is derived from the address range but kept as its own field, rss is in bytes.
     Remaining smaps attributes are available read-only in attributes.
    """
    __slots__ = ()

    def __new__(cls, start, end, rss=0, name='', perms='', offset='00000000', device='00:00', inode='0',
                attributes=None):
        return super().__new__(cls, start, end, end - start, rss, name, perms, offset, device, inode,
                               types.MappingProxyType(dict(attributes or {})))

    def __repr__(self):
        return "<MapRegion {} {}>".format(format_range(self.start, self.end),
                                          build_repr(self, ['size', 'rss', 'name']))

    def to_json(self):
        return {
            'start': self.start,
            'end': self.end,
            'size': self.size,
            'rss': self.rss,
            'name': self.name,
            'perms': self.perms,
            'offset': self.offset,
            'device': self.device,
            'inode': self.inode,
            'attributes': dict(self.attributes),
        }


class Snapshot:
    """
     Named regions of one process keyed by start address, iterated in ascending address order.
     A snapshot is never modified after it is built.
    """

    def __init__(self, regions=(), pid=None, time=None):
        self.pid = pid
        self.time = time

        regions_by_start = {}
        for region in regions:
            if region.start in regions_by_start:
                logging.warning("Duplicate map at %s, keeping %r over %r",
                                format_address(region.start), region, regions_by_start[region.start])
            regions_by_start[region.start] = region

        self._regions = collections.OrderedDict(sorted(regions_by_start.items()))

    def __len__(self):
        return len(self._regions)

    def __iter__(self):
        return iter(self._regions.values())

    def __contains__(self, start):
        return start in self._regions

    def __getitem__(self, start):
        return self._regions[start]

    def get(self, start, default=None):
        return self._regions.get(start, default)

    def keys(self):
        return list(self._regions.keys())

    def __repr__(self):
        return "<Snapshot pid={} regions={}>".format(self.pid, len(self))
