from mapwatch.events import Added, Removed, Modified, COMPARED_FIELDS


def is_modified(old, new):
    return any(getattr(old, field) != getattr(new, field) for field in COMPARED_FIELDS)


def diff(previous, current):
    """
     Compare two snapshots of the same process.
     Walks both in ascending start address order and emits at most one event per address.
     Without a previous snapshot every current region is reported as added.
    """
    if previous is None:
        return [Added(region) for region in current]

    events = []
    old_regions = list(previous)
    new_regions = list(current)
    i = 0
    j = 0
    while i < len(old_regions) and j < len(new_regions):
        old = old_regions[i]
        new = new_regions[j]
        if old.start < new.start:
            events.append(Removed(old))
            i += 1
        elif old.start > new.start:
            events.append(Added(new))
            j += 1
        else:
            if is_modified(old, new):
                events.append(Modified(old, new))
            i += 1
            j += 1

    events.extend(Removed(old) for old in old_regions[i:])
    events.extend(Added(new) for new in new_regions[j:])

    return events
