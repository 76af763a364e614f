json = False


def region_filter(region):
    if region.name.startswith('['):
        return region.name in ['[heap]', '[stack]']

    return '.so' in region.name
