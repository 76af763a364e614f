COMPARED_FIELDS = ('end', 'size', 'rss')


class Change:
    kind = None

    @property
    def start(self):
        raise NotImplementedError()

    def to_json(self):
        raise NotImplementedError()


class Added(Change):
    kind = 'added'

    def __init__(self, region):
        self.region = region

    @property
    def start(self):
        return self.region.start

    def __eq__(self, other):
        return isinstance(other, Added) and self.region == other.region

    def __repr__(self):
        return "Added({!r})".format(self.region)

    def to_json(self):
        return {'type': self.kind, 'region': self.region.to_json()}


class Removed(Change):
    kind = 'removed'

    def __init__(self, region):
        self.region = region

    @property
    def start(self):
        return self.region.start

    def __eq__(self, other):
        return isinstance(other, Removed) and self.region == other.region

    def __repr__(self):
        return "Removed({!r})".format(self.region)

    def to_json(self):
        return {'type': self.kind, 'region': self.region.to_json()}


class Modified(Change):
    kind = 'modified'

    def __init__(self, old, new):
        self.old = old
        self.new = new

    @property
    def start(self):
        return self.new.start

    @property
    def changed_fields(self):
        return [field for field in COMPARED_FIELDS if getattr(self.old, field) != getattr(self.new, field)]

    def __eq__(self, other):
        return isinstance(other, Modified) and (self.old, self.new) == (other.old, other.new)

    def __repr__(self):
        return "Modified({!r}, {!r})".format(self.old, self.new)

    def to_json(self):
        return {'type': self.kind, 'old': self.old.to_json(), 'new': self.new.to_json(),
                'changed': self.changed_fields}
