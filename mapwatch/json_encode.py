import datetime
import json


class AppJSONEncoder(json.JSONEncoder):
    def default(self, o):  # pylint: disable=E0202
        if isinstance(o, datetime.datetime):
            return o.isoformat()

        if getattr(o, "to_json", None):
            return o.to_json()

        return json.JSONEncoder.default(self, o)
