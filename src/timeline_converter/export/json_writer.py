"""JSON rendering in the legacy timelineObjects shape."""

import json

from timeline_converter.constants import TIMELINE_OBJECTS_KEY
from timeline_converter.models.timeline import TimelineRecord


def render_json(records: list[TimelineRecord]) -> str:
    """
    Render records as pretty-printed ``{"timelineObjects": [...]}``.

    The output can be fed back in as a legacy-format input.
    """
    payload = {TIMELINE_OBJECTS_KEY: [record.to_wire() for record in records]}
    return json.dumps(payload, indent=2, ensure_ascii=False)
