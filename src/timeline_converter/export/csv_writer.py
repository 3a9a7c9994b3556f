"""CSV rendering for map-import tools."""

import csv
import io

from timeline_converter.constants import (
    ACTIVITY_TYPE_UNKNOWN,
    CSV_HEADER,
    CSV_TYPE_ACTIVITY,
    CSV_TYPE_VISIT,
)
from timeline_converter.models.timeline import TimelineRecord
from timeline_converter.utils.numbers import format_e7


def record_to_row(record: TimelineRecord) -> list[str]:
    """
    Flatten one record into the fixed CSV column order.

    Activities use their start location and put the activity label in the
    Name column.
    """
    if record.place_visit is not None:
        visit = record.place_visit
        location = visit.location
        return [
            CSV_TYPE_VISIT,
            location.name or "",
            location.address or "",
            format_e7(location.latitude_e7),
            format_e7(location.longitude_e7),
            visit.duration.start_timestamp,
            visit.duration.end_timestamp,
            location.place_id or "",
        ]

    segment = record.activity_segment
    assert segment is not None
    return [
        CSV_TYPE_ACTIVITY,
        segment.activity_label or ACTIVITY_TYPE_UNKNOWN,
        "",
        format_e7(segment.start_location.latitude_e7),
        format_e7(segment.start_location.longitude_e7),
        segment.duration.start_timestamp,
        segment.duration.end_timestamp,
        "",
    ]


def render_csv(records: list[TimelineRecord]) -> str:
    """
    Render records as CSV text.

    Every cell is quoted, embedded quotes are doubled, rows are joined with
    ``\\n`` and there is no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow(record_to_row(record))
    return buffer.getvalue().removesuffix("\n")
