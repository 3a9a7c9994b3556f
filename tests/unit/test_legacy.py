"""Tests for the legacy timelineObjects pass-through."""

import pytest

from timeline_converter.parsers.base import ParserError
from timeline_converter.parsers.legacy import LegacyTimelineParser
from timeline_converter.parsers.types import DiagnosticLog
from tests.helpers.timeline_data import activity_record, visit_record


@pytest.fixture
def parser():
    return LegacyTimelineParser()


def test_records_pass_through_unchanged(parser):
    originals = [visit_record(place_id="P1", address="1 Main St"), activity_record()]
    document = {"timelineObjects": [r.to_wire() for r in originals]}

    records = list(parser.parse_records(document, DiagnosticLog()))

    assert records == originals


def test_takeout_style_object(parser):
    document = {
        "timelineObjects": [
            {
                "placeVisit": {
                    "location": {
                        "latitudeE7": 473774526,
                        "longitudeE7": 85439376,
                        "placeId": "ChIJ-takeout",
                        "address": "Bahnhofplatz, Zurich",
                        "name": "Zurich HB",
                        "sourceInfo": {"deviceTag": 1234},
                    },
                    "duration": {
                        "startTimestampMs": "1577836800000",
                        "endTimestampMs": "1577840400000",
                    },
                    "placeConfidence": "HIGH_CONFIDENCE",
                    "visitConfidence": 95,
                }
            }
        ]
    }

    records = list(parser.parse_records(document, DiagnosticLog()))

    visit = records[0].place_visit
    assert visit.location.latitude_e7 == 473774526
    assert visit.location.place_id == "ChIJ-takeout"
    assert visit.duration.start_timestamp == "1577836800000"
    assert visit.visit_confidence == 95
    assert visit.center_lat_e7 == 473774526


def test_unknown_objects_are_skipped(parser):
    log = DiagnosticLog()
    document = {
        "timelineObjects": [
            {"somethingElse": {}},
            "text",
            visit_record().to_wire(),
        ]
    }

    records = list(parser.parse_records(document, log))

    assert len(records) == 1
    assert log.skipped_segments == 2


def test_invalid_object_becomes_diagnostic(parser):
    log = DiagnosticLog()
    document = {
        "timelineObjects": [
            {"placeVisit": {"location": {"latitudeE7": "north"}}},
            visit_record().to_wire(),
        ]
    }

    records = list(parser.parse_records(document, log, source="old.json"))

    assert len(records) == 1
    assert len(log) == 1
    assert log.entries[0].segment_index == 0
    assert "invalid timeline object" in log.entries[0].message


def test_object_with_both_branches_is_diagnostic(parser):
    log = DiagnosticLog()
    wire = visit_record().to_wire()
    wire.update(activity_record().to_wire())

    records = list(parser.parse_records({"timelineObjects": [wire]}, log))

    assert records == []
    assert len(log) == 1


def test_non_list_objects_is_fatal(parser):
    with pytest.raises(ParserError):
        list(parser.parse_records({"timelineObjects": "nope"}, DiagnosticLog()))
