"""End-to-end tests for batch conversion of input files."""

import json

import pytest

from timeline_converter.export import build_artifacts
from timeline_converter.models.results import ProcessingOptions
from timeline_converter.processing.pipeline import (
    ConversionError,
    convert_documents,
    convert_files,
)
from tests.helpers.timeline_data import (
    android_activity,
    android_path,
    android_visit,
    ios_activity,
    ios_visit,
)

KEEP_EVERYTHING = ProcessingOptions(remove_activities=False, remove_duplicates=False)


def test_single_android_visit(write_json, parser_registry):
    path = write_json(
        "android.json",
        {"semanticSegments": [android_visit(place_id="P1", probability=0.9)]},
    )

    result = convert_files([path], registry=parser_registry)

    assert result.counts.original == 1
    assert result.counts.final == 1
    visit = result.records[0].place_visit
    assert (visit.location.latitude_e7, visit.location.longitude_e7) == (
        400000000,
        -750000000,
    )
    assert visit.visit_confidence == 90
    assert result.diagnostics == []


def test_empty_timeline_path_only(write_json, parser_registry):
    path = write_json("path.json", {"semanticSegments": [android_path([])]})

    result = convert_files([path], registry=parser_registry)

    assert result.counts.original == 0
    assert result.records == []
    assert result.diagnostics == []


def test_unrecognized_segment_only(write_json, parser_registry):
    path = write_json("odd.json", [{"startTime": "t0", "timelineMemory": {"trip": {}}}])

    result = convert_files([path], registry=parser_registry)

    assert result.counts.original == 0
    assert result.diagnostics == []
    assert result.skipped_segments == 1


def test_malformed_json_aborts_batch(write_json, parser_registry, tmp_path):
    good = write_json("good.json", [ios_visit()])
    bad = write_json("broken.json", '{"semanticSegments": [', raw=True)
    never_read = tmp_path / "inputs" / "missing.json"

    with pytest.raises(ConversionError) as exc_info:
        convert_files([good, bad, never_read], registry=parser_registry)

    assert exc_info.value.source == "broken.json"
    assert "invalid JSON" in str(exc_info.value)
    assert str(exc_info.value).startswith("broken.json: ")


def test_unrecognized_format_names_file_and_keys(write_json, parser_registry):
    path = write_json("records.json", {"locations": [], "version": 1})

    with pytest.raises(ConversionError) as exc_info:
        convert_files([path], registry=parser_registry)

    message = str(exc_info.value)
    assert message.startswith("records.json: ")
    assert "locations, version" in message


def test_unreadable_file(tmp_path, parser_registry):
    with pytest.raises(ConversionError, match="cannot read file"):
        convert_files([tmp_path / "nowhere.json"], registry=parser_registry)


def test_byte_order_mark_is_accepted(write_json, parser_registry):
    path = write_json("bom.json", "\ufeff" + json.dumps([ios_visit()]), raw=True)

    result = convert_files([path], registry=parser_registry)

    assert result.counts.final == 1


def test_multiple_files_combined_in_order(write_json, parser_registry):
    android = write_json(
        "phone_a.json",
        {"semanticSegments": [android_visit(place_id="A", lat=1.0), android_activity()]},
    )
    ios = write_json("phone_b.json", [ios_visit(place_id="B", lat=2.0), ios_activity()])
    legacy = write_json(
        "takeout.json",
        {
            "timelineObjects": [
                {
                    "placeVisit": {
                        "location": {
                            "latitudeE7": 30000000,
                            "longitudeE7": 0,
                            "placeId": "C",
                        },
                        "duration": {"startTimestamp": "x", "endTimestamp": "y"},
                    }
                }
            ]
        },
    )

    result = convert_files([android, ios, legacy], KEEP_EVERYTHING, parser_registry)

    assert result.counts.original == 5
    assert [r.is_visit for r in result.records] == [True, False, True, False, True]
    visit_ids = [r.place_visit.location.place_id for r in result.records if r.is_visit]
    assert visit_ids == ["A", "B", "C"]


def test_cross_file_duplicates_merged(write_json, parser_registry):
    first = write_json("day1.json", {"semanticSegments": [android_visit(place_id="P1")]})
    second = write_json(
        "day2.json",
        {"semanticSegments": [android_visit(place_id="P1", address="123 Main St")]},
    )

    result = convert_files([first, second], registry=parser_registry)

    assert result.counts.final == 1
    assert result.stats.removed_duplicates == 1
    assert result.records[0].place_visit.location.address == "123 Main St"


def test_default_options_clean(write_json, parser_registry):
    path = write_json(
        "mixed.json",
        {
            "semanticSegments": [
                android_visit(place_id="P1"),
                android_activity(),
                android_path([(1.0, 1.0), (2.0, 2.0)]),
                android_visit(place_id="P1"),
                android_visit(place_id="P2", lat=10.0),
            ]
        },
    )

    result = convert_files([path], registry=parser_registry)

    assert result.counts.original == 5
    assert result.counts.after_activity_removal == 3
    assert result.counts.final == 2
    assert result.counts.visit_count == 2
    assert result.counts.activity_count == 0
    assert result.stats.total_removed == 3
    assert result.counts.removed_percent == 60


def test_diagnostics_are_collected_across_files(write_json, parser_registry):
    broken = android_visit()
    broken["visit"]["topCandidate"]["placeLocation"] = "geo:not-a-number,1"
    first = write_json("one.json", {"semanticSegments": [broken, android_visit()]})
    second = write_json("two.json", [ios_visit(), {"activity": {"start": 12}}])

    result = convert_files([first, second], KEEP_EVERYTHING, parser_registry)

    assert result.counts.original == 2
    assert [(d.source, d.segment_index) for d in result.diagnostics] == [
        ("one.json", 0),
        ("two.json", 1),
    ]


@pytest.mark.parametrize(
    "segments",
    [
        {
            "semanticSegments": [
                android_visit(),
                android_activity(),
                android_path([(1.0, 2.0)]),
            ]
        },
        [ios_visit(), ios_activity(), ios_visit(place_id="P2")],
    ],
)
def test_json_output_round_trips_through_legacy_format(segments, parser_registry):
    first = convert_documents([("input.json", segments)], KEEP_EVERYTHING, parser_registry)
    json_text = build_artifacts(first.records).json_text

    second = convert_documents(
        [("converted.json", json.loads(json_text))], KEEP_EVERYTHING, parser_registry
    )

    assert second.counts.original == first.counts.original
    assert second.records == first.records


def test_no_inputs():
    result = convert_documents([])

    assert result.counts.original == 0
    assert result.counts.removed_percent == 0
