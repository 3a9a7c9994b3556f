"""
Builders for Timeline export segments and canonical records.

Keeps test inputs short and readable; every builder returns plain dicts
shaped like the real exports unless it says otherwise.
"""

from typing import Any

from timeline_converter.models.timeline import (
    ActivitySegment,
    ActivityType,
    Duration,
    Location,
    PlaceVisit,
    TimelineRecord,
)


def android_visit(
    place_id: str = "P1",
    lat: float = 40.0,
    lng: float = -75.0,
    name: str | None = "Cafe",
    address: str | None = None,
    probability: float | None = 0.9,
    semantic_type: str | None = None,
    start: str = "2024-01-01T10:00:00.000+01:00",
    end: str = "2024-01-01T11:00:00.000+01:00",
) -> dict[str, Any]:
    """A ``visit`` segment as written by the Android export."""
    place_location: dict[str, Any] = {"latLng": f"{lat}°, {lng}°"}
    if name is not None:
        place_location["name"] = name
    if address is not None:
        place_location["address"] = address

    candidate: dict[str, Any] = {"placeId": place_id, "placeLocation": place_location}
    if semantic_type is not None:
        candidate["semanticType"] = semantic_type

    visit: dict[str, Any] = {"topCandidate": candidate}
    if probability is not None:
        visit["probability"] = probability
    return {"startTime": start, "endTime": end, "visit": visit}


def android_activity(
    start: tuple[float, float] = (40.0, -75.0),
    end: tuple[float, float] = (40.1, -75.1),
    activity_type: str | None = "WALKING",
    probability: float | None = 0.8,
    distance: Any = 1234.5,
) -> dict[str, Any]:
    """An ``activity`` segment as written by the Android export."""
    activity: dict[str, Any] = {
        "start": {"latLng": f"{start[0]}°, {start[1]}°"},
        "end": {"latLng": f"{end[0]}°, {end[1]}°"},
    }
    if distance is not None:
        activity["distanceMeters"] = distance
    if activity_type is not None:
        candidate: dict[str, Any] = {"type": activity_type}
        if probability is not None:
            candidate["probability"] = probability
        activity["topCandidate"] = candidate
    return {
        "startTime": "2024-01-01T11:00:00.000+01:00",
        "endTime": "2024-01-01T11:30:00.000+01:00",
        "activity": activity,
    }


def android_path(points: list[tuple[float, float]]) -> dict[str, Any]:
    """A ``timelinePath`` segment as written by the Android export."""
    return {
        "startTime": "2024-01-01T00:00:00.000+01:00",
        "endTime": "2024-01-01T02:00:00.000+01:00",
        "timelinePath": [
            {"point": f"{lat}°, {lng}°", "time": "2024-01-01T00:00:00.000+01:00"}
            for lat, lng in points
        ],
    }


def ios_visit(
    place_id: str = "P1",
    lat: float = 40.0,
    lng: float = -75.0,
    probability: str = "0.9",
    semantic_type: str = "Unknown",
) -> dict[str, Any]:
    """A ``visit`` segment as written by the iOS export (strings, geo URIs)."""
    return {
        "startTime": "2024-01-01T10:00:00.000+01:00",
        "endTime": "2024-01-01T11:00:00.000+01:00",
        "visit": {
            "hierarchyLevel": "0",
            "probability": probability,
            "topCandidate": {
                "placeID": place_id,
                "semanticType": semantic_type,
                "probability": "0.5",
                "placeLocation": f"geo:{lat},{lng}",
            },
        },
    }


def ios_activity(
    start: tuple[float, float] = (40.0, -75.0),
    end: tuple[float, float] = (40.1, -75.1),
    activity_type: str = "walking",
    distance: str = "1234.5",
) -> dict[str, Any]:
    """An ``activity`` segment as written by the iOS export."""
    return {
        "startTime": "2024-01-01T11:00:00.000+01:00",
        "endTime": "2024-01-01T11:30:00.000+01:00",
        "activity": {
            "start": f"geo:{start[0]},{start[1]}",
            "end": f"geo:{end[0]},{end[1]}",
            "distanceMeters": distance,
            "topCandidate": {"type": activity_type, "probability": "0.75"},
        },
    }


def visit_record(
    place_id: str | None = "P1",
    lat_e7: int = 400000000,
    lng_e7: int = -750000000,
    name: str | None = "Cafe",
    address: str | None = "",
    start: str = "t0",
    end: str = "t1",
) -> TimelineRecord:
    """A canonical PlaceVisit record."""
    return TimelineRecord.visit(
        PlaceVisit(
            location=Location(
                latitude_e7=lat_e7,
                longitude_e7=lng_e7,
                place_id=place_id,
                name=name,
                address=address,
                semantic_type="TYPE_UNKNOWN",
            ),
            duration=Duration(start_timestamp=start, end_timestamp=end),
            visit_confidence=90,
        )
    )


def activity_record(
    lat_e7: int = 400000000,
    lng_e7: int = -750000000,
    activity_type: str | None = "WALKING",
) -> TimelineRecord:
    """A canonical ActivitySegment record."""
    activities = (
        [ActivityType(activity_type=activity_type, probability=0.8)]
        if activity_type
        else []
    )
    return TimelineRecord.activity(
        ActivitySegment(
            start_location=Location(latitude_e7=lat_e7, longitude_e7=lng_e7),
            end_location=Location(latitude_e7=lat_e7 + 1000, longitude_e7=lng_e7 + 1000),
            duration=Duration(start_timestamp="t2", end_timestamp="t3"),
            distance=100.0,
            activities=activities,
        )
    )
