"""
Canonical Timeline Data Model

Every input dialect is converted into these structures before any cleaning
or export happens. Attribute names are snake_case; the camelCase aliases are
the wire names used by the legacy ``timelineObjects`` export, so a
``model_dump(by_alias=True)`` of a record is a valid legacy timeline object.

Key Principle: the cleaner and the exporters only ever see TimelineRecord -
they never look at dialect-specific segment dictionaries.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from timeline_converter.constants import E7_SCALE


class TimelineModel(BaseModel):
    """Shared config: accept field names or wire aliases, carry numbers as text."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class Location(TimelineModel):
    """A point with optional place metadata. Only the coordinate is required."""

    latitude_e7: int = Field(alias="latitudeE7", description="Latitude * 1e7")
    longitude_e7: int = Field(alias="longitudeE7", description="Longitude * 1e7")

    place_id: str | None = Field(
        default=None, alias="placeId", description="Stable place identifier"
    )
    name: str | None = Field(default=None, description="Human-readable name")
    address: str | None = Field(default=None, description="Postal address")
    semantic_type: str | None = Field(
        default=None, alias="semanticType", description="Semantic tag (HOME, ...)"
    )

    @property
    def latitude(self) -> float:
        """Latitude in decimal degrees."""
        return self.latitude_e7 / E7_SCALE

    @property
    def longitude(self) -> float:
        """Longitude in decimal degrees."""
        return self.longitude_e7 / E7_SCALE

    @property
    def coordinate_key(self) -> str:
        """Exact fixed-point key used for coordinate matching."""
        return f"{self.latitude_e7},{self.longitude_e7}"

    @property
    def has_address(self) -> bool:
        """True when the address is present and not blank."""
        return bool(self.address and self.address.strip())


class Duration(TimelineModel):
    """Start/end timestamps, carried verbatim and never parsed."""

    start_timestamp: str = Field(
        default="",
        validation_alias=AliasChoices(
            "startTimestamp", "startTimestampMs", "start_timestamp"
        ),
        serialization_alias="startTimestamp",
    )
    end_timestamp: str = Field(
        default="",
        validation_alias=AliasChoices("endTimestamp", "endTimestampMs", "end_timestamp"),
        serialization_alias="endTimestamp",
    )


class PlaceVisit(TimelineModel):
    """A stay at a single place."""

    location: Location
    duration: Duration

    # Mirrors location coordinates; kept for older consumers of the format
    center_lat_e7: int | None = Field(default=None, alias="centerLatE7")
    center_lng_e7: int | None = Field(default=None, alias="centerLngE7")

    visit_confidence: int = Field(
        default=0, ge=0, le=100, alias="visitConfidence", description="Percent"
    )

    @model_validator(mode="after")
    def fill_center(self) -> "PlaceVisit":
        """Default the center coordinates to the location coordinates."""
        if self.center_lat_e7 is None:
            self.center_lat_e7 = self.location.latitude_e7
        if self.center_lng_e7 is None:
            self.center_lng_e7 = self.location.longitude_e7
        return self


class ActivityType(TimelineModel):
    """A classified movement label."""

    activity_type: str = Field(alias="activityType")
    probability: float = Field(default=0.0)


class ActivitySegment(TimelineModel):
    """Movement between two points."""

    start_location: Location = Field(alias="startLocation")
    end_location: Location = Field(alias="endLocation")
    duration: Duration

    distance: float | None = Field(default=None, description="Meters")
    activities: list[ActivityType] | None = Field(default=None)

    @property
    def activity_label(self) -> str | None:
        """Top-ranked activity type, if any."""
        if self.activities:
            return self.activities[0].activity_type
        return None


class TimelineRecord(TimelineModel):
    """
    Tagged union of PlaceVisit and ActivitySegment.

    Exactly one branch is populated; anything else fails validation.
    """

    place_visit: PlaceVisit | None = Field(default=None, alias="placeVisit")
    activity_segment: ActivitySegment | None = Field(
        default=None, alias="activitySegment"
    )

    @model_validator(mode="after")
    def validate_single_branch(self) -> "TimelineRecord":
        """Enforce that exactly one of placeVisit/activitySegment is set."""
        populated = (self.place_visit is not None) + (self.activity_segment is not None)
        if populated != 1:
            raise ValueError(
                "TimelineRecord requires exactly one of placeVisit or "
                f"activitySegment, got {populated}"
            )
        return self

    @classmethod
    def visit(cls, place_visit: PlaceVisit) -> "TimelineRecord":
        return cls(place_visit=place_visit)

    @classmethod
    def activity(cls, segment: ActivitySegment) -> "TimelineRecord":
        return cls(activity_segment=segment)

    @property
    def is_visit(self) -> bool:
        return self.place_visit is not None

    @property
    def is_activity(self) -> bool:
        return self.activity_segment is not None

    def to_wire(self) -> dict:
        """Serialize as a legacy timeline object."""
        return self.model_dump(by_alias=True, exclude_none=True)


RecordSet = list[TimelineRecord]
