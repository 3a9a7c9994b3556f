"""
Constants for location-history conversion.

Wire names and fallback literals match what existing timeline exports and
map-import tools expect, so they must not be renamed.
"""

from pathlib import Path

# ============================================================================
# Coordinates
# ============================================================================

E7_SCALE = 10_000_000  # degrees * 1e7 -> fixed-point integer
GEO_URI_PREFIX = "geo:"
DEGREE_SIGN = "°"

# ============================================================================
# Fallback Literals
# ============================================================================

SEMANTIC_TYPE_UNKNOWN = "TYPE_UNKNOWN"
ACTIVITY_TYPE_UNKNOWN = "UNKNOWN"
UNKNOWN_LOCATION_NAME = "Unknown Location"

# ============================================================================
# Input Document Keys
# ============================================================================

SEMANTIC_SEGMENTS_KEY = "semanticSegments"
TIMELINE_OBJECTS_KEY = "timelineObjects"

SEGMENT_VISIT = "visit"
SEGMENT_ACTIVITY = "activity"
SEGMENT_TIMELINE_PATH = "timelinePath"

START_TIME_KEYS = ("startTime", "startTimestamp")
END_TIME_KEYS = ("endTime", "endTimestamp")
PLACE_ID_KEYS = ("placeId", "placeID")

# ============================================================================
# Output
# ============================================================================

CSV_HEADER = [
    "Type",
    "Name",
    "Address",
    "Latitude",
    "Longitude",
    "Start Time",
    "End Time",
    "PlaceId",
]
CSV_TYPE_VISIT = "Visit"
CSV_TYPE_ACTIVITY = "Activity"

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
KML_DOCUMENT_NAME = "Timeline Data"
KML_VISIT_STYLE_ID = "visit"
KML_VISIT_ICON_COLOR = "ff0000ff"
KML_VISIT_ICON_HREF = "http://maps.google.com/mapfiles/kml/pushpin/red-pushpin.png"

# Google My Maps rejects imports with more rows than this
MAX_RECORDS_PER_CHUNK = 2000

DEFAULT_OUTPUT_BASENAME = "timeline_converted"
DEFAULT_OUTPUT_DIR = "."

# ============================================================================
# Application Paths
# ============================================================================

APP_DIR = Path.home() / ".timeline-converter"
DEFAULT_LOG_DIR = APP_DIR / "logs"
DEFAULT_LOG_FILE = "timeline-converter.log"
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_LOG_BACKUP_COUNT = 5
