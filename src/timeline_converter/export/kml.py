"""
KML rendering for place visits.

The KML output is a point map: one Placemark per PlaceVisit. Activity
segments are not drawn. Text is escaped by the template environment.
"""

from pathlib import Path

from jinja2 import FileSystemLoader, select_autoescape
from jinja2.sandbox import SandboxedEnvironment

from timeline_converter.constants import (
    KML_DOCUMENT_NAME,
    KML_NAMESPACE,
    KML_VISIT_ICON_COLOR,
    KML_VISIT_ICON_HREF,
    KML_VISIT_STYLE_ID,
    UNKNOWN_LOCATION_NAME,
)
from timeline_converter.models.timeline import TimelineRecord
from timeline_converter.utils.numbers import format_e7

TEMPLATE_NAME = "timeline.kml.jinja2"


class KmlRenderer:
    """Renders record sets into KML 2.2 documents."""

    def __init__(self, templates_dir: Path | None = None):
        """
        Initialize the renderer.

        Args:
            templates_dir: Directory holding the KML template.
                          Defaults to templates/ next to this module.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.env = SandboxedEnvironment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(
                enabled_extensions=("kml", "xml", "jinja2"),
                default_for_string=True,
            ),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, records: list[TimelineRecord]) -> str:
        """Render one KML document for the given records."""
        placemarks = []
        for record in records:
            visit = record.place_visit
            if visit is None:
                continue
            location = visit.location
            placemarks.append(
                {
                    "name": location.name or UNKNOWN_LOCATION_NAME,
                    "address": location.address or "",
                    "start": visit.duration.start_timestamp,
                    "end": visit.duration.end_timestamp,
                    "latitude": format_e7(location.latitude_e7),
                    "longitude": format_e7(location.longitude_e7),
                }
            )

        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            namespace=KML_NAMESPACE,
            document_name=KML_DOCUMENT_NAME,
            style_id=KML_VISIT_STYLE_ID,
            icon_color=KML_VISIT_ICON_COLOR,
            icon_href=KML_VISIT_ICON_HREF,
            placemarks=placemarks,
        )


_default_renderer: KmlRenderer | None = None


def render_kml(records: list[TimelineRecord]) -> str:
    """Render records as KML using the packaged template."""
    global _default_renderer

    if _default_renderer is None:
        _default_renderer = KmlRenderer()
    return _default_renderer.render(records)
