"""Itinerary export to Markdown text and a standalone HTML document."""

from __future__ import annotations

from datetime import date, datetime
import html

from core.models import Place, Trip

_HTML_STYLE = """
    body { font-family: -apple-system, BlinkMacSystemFont, sans-serif; margin: 40px; }
    h1 { color: #007AFF; }
    h2 { color: #333; border-bottom: 2px solid #007AFF; }
    h3 { color: #666; }
    .trip-details { background: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px; }
    .place { margin-bottom: 20px; padding: 15px; border-left: 4px solid #007AFF; }
    .category { background: #007AFF; color: white; padding: 4px 8px; border-radius: 4px;
                font-size: 12px; }
"""


def format_long_date(value: datetime | date) -> str:
    """Format like `Sunday, June 1, 2025`."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


class ExportService:
    """Render a trip and its places for sharing."""

    def export_itinerary(self, trip: Trip, places: list[Place]) -> str:
        """Return the itinerary as Markdown."""
        lines = [
            f"# {trip.city} Itinerary",
            "",
            f"**Dates:** {format_long_date(trip.start_date)} - {format_long_date(trip.end_date)}",
            f"**Hotel:** {trip.hotel_address}",
            "",
            "## Places to Visit",
            "",
        ]
        for place in places:
            lines.append(f"### {place.name}")
            lines.append(f"**Category:** {place.category}")
            if place.url:
                lines.append(f"**Link:** {place.url}")
            if place.notes:
                lines.append(f"**Notes:** {place.notes}")
            lines.append("")
        return "\n".join(lines) + "\n"

    def export_html(self, trip: Trip, places: list[Place]) -> bytes:
        """Return the itinerary as a UTF-8 HTML document."""
        esc = html.escape
        parts: list[str] = []
        for place in places:
            block = f'<div class="place"><h3>{esc(place.name)}</h3>'
            block += f'<span class="category">{esc(place.category)}</span>'
            if place.url:
                url = esc(place.url)
                block += f'<p><strong>Link:</strong> <a href="{url}">{url}</a></p>'
            if place.notes:
                block += f"<p><strong>Notes:</strong> {esc(place.notes)}</p>"
            block += "</div>"
            parts.append(block)
        dates = f"{format_long_date(trip.start_date)} - {format_long_date(trip.end_date)}"
        doc = (
            "<!DOCTYPE html>\n<html>\n<head>\n<meta charset=\"UTF-8\">\n"
            f"<title>{esc(trip.city)} Itinerary</title>\n<style>{_HTML_STYLE}</style>\n"
            "</head>\n<body>\n"
            f"<h1>{esc(trip.city)} Itinerary</h1>\n"
            '<div class="trip-details">'
            f"<p><strong>Dates:</strong> {esc(dates)}</p>"
            f"<p><strong>Hotel:</strong> {esc(trip.hotel_address)}</p>"
            "</div>\n<h2>Places to Visit</h2>\n"
            + "".join(parts)
            + "\n</body>\n</html>\n"
        )
        return doc.encode("utf-8")
