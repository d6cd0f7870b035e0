"""ICS renderer for aggregate calendars."""

import logging

from calproxy.constants import CALENDAR_CONTENT_TYPE
from calproxy.exceptions import RenderError
from calproxy.models.aggregate import AggregateCalendar

logger = logging.getLogger(__name__)


class ICSRenderer:
    """Serializes an aggregate calendar to iCalendar text."""

    def render(self, aggregate: AggregateCalendar) -> str:
        """Render the merged calendar.

        Raises:
            RenderError: If serialization fails or produces no content
        """
        try:
            ical_content = aggregate.calendar.to_ical()
            if not ical_content:
                raise ValueError("Calendar.to_ical() returned empty content")
            text = ical_content.decode("utf-8")
        except Exception as e:
            raise RenderError(f"Failed to render calendar: {e}") from e

        logger.debug(f"Rendered {len(text)} characters")
        return text

    def get_content_type(self) -> str:
        """Returns the media type of rendered output."""
        return CALENDAR_CONTENT_TYPE
