"""ICS parser: turns raw calendar bytes into calendar entries."""

import logging

from icalendar import Calendar

from calproxy.exceptions import EntryParseError
from calproxy.models.entry import CalendarEntry, entry_from_component

logger = logging.getLogger(__name__)


class ICSParser:
    """Parser for ICS calendar resources."""

    def parse(self, data: bytes, source: str | None = None) -> list[CalendarEntry]:
        """Parse an ICS document into its top-level entries.

        Args:
            data: Raw resource bytes
            source: Locator or URL the bytes came from, recorded on each entry

        Returns:
            Entries in document order

        Raises:
            EntryParseError: If the document is empty or not a VCALENDAR
        """
        if not data or not data.strip():
            raise EntryParseError(f"Calendar resource is empty: {source}")

        try:
            cal = Calendar.from_ical(data)
        except Exception as e:
            raise EntryParseError(f"Failed to parse calendar {source}: {e}") from e

        # from_ical returns a list when the input holds several components
        if not isinstance(cal, Calendar) or cal.name != "VCALENDAR":
            raise EntryParseError(f"Resource {source} is not a single VCALENDAR")

        entries = [
            entry_from_component(component, source) for component in cal.subcomponents
        ]
        logger.debug(f"Parsed {len(entries)} entries from {source}")
        return entries
