"""Aggregate calendar: the per-request accumulator owned by the merge path."""

from icalendar import Calendar

from calproxy.constants import CALENDAR_PRODID, CALENDAR_VERSION
from calproxy.models.entry import EventEntry, TimezoneEntry


class AggregateCalendar:
    """Merged calendar for one request.

    Only the merge path writes to an instance; the orchestrator reads it after
    the merge path has handed it over.
    """

    def __init__(self):
        self.calendar = Calendar()
        self.calendar.add("prodid", CALENDAR_PRODID)
        self.calendar.add("version", CALENDAR_VERSION)

        self.events: list[EventEntry] = []
        self.timezones: list[TimezoneEntry] = []

        # Aggregation statistics
        self.resources_requested = 0
        self.resources_succeeded = 0
        self.resources_failed = 0
        self.entries_dropped = 0

    def add_event(self, entry: EventEntry) -> None:
        self.events.append(entry)
        self.calendar.add_component(entry.component)

    def add_timezone(self, entry: TimezoneEntry) -> None:
        self.timezones.append(entry)
        self.calendar.add_component(entry.component)

    @property
    def entry_count(self) -> int:
        return len(self.events) + len(self.timezones)

    def summary(self) -> dict:
        """Return aggregation statistics as a dictionary."""
        return {
            "resources_requested": self.resources_requested,
            "resources_succeeded": self.resources_succeeded,
            "resources_failed": self.resources_failed,
            "events": len(self.events),
            "timezones": len(self.timezones),
            "entries_dropped": self.entries_dropped,
        }
