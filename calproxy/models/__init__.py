"""Models for the calendar proxy."""

from calproxy.models.aggregate import AggregateCalendar
from calproxy.models.entry import (
    CalendarEntry,
    EventEntry,
    OtherEntry,
    TimezoneEntry,
    entry_from_component,
)

__all__ = [
    "AggregateCalendar",
    "CalendarEntry",
    "EventEntry",
    "TimezoneEntry",
    "OtherEntry",
    "entry_from_component",
]
