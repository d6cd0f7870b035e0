"""Calendar entry models: a closed union over the kinds the merge path handles."""

from typing import Literal, Union

from icalendar import Component
from pydantic import BaseModel, ConfigDict


class _BaseEntry(BaseModel):
    """One top-level component parsed from an upstream calendar resource."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    component: Component
    source: str | None = None

    @property
    def uid(self) -> str | None:
        uid = self.component.get("uid")
        return str(uid) if uid else None


class EventEntry(_BaseEntry):
    """A VEVENT component."""

    kind: Literal["VEVENT"] = "VEVENT"


class TimezoneEntry(_BaseEntry):
    """A VTIMEZONE component."""

    kind: Literal["VTIMEZONE"] = "VTIMEZONE"

    @property
    def tzid(self) -> str | None:
        tzid = self.component.get("tzid")
        return str(tzid) if tzid else None


class OtherEntry(_BaseEntry):
    """Any component kind the aggregate does not carry (VTODO, VJOURNAL, ...)."""

    kind: str


CalendarEntry = Union[EventEntry, TimezoneEntry, OtherEntry]


def entry_from_component(component: Component, source: str | None = None) -> CalendarEntry:
    """Wrap a parsed component in the matching entry variant."""
    if component.name == "VEVENT":
        return EventEntry(component=component, source=source)
    if component.name == "VTIMEZONE":
        return TimezoneEntry(component=component, source=source)
    return OtherEntry(component=component, source=source, kind=component.name or "UNKNOWN")
