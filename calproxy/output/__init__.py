"""Output layer for aggregate calendars."""

from calproxy.output.ics_renderer import ICSRenderer

__all__ = ["ICSRenderer"]
