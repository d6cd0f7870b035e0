"""Processing layer: concurrent aggregation and merging."""

from calproxy.processing.aggregator import Aggregator
from calproxy.processing.calendar_merger import CalendarMerger

__all__ = ["Aggregator", "CalendarMerger"]
