"""Shared constants for the calendar proxy."""

# Index document markup
NODE_TABLE_CLASS = "nodeTable"
NAME_COLUMN_CLASS = "nameColumn"

# Rendered calendar
CALENDAR_PRODID = "-//calproxy//EN"
CALENDAR_VERSION = "2.0"
CALENDAR_CONTENT_TYPE = "text/calendar; charset=utf-8"

# Thread names
FETCH_THREAD_PREFIX = "calproxy-fetch"
MERGE_THREAD_NAME = "calproxy-merge"
