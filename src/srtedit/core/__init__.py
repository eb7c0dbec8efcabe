"""Core subtitle model, time codec and editing operations."""

from srtedit.core.subtitle import TOMBSTONE_NUMBER, Subtitle, SubtitleEntry
from srtedit.core.timecode import FormatError, format_timestamp, parse_timestamp

__all__ = [
    "TOMBSTONE_NUMBER",
    "FormatError",
    "Subtitle",
    "SubtitleEntry",
    "format_timestamp",
    "parse_timestamp",
]
