"""Subtitle format handlers."""

from srtedit.formats.srt import (
    SRTParseError,
    load_srt,
    parse_srt,
    save_srt,
    serialize_srt,
)

__all__ = [
    "SRTParseError",
    "load_srt",
    "parse_srt",
    "save_srt",
    "serialize_srt",
]
