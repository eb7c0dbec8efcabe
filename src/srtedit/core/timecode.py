"""Conversion between SubRip timestamps and millisecond counts."""

import re

_TIMESTAMP_PATTERN = re.compile(r"(\d+):(\d+):(\d+),(\d+)", re.ASCII)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


class FormatError(Exception):
    """Exception raised when subtitle text cannot be converted."""


def parse_timestamp(text: str) -> int:
    """Parse an ``H:MM:SS,mmm`` timestamp into milliseconds.

    Field widths are not fixed and field ranges are not checked, only
    the digit shape of each group. The whole text must be a timestamp:
    trailing groups such as ``0:00:01,000,5`` are rejected rather than
    ignored, unlike a search for the pattern anywhere in the text.

    Args:
        text: Timestamp text such as ``0:01:02,500``

    Returns:
        Millisecond count since track start

    Raises:
        FormatError: If text is not four colon/comma separated digit groups
    """
    match = _TIMESTAMP_PATTERN.fullmatch(text.strip())
    if not match:
        raise FormatError(f"Wrong timestamp format: '{text}'")

    hours, minutes, seconds, millis = (int(group) for group in match.groups())
    return (
        millis
        + seconds * MS_PER_SECOND
        + minutes * MS_PER_MINUTE
        + hours * MS_PER_HOUR
    )


def format_timestamp(ms: int) -> str:
    """Format milliseconds as ``H:MM:SS,mmm`` with an unpadded hour."""
    if ms < 0:
        raise ValueError(f"Timestamp must be non-negative, got {ms}")

    hours, ms = divmod(ms, MS_PER_HOUR)
    minutes, ms = divmod(ms, MS_PER_MINUTE)
    seconds, millis = divmod(ms, MS_PER_SECOND)
    return f"{hours}:{minutes:02d}:{seconds:02d},{millis:03d}"
