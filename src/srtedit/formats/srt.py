"""SRT format parser and serializer."""

import re
from pathlib import Path

import structlog

from srtedit.core.subtitle import Subtitle, SubtitleEntry
from srtedit.core.timecode import FormatError

logger = structlog.get_logger()

# number line, timing line, zero or more text lines, blank line
_BLOCK_PATTERN = re.compile(
    r"(-?\d+)\n([0-9,:]+) --> ([0-9,:]+)\n((?:.+\n)*)^\n",
    re.MULTILINE | re.ASCII,
)


class SRTParseError(FormatError):
    """Exception raised when SRT parsing fails."""


def _warn_skipped(content: str, start: int, end: int) -> None:
    skipped = content[start:end].strip()
    if skipped:
        logger.warning("srt_text_skipped", offset=start, text=skipped[:40])


def parse_srt(content: str) -> Subtitle:
    """Parse SRT format string into Subtitle object.

    Blocks are scanned left to right; text that does not form a block is
    skipped. A trailing blank line is supplied so the last block matches
    even when the file lacks one.

    Args:
        content: SRT format string content

    Returns:
        Subtitle object containing every parsed entry, deleted ones included

    Raises:
        SRTParseError: If a block's number or timestamps are malformed
    """
    content = content.replace("\r\n", "\n").replace("\r", "\n") + "\n\n"

    entries = []
    last_end = 0
    for block_num, match in enumerate(_BLOCK_PATTERN.finditer(content), start=1):
        _warn_skipped(content, last_end, match.start())
        last_end = match.end()

        number, start, end, text = match.groups()
        try:
            entries.append(SubtitleEntry.from_fields(number, start, end, text))
        except FormatError as e:
            raise SRTParseError(f"Block {block_num}: {e}") from e

    _warn_skipped(content, last_end, len(content))

    subtitle = Subtitle(entries=entries)
    logger.debug(
        "srt_parsed", entries=len(subtitle.entries), live=subtitle.live_count
    )
    return subtitle


def serialize_srt(subtitle: Subtitle) -> str:
    """Serialize Subtitle object to SRT format string.

    Args:
        subtitle: Subtitle object to serialize

    Returns:
        SRT format string containing only live entries
    """
    return subtitle.render()


def load_srt(path: Path, encoding: str = "utf-8") -> Subtitle:
    """Read and parse an SRT file.

    Raises:
        ValueError: If path is not an existing file
        SRTParseError: If the file content is malformed
    """
    if not path.exists():
        raise ValueError(f"Subtitle file does not exist: {path}")
    if not path.is_file():
        raise ValueError(f"Subtitle path is not a file: {path}")

    return parse_srt(path.read_text(encoding=encoding))


def save_srt(subtitle: Subtitle, path: Path, encoding: str = "utf-8") -> Path:
    """Write the SRT rendering of subtitle to path."""
    path.write_text(serialize_srt(subtitle), encoding=encoding)
    logger.debug("srt_saved", path=str(path), entries=subtitle.live_count)
    return path
