"""Subtitle domain models and editing operations."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from operator import attrgetter

import structlog

from srtedit.core.timecode import FormatError, format_timestamp, parse_timestamp

logger = structlog.get_logger()

# Source number that marks an entry as already deleted.
TOMBSTONE_NUMBER = -1


@dataclass
class SubtitleEntry:
    """Single timed cue with its display number.

    ``text`` keeps the raw cue lines including their trailing newlines.
    """

    number: int
    start_ms: int
    end_ms: int
    text: str
    deleted: bool = False

    @classmethod
    def from_fields(
        cls, number: str, start: str, end: str, text: str
    ) -> "SubtitleEntry":
        """Build an entry from the raw text fields of one block.

        Raises:
            FormatError: If the number is not an integer or a timestamp is
                malformed
        """
        try:
            parsed_number = int(number)
        except ValueError as e:
            raise FormatError(
                f"Invalid subtitle number '{number}', must be integer"
            ) from e

        return cls(
            number=parsed_number,
            start_ms=parse_timestamp(start),
            end_ms=parse_timestamp(end),
            text=text,
            deleted=parsed_number == TOMBSTONE_NUMBER,
        )

    @property
    def duration_ms(self) -> int:
        """Signed display duration; negative when end precedes start."""
        return self.end_ms - self.start_ms

    def mark_deleted(self) -> None:
        """Tombstone this entry."""
        self.deleted = True

    def is_deleted(self) -> bool:
        return self.deleted

    def shift(self, offset_ms: int) -> None:
        """Move both timestamps earlier by ``offset_ms``, never below zero."""
        self.start_ms = max(self.start_ms - offset_ms, 0)
        self.end_ms = max(self.end_ms - offset_ms, 0)

    def render(self) -> str:
        start = format_timestamp(self.start_ms)
        end = format_timestamp(self.end_ms)
        return f"{self.number}\n{start} --> {end}\n{self.text}\n"


@dataclass
class Subtitle:
    """Ordered collection of subtitle entries.

    Deleted entries stay in ``entries`` so physical positions remain
    stable; they are skipped by counting, iteration and rendering.
    ``live_count`` is cached and updated by every deleting operation.
    """

    entries: list[SubtitleEntry] = field(default_factory=list)
    live_count: int = field(init=False)

    def __post_init__(self):
        """Count the entries that are not tombstoned."""
        self.live_count = sum(1 for entry in self.entries if not entry.deleted)

    def __len__(self) -> int:
        """Return number of live entries."""
        return self.live_count

    def __iter__(self) -> Iterator[SubtitleEntry]:
        """Iterate over live entries."""
        return (entry for _, entry in self.iter_live())

    def __getitem__(self, index: int) -> SubtitleEntry:
        """Get entry by physical position (0-based), deleted or not."""
        return self.entries[index]

    def iter_live(self) -> Iterator[tuple[int, SubtitleEntry]]:
        """Yield ``(rank, entry)`` for live entries in sequence order.

        ``rank`` is the 1-based position among live entries only, which
        is independent of the entry's stored number.
        """
        rank = 0
        for entry in self.entries:
            if entry.deleted:
                continue
            rank += 1
            yield rank, entry

    def _tombstone(self, entry: SubtitleEntry) -> None:
        entry.mark_deleted()
        self.live_count -= 1

    def render(self) -> str:
        """Render live entries as SubRip text followed by a blank line."""
        return "".join(entry.render() for entry in self) + "\n"

    def renumber(self) -> int:
        """Set each live entry's number to its live rank.

        Returns:
            The last assigned number, equal to the live count
        """
        last = 0
        for rank, entry in self.iter_live():
            entry.number = rank
            last = rank
        logger.debug("subtitles_renumbered", last=last)
        return last

    def delete_by_number(self, number: int) -> int | None:
        """Delete the first live entry carrying ``number``.

        Returns:
            Physical position of the deleted entry, or None if no live
            entry has that number
        """
        for position, entry in enumerate(self.entries):
            if entry.deleted or entry.number != number:
                continue
            self._tombstone(entry)
            logger.debug("subtitle_deleted", number=number, position=position)
            return position
        return None

    def trim_to(self, cutoff_ms: int) -> int:
        """Drop entries starting before ``cutoff_ms`` and re-base the rest.

        Entries overlapping the cutoff are dropped, not truncated.

        Args:
            cutoff_ms: New zero point of the track

        Returns:
            Number of deleted entries

        Raises:
            ValueError: If cutoff_ms is negative
        """
        if cutoff_ms < 0:
            raise ValueError(f"Cutoff must be non-negative, got {cutoff_ms}")

        deleted = 0
        for _, entry in self.iter_live():
            if entry.start_ms < cutoff_ms:
                self._tombstone(entry)
                deleted += 1
            else:
                entry.shift(cutoff_ms)

        logger.debug("subtitles_trimmed", cutoff_ms=cutoff_ms, deleted=deleted)
        return deleted

    def cut(self, start_ms: int, end_ms: int) -> int:
        """Remove the span ``[start_ms, end_ms)`` and close the gap.

        Entries starting inside the span are deleted, entries starting at
        or after ``end_ms`` move earlier by the span length, earlier
        entries are left alone.

        Returns:
            Number of deleted entries

        Raises:
            ValueError: If the span is reversed or negative
        """
        if start_ms < 0:
            raise ValueError(f"Cut start must be non-negative, got {start_ms}")
        if end_ms < start_ms:
            raise ValueError(
                f"Cut end {end_ms}ms must not precede start {start_ms}ms"
            )

        span = end_ms - start_ms
        deleted = 0
        for _, entry in self.iter_live():
            if start_ms <= entry.start_ms < end_ms:
                self._tombstone(entry)
                deleted += 1
            elif entry.start_ms >= end_ms:
                entry.shift(span)

        logger.debug(
            "subtitles_cut", start_ms=start_ms, end_ms=end_ms, deleted=deleted
        )
        return deleted

    def delete_if(
        self,
        predicate: Callable[[int, SubtitleEntry], bool],
        *,
        reason: str = "predicate",
    ) -> int:
        """Delete every live entry for which ``predicate(rank, entry)`` holds.

        Args:
            predicate: Called with the live rank and entry
            reason: Label attached to the log event

        Returns:
            Number of deleted entries
        """
        deleted = 0
        for rank, entry in self.iter_live():
            if predicate(rank, entry):
                self._tombstone(entry)
                deleted += 1
        logger.debug("subtitles_deleted", reason=reason, deleted=deleted)
        return deleted

    def delete_empty(self) -> int:
        """Delete entries whose text is blank."""
        return self.delete_if(lambda _, entry: not entry.text.strip(), reason="empty")

    def delete_by_duration(self, threshold_ms: int) -> int:
        """Delete entries displayed for ``threshold_ms`` or less.

        Entries whose end precedes their start have a negative duration
        and are deleted as well.
        """
        return self.delete_if(
            lambda _, entry: entry.duration_ms <= threshold_ms,
            reason=f"duration<={threshold_ms}ms",
        )

    def sort(self) -> None:
        """Stable-sort all entries, deleted ones included, by start time."""
        self.entries.sort(key=attrgetter("start_ms"))
        logger.debug("subtitles_sorted", entries=len(self.entries))
