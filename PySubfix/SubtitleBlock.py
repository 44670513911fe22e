from __future__ import annotations

from datetime import timedelta

from PySubfix.Helpers.Time import FormatSrtTimestamp
from PySubfix.PositionTags import ExtractLeadingTag

class SubtitleBlock:
    """
    A single subtitle cue: a display window in milliseconds and one or more lines of text.

    original_order is the position of the block in the source document and is used as the
    final tie-break when blocks share the same timing. source_index is the cue number from
    the source file, if it had one.

    assigned_tag and keep_existing are set by the OverlapResolver.
    """
    def __init__(self, original_order : int, start_ms : int, end_ms : int, lines : list[str], source_index : int|None = None):
        self.original_order : int = original_order
        self.source_index : int|None = source_index
        self.start_ms : int = start_ms
        self.end_ms : int = end_ms
        self.lines : list[str] = list(lines)
        self.existing_tag : str|None = ExtractLeadingTag(self.lines[0]) if self.lines else None
        self.assigned_tag : str|None = None
        self.keep_existing : bool = False

    @classmethod
    def Construct(cls, original_order : int, start_ms : int, end_ms : int, text : str, source_index : int|None = None) -> SubtitleBlock:
        """
        Build a block from a text string, splitting it into lines
        """
        return cls(original_order, start_ms, end_ms, text.split('\n'), source_index=source_index)

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)

    @property
    def start(self) -> timedelta:
        return timedelta(milliseconds=self.start_ms)

    @property
    def end(self) -> timedelta:
        return timedelta(milliseconds=self.end_ms)

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def timing(self) -> str:
        return f"{FormatSrtTimestamp(self.start_ms)} --> {FormatSrtTimestamp(self.end_ms)}"

    def Overlaps(self, other : SubtitleBlock) -> bool:
        """
        True if both blocks are on screen at the same time. A block ending exactly when the other starts does not overlap.
        """
        return self.start_ms < other.end_ms and other.start_ms < self.end_ms

    def __str__(self) -> str:
        return f"{self.source_index or self.original_order}: {self.timing} {self.text}"

    def __repr__(self) -> str:
        return f"SubtitleBlock({self.original_order}, {self.start_ms}, {self.end_ms}, {self.lines!r}, source_index={self.source_index!r})"
