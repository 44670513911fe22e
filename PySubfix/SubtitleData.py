from __future__ import annotations

from PySubfix.SubtitleBlock import SubtitleBlock

class SubtitleData:
    """
    Result of parsing a subtitle document.

    Attributes:
        blocks (list[SubtitleBlock]): Valid blocks in the order they appeared in the source
        skipped (int): Number of blocks that were dropped because they were empty or malformed
        detected_format (str|None): Format the document was parsed as (e.g. '.srt')
    """

    def __init__(self, blocks : list[SubtitleBlock]|None = None, skipped : int = 0, detected_format : str|None = None):
        self.blocks : list[SubtitleBlock] = blocks or []
        self.skipped : int = skipped
        self.detected_format : str|None = detected_format

    @property
    def blockcount(self) -> int:
        return len(self.blocks)
