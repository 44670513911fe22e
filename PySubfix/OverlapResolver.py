import logging

from PySubfix.Options import Options
from PySubfix.PositionTags import (
    DEFAULT_TAG,
    OVERFLOW_TAG,
    POSITION_TAGS,
    ExtractLeadingTag,
    FormatTag,
    StripAllTags,
    StripLeadingTag,
)
from PySubfix.SubtitleBlock import SubtitleBlock

class ActiveBlock:
    """ A block that is still on screen at the current point of the sweep """
    def __init__(self, end_ms : int, tag : str):
        self.end_ms = end_ms
        self.tag = tag

class OverlapResolver:
    """
    Assigns a screen position to every block so that blocks shown at the same time do not share a position.

    Blocks are swept in order of start time. A block takes the first position in the palette that is not
    used by a block still on screen. If every position is taken the last one in the palette is reused.

    The resolver never fails: any list of blocks, including blocks with zero or negative duration, can be resolved.
    """
    def __init__(self, options : Options|None = None):
        self.options : Options = options or Options()
        self.overflow_count : int = 0

    def ResolvePositions(self, blocks : list[SubtitleBlock]) -> None:
        """
        Assign positions to the blocks and update the tag at the start of each block's first line.

        Blocks are modified in place. Their order in the list is not changed.
        """
        self.overflow_count = 0

        self._assign_tags(blocks)

        for block in blocks:
            self._apply_tag(block)

        if self.overflow_count:
            logging.warning(f"More than {len(POSITION_TAGS)} subtitles were on screen at once, {self.overflow_count} were positioned at {FormatTag(OVERFLOW_TAG)}")

    def _assign_tags(self, blocks : list[SubtitleBlock]) -> None:
        clean = self.options.clean
        ignore_existing = self.options.ignore_existing

        sweep_order = sorted(blocks, key=lambda block: (block.start_ms, block.end_ms))
        active : list[ActiveBlock] = []

        for block in sweep_order:
            # A block that ends exactly when this one starts is no longer on screen
            active = [ entry for entry in active if entry.end_ms > block.start_ms ]

            block.existing_tag = ExtractLeadingTag(block.lines[0]) if block.lines else None
            block.keep_existing = False

            if clean:
                block.lines = [ StripAllTags(line) for line in block.lines ]

            if block.existing_tag and ignore_existing and not clean:
                block.assigned_tag = block.existing_tag
                block.keep_existing = True
                active.append(ActiveBlock(block.end_ms, block.existing_tag))
                continue

            block.assigned_tag = self._choose_tag({ entry.tag for entry in active })
            active.append(ActiveBlock(block.end_ms, block.assigned_tag))

    def _choose_tag(self, used_tags : set[str]) -> str:
        """
        Pick the highest priority free position, falling back to the last one when all are in use
        """
        for tag in POSITION_TAGS:
            if tag not in used_tags:
                return tag

        self.overflow_count += 1
        logging.debug(f"No free position, using {FormatTag(OVERFLOW_TAG)}")
        return OVERFLOW_TAG

    def _apply_tag(self, block : SubtitleBlock) -> None:
        """
        Write the assigned tag at the start of the first line, replacing any tag already there
        """
        if block.keep_existing or not block.lines:
            return

        tag = block.assigned_tag or DEFAULT_TAG
        first_line = StripLeadingTag(block.lines[0])

        if self.options.omit_default and tag == DEFAULT_TAG:
            block.lines[0] = first_line
        else:
            block.lines[0] = FormatTag(tag) + first_line


def ResolvePositions(blocks : list[SubtitleBlock], options : Options|None = None) -> None:
    """
    Resolve overlapping blocks with the given options
    """
    OverlapResolver(options).ResolvePositions(blocks)
