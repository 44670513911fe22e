import logging
import srt # type: ignore

import regex

from PySubfix.Helpers.Text import IsBlank
from PySubfix.Helpers.Time import ParseSrtTiming
from PySubfix.SubtitleBlock import SubtitleBlock
from PySubfix.SubtitleData import SubtitleData
from PySubfix.SubtitleFileHandler import SubtitleFileHandler, NormaliseContent

_BLOCK_SEPARATOR_PATTERN = regex.compile(r'\n{2,}')
_INDEX_PATTERN = regex.compile(r'^[0-9]+$')

class SrtFileHandler(SubtitleFileHandler):
    """
    File handler for SRT subtitle format.

    Parsing is tolerant: a block with a bad range line or no text is skipped and counted,
    and the rest of the file is still used. Output is composed with the srt library.
    """

    SUPPORTED_EXTENSIONS = {'.srt': 10}

    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse SRT string content into blocks, counting any that had to be skipped.

        Chunks that are empty after trimming, such as extra blank lines between blocks or at the
        end of the file, are not subtitle blocks and are not included in the skipped count.
        """
        blocks : list[SubtitleBlock] = []
        skipped = 0

        raw_blocks = _BLOCK_SEPARATOR_PATTERN.split(NormaliseContent(content))
        for original_order, raw_block in enumerate(raw_blocks):
            raw_block = raw_block.strip()
            if not raw_block:
                continue

            block = self._parse_block(raw_block, original_order)
            if block is None:
                skipped += 1
                continue

            blocks.append(block)

        if skipped:
            logging.debug(f"Skipped {skipped} malformed or empty SRT blocks")

        return SubtitleData(blocks=blocks, skipped=skipped, detected_format='.srt')

    def compose(self, data: SubtitleData) -> str:
        """
        Compose blocks into SRT format, ordered by start time, end time and original position.

        Blocks keep their source index if they had one, otherwise they are numbered by output position.
        """
        srt_items = []
        for position, block in enumerate(SortForOutput(data.blocks), start=1):
            srt_items.append(srt.Subtitle(
                index=block.source_index if block.source_index is not None else position,
                start=block.start,
                end=block.end,
                content=block.text
            ))

        composed : str = srt.compose(srt_items, reindex=False, strict=False)

        # Blocks are separated by a blank line, with no blank line after the last one
        if composed.endswith('\n\n'):
            composed = composed[:-2]

        return composed

    def _parse_block(self, raw_block : str, original_order : int) -> SubtitleBlock|None:
        lines = raw_block.split('\n')

        timing_index = next((i for i, line in enumerate(lines) if '-->' in line), None)
        if timing_index is None:
            logging.debug(f"No timing line in block: {lines[0]}")
            return None

        timing = ParseSrtTiming(lines[timing_index])
        if timing is None:
            logging.debug(f"Invalid timing line: {lines[timing_index]}")
            return None

        source_index = None
        if timing_index > 0:
            possible_index = lines[timing_index - 1].strip()
            if _INDEX_PATTERN.match(possible_index):
                source_index = int(possible_index)

        text_lines = lines[timing_index + 1:]
        if IsBlank(text_lines):
            logging.debug(f"Block at {lines[timing_index]} has no text")
            return None

        start_ms, end_ms = timing
        return SubtitleBlock(original_order, start_ms, end_ms, text_lines, source_index=source_index)


def SortForOutput(blocks : list[SubtitleBlock]) -> list[SubtitleBlock]:
    """
    Return blocks in output order. Blocks with identical timing keep their source order.
    """
    return sorted(blocks, key=lambda block: (block.start_ms, block.end_ms, block.original_order))
