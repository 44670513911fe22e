from __future__ import annotations

import logging
import os

from PySubfix.Formats.SrtFileHandler import SrtFileHandler
from PySubfix.Helpers import GetInputPath
from PySubfix.Helpers.Localization import _
from PySubfix.OverlapResolver import OverlapResolver
from PySubfix.Options import Options
from PySubfix.SubtitleData import SubtitleData
from PySubfix.SubtitleError import NoValidBlocksError, SubtitleError
from PySubfix.SubtitleFileHandler import ReadSubtitleFile
from PySubfix.SubtitleFormatRegistry import SubtitleFormatRegistry

class FixResult:
    """
    Output of a repositioning run.

    Attributes:
        text (str): The repositioned subtitles in SRT format, without a trailing newline
        skipped (int): Number of empty or malformed blocks that were dropped
        block_count (int): Number of blocks written
        format (str|None): Format the input was parsed as
    """
    def __init__(self, text : str, skipped : int = 0, block_count : int = 0, format : str|None = None):
        self.text : str = text
        self.skipped : int = skipped
        self.block_count : int = block_count
        self.format : str|None = format

class SubtitleFixer:
    """
    Parses a subtitle document, gives overlapping blocks distinct positions and composes the result as SRT.

    Each call is independent, so one fixer can be used for many files.
    """
    def __init__(self, options : Options|None = None):
        self.options : Options = options if isinstance(options, Options) else Options(options)

    def FixContent(self, content : str, filename : str|None = None) -> FixResult:
        """
        Reposition the subtitles in a document. The filename, if known, is used to help identify the format.

        Raises:
            NoValidBlocksError: If the document contains no usable subtitle blocks
        """
        handler = SubtitleFormatRegistry.create_handler_for_content(content, filename, options=self.options)
        data : SubtitleData = handler.parse_string(content)

        if not data.blocks:
            if data.detected_format == '.ass':
                message = _("No valid ASS dialogue blocks found.")
            else:
                message = _("No valid subtitle blocks found.")
            raise NoValidBlocksError(message, skipped=data.skipped, format=data.detected_format)

        resolver = OverlapResolver(self.options)
        resolver.ResolvePositions(data.blocks)

        text = SrtFileHandler(self.options).compose(data)

        logging.info(f"Repositioned {data.blockcount} blocks from {filename or 'content'}")
        if data.skipped:
            logging.info(f"Skipped {data.skipped} empty or malformed block(s)")

        return FixResult(text, skipped=data.skipped, block_count=data.blockcount, format=data.detected_format)

    def FixFile(self, path : str, output_path : str|None = None) -> FixResult:
        """
        Reposition the subtitles in a file, writing the result to output_path if one is given.
        """
        normalised_path = GetInputPath(path)
        if not normalised_path:
            raise SubtitleError(_("No input file specified"))

        content = ReadSubtitleFile(normalised_path)
        result = self.FixContent(content, filename=normalised_path)

        if output_path:
            WriteSubtitleFile(output_path, result.text)
            logging.info(f"Saved repositioned subtitles to {output_path}")

        return result


def WriteSubtitleFile(path : str, text : str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text + "\n")
