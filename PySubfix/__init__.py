"""
PySubfix - Subtitle Overlap Repositioning Library

Moves subtitles that are on screen at the same time to different positions, so that
overlapping cues do not draw on top of each other. Reads SRT or ASS/SSA and writes SRT.

Basic Usage
-----------

# Configure options
opts = init_options(clean=True, omit_default=True)

# Reposition a subtitle file and save the result
fixer = SubtitleFixer(opts)
result = fixer.FixFile("movie.ass", output_path="movie.fixed.srt")

# Or reposition subtitle content directly
result = fix_subtitles(content, filename="movie.srt", ignore_existing=True)
print(result.text)
"""
from __future__ import annotations

from PySubfix.Options import Options
from PySubfix.OverlapResolver import OverlapResolver
from PySubfix.SettingsType import SettingType, SettingsType
from PySubfix.SubtitleBlock import SubtitleBlock
from PySubfix.SubtitleData import SubtitleData
from PySubfix.SubtitleError import NoValidBlocksError, SubtitleError, SubtitleParseError
from PySubfix.SubtitleFixer import FixResult, SubtitleFixer
from PySubfix.SubtitleFormatRegistry import SubtitleFormatRegistry
from PySubfix.version import __version__


def init_options(**settings: SettingType) -> Options:
    """
    Create and return an :class:`Options` instance for a repositioning run.

    Parameters
    ----------
    **settings : SettingType
        clean = True               strip existing {\\anN} tags before assigning positions
        ignore_existing = True     keep existing leading {\\anN} tags as they are
        omit_default = False       write {\\an2} explicitly for bottom-centre subtitles
        keep_white = True          keep white colours inherited from ASS styles

        Options that are not specified take their default values.

    Returns
    -------
    Options
    """
    return Options(SettingsType(settings))

def fix_subtitles(content: str, filename: str|None = None, **settings: SettingType) -> FixResult:
    """
    Reposition overlapping subtitles in a document. The SRT output is in the text of the result.

    Parameters
    ----------
    content : str
        The subtitle document, in SRT or ASS/SSA format.

    filename : str|None
        Name of the source file, used as a hint to the format.

    **settings : SettingType
        See :func:`init_options`.

    Raises
    ------
    NoValidBlocksError
        If the document contains no usable subtitles.
    """
    fixer = SubtitleFixer(init_options(**settings))
    return fixer.FixContent(content, filename=filename)

__all__ = [
    '__version__',
    'FixResult',
    'NoValidBlocksError',
    'Options',
    'OverlapResolver',
    'SettingsType',
    'SubtitleBlock',
    'SubtitleData',
    'SubtitleError',
    'SubtitleFixer',
    'SubtitleFormatRegistry',
    'SubtitleParseError',
    'fix_subtitles',
    'init_options',
]
