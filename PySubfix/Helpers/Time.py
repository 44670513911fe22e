from datetime import timedelta

import regex
import srt # type: ignore

_SRT_TIMESTAMP_PATTERN = regex.compile(r'^(\d{2}):(\d{2}):(\d{2}),(\d{3})$')
_ASS_TIMESTAMP_PATTERN = regex.compile(r'^(\d+):(\d{2}):(\d{2})\.(\d{1,2})$')
_TIMING_SEPARATOR_PATTERN = regex.compile(r'\s*-->\s*')

def ParseSrtTimestamp(timestamp : str) -> int|None:
    """
    Convert an SRT timestamp (HH:MM:SS,mmm) to milliseconds, or None if it is not strictly in that form
    """
    match = _SRT_TIMESTAMP_PATTERN.match(timestamp)
    if not match:
        return None

    hours, minutes, seconds, millis = (int(group) for group in match.groups())
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis

def ParseSrtTiming(line : str) -> tuple[int, int]|None:
    """
    Parse an SRT range line (start --> end) into a (start, end) pair of milliseconds
    """
    parts = _TIMING_SEPARATOR_PATTERN.split(line.strip())
    if len(parts) != 2:
        return None

    start = ParseSrtTimestamp(parts[0].strip())
    end = ParseSrtTimestamp(parts[1].strip())
    if start is None or end is None:
        return None

    return start, end

def ParseAssTimestamp(timestamp : str) -> int|None:
    """
    Convert an ASS timestamp (H:MM:SS.cc) to milliseconds.

    A single fractional digit is tenths of a second, two digits are centiseconds.
    """
    match = _ASS_TIMESTAMP_PATTERN.match(timestamp.strip())
    if not match:
        return None

    hours, minutes, seconds = (int(group) for group in match.groups()[:3])
    fraction = match.group(4)
    millis = int(fraction) * (100 if len(fraction) == 1 else 10)
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis

def FormatSrtTimestamp(ms : int) -> str:
    """ Milliseconds to HH:MM:SS,mmm """
    return srt.timedelta_to_srt_timestamp(timedelta(milliseconds=ms))
