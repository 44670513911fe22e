"""
Screen position tags, written in subtitle text as {\\anN} where N is a numpad position.

The palette order is also the priority order used when a free position is needed.
"""
import regex

BOTTOM_CENTER = "\\an2"
TOP_CENTER = "\\an8"
MIDDLE_CENTER = "\\an5"
MIDDLE_LEFT = "\\an4"
MIDDLE_RIGHT = "\\an6"

POSITION_TAGS : tuple[str, ...] = (BOTTOM_CENTER, TOP_CENTER, MIDDLE_CENTER, MIDDLE_LEFT, MIDDLE_RIGHT)
DEFAULT_TAG : str = POSITION_TAGS[0]
OVERFLOW_TAG : str = POSITION_TAGS[-1]

_LEADING_TAG_PATTERN = regex.compile(r'^\{(\\an[1-9])\}')
_ANY_TAG_PATTERN = regex.compile(r'\{\\an[1-9]\}')

def ExtractLeadingTag(text : str) -> str|None:
    """
    Return the position tag (e.g. '\\an8') at the very start of a line, if there is one
    """
    match = _LEADING_TAG_PATTERN.match(text)
    return match.group(1) if match else None

def StripLeadingTag(text : str) -> str:
    return _LEADING_TAG_PATTERN.sub('', text, count=1)

def StripAllTags(text : str) -> str:
    """
    Remove every {\\anN} marker from a line, wherever it appears
    """
    return _ANY_TAG_PATTERN.sub('', text)

def FormatTag(tag : str) -> str:
    """ Render a tag as a text marker, e.g. '\\an8' -> '{\\an8}' """
    return f"{{{tag}}}"
