_HTML_ATTRIBUTE_ESCAPES = [
    ('&', '&amp;'),
    ('"', '&quot;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
]

def EscapeHtmlAttribute(value : str) -> str:
    """
    Escape a value for use inside a double-quoted HTML attribute
    """
    for char, replacement in _HTML_ATTRIBUTE_ESCAPES:
        value = value.replace(char, replacement)
    return value

def WrapWithFont(text : str, face : str|None = None, size : str|None = None, color : str|None = None) -> str:
    """
    Wrap text in a <font> element carrying whichever of face, size and color are set.

    Text is returned unchanged if none of them are.
    """
    attributes = [ f'{name}="{EscapeHtmlAttribute(value)}"' for name, value in (('face', face), ('size', size), ('color', color)) if value ]
    if not attributes:
        return text

    return f"<font {' '.join(attributes)}>{text}</font>"

def IsBlank(lines : list[str]) -> bool:
    """ True if there are no lines or every line is empty or whitespace """
    return all(not line.strip() for line in lines)
