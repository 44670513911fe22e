import regex

_ASS_PREFIX_PATTERN = regex.compile(r'^&?H', regex.IGNORECASE)
_HEX_BYTE_PATTERN = regex.compile(r'^[0-9a-fA-F]{2}$')

class Color:
    """
    Simple RGB colour, convertible from ASS colour strings and to HTML hex notation.
    """

    def __init__(self, r : int, g : int, b : int):
        self.r = max(0, min(255, r))
        self.g = max(0, min(255, g))
        self.b = max(0, min(255, b))

    def __eq__(self, value: object) -> bool:
        if not isinstance(value, Color):
            return False

        return (self.r, self.g, self.b) == (value.r, value.g, value.b)

    def __repr__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b})"

    @property
    def is_white(self) -> bool:
        return (self.r, self.g, self.b) == (255, 255, 255)

    @classmethod
    def from_ass(cls, value : str|None) -> 'Color|None':
        """
        Create a Color from an ASS colour, e.g. &H00FF8800& or H0000FF.

        ASS colours are written in BBGGRR order, optionally preceded by an alpha byte.
        Style colours in older SSA files are plain decimal BGR integers.
        Returns None if the value cannot be interpreted.
        """
        if not value:
            return None

        value = value.strip()
        if value.isdigit():
            bgr = int(value)
            return cls(bgr & 0xFF, (bgr >> 8) & 0xFF, (bgr >> 16) & 0xFF)

        hex_str = _ASS_PREFIX_PATTERN.sub('', value).rstrip('&')
        if not hex_str:
            return None

        hex_str = hex_str.rjust(6, '0')
        bb, gg, rr = hex_str[-6:-4], hex_str[-4:-2], hex_str[-2:]
        if not all(_HEX_BYTE_PATTERN.match(part) for part in (rr, gg, bb)):
            return None

        return cls(int(rr, 16), int(gg, 16), int(bb, 16))

    def to_html(self) -> str:
        """Convert to lowercase #rrggbb"""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
