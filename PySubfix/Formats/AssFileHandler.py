from __future__ import annotations

import logging

import regex

from PySubfix.Helpers.Color import Color
from PySubfix.Helpers.Text import IsBlank, WrapWithFont
from PySubfix.Helpers.Time import ParseAssTimestamp
from PySubfix.PositionTags import FormatTag
from PySubfix.SubtitleBlock import SubtitleBlock
from PySubfix.SubtitleData import SubtitleData
from PySubfix.SubtitleFileHandler import SubtitleFileHandler, NormaliseContent

_STYLE_SECTIONS = { '[v4+ styles]', '[v4 styles]' }
_EVENTS_SECTION = '[events]'

_FORMAT_LINE_PATTERN = regex.compile(r'^Format:', regex.IGNORECASE)
_STYLE_LINE_PATTERN = regex.compile(r'^Style:', regex.IGNORECASE)
_DIALOGUE_LINE_PATTERN = regex.compile(r'^Dialogue:', regex.IGNORECASE)

_OVERRIDE_BLOCK_PATTERN = regex.compile(r'\{([^}]*)\}')
_OVERRIDE_TOKEN_PATTERN = regex.compile(r'\\(?:[0-9]+[A-Za-z]+|[A-Za-z]+)[^\\}]*')
_LINE_BREAK_PATTERN = regex.compile(r'\\[Nn]')

# Tag matchers, applied to each override token in this order
_ALIGNMENT_PATTERN = regex.compile(r'\\an([1-9])')
_FONT_NAME_PATTERN = regex.compile(r'\\fn([^\\}]+)')
_FONT_SIZE_PATTERN = regex.compile(r'\\fs(\d+)')
_PRIMARY_COLOR_PATTERN = regex.compile(r'\\1c(&?H[0-9A-Fa-f]+&?)')
_COLOR_PATTERN = regex.compile(r'\\c(&?H[0-9A-Fa-f]+&?)')


class AssOverrides:
    """
    Formatting extracted from the inline override blocks of an event, with the visible text that remains.

    Later tags override earlier ones, so the last alignment in an event wins.
    """
    def __init__(self, text : str):
        self.alignment : str|None = None
        self.font_name : str|None = None
        self.font_size : str|None = None
        self.color : str|None = None
        self.text : str = _OVERRIDE_BLOCK_PATTERN.sub(self._scan_block, text)

    def _scan_block(self, match : regex.Match) -> str:
        for token in _OVERRIDE_TOKEN_PATTERN.findall(match.group(1)):
            if alignment := _ALIGNMENT_PATTERN.search(token):
                self.alignment = f"\\an{alignment.group(1)}"

            if font_name := _FONT_NAME_PATTERN.search(token):
                self.font_name = font_name.group(1).strip()

            if font_size := _FONT_SIZE_PATTERN.search(token):
                self.font_size = font_size.group(1)

            for pattern in (_PRIMARY_COLOR_PATTERN, _COLOR_PATTERN):
                if color_match := pattern.search(token):
                    color = Color.from_ass(color_match.group(1))
                    if color:
                        self.color = color.to_html()

        return ""


class AssFileHandler(SubtitleFileHandler):
    """
    File handler for Advanced SubStation Alpha (ASS/SSA) subtitles.

    Dialogue events are converted to SRT-ready blocks: override tags are stripped, font and colour
    are carried through as a <font> element and an alignment override becomes a leading {\\anN} tag.
    """

    SUPPORTED_EXTENSIONS = {'.ass': 10, '.ssa': 10}

    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse ASS string content into blocks, counting events that had to be skipped.
        """
        style_lines : list[str] = []
        event_lines : list[str] = []

        section = ""
        for line in NormaliseContent(content).split('\n'):
            line = line.strip()
            if line.startswith('[') and line.endswith(']'):
                section = line.lower()
            elif section in _STYLE_SECTIONS:
                style_lines.append(line)
            elif section == _EVENTS_SECTION:
                event_lines.append(line)

        styles = self._parse_styles(style_lines)

        blocks : list[SubtitleBlock] = []
        skipped = 0

        for values in self._parse_sections(event_lines, _DIALOGUE_LINE_PATTERN, 'Dialogue:'):
            block = self._parse_event(values, styles, len(blocks))
            if block is None:
                skipped += 1
                continue

            blocks.append(block)

        if skipped:
            logging.debug(f"Skipped {skipped} malformed or empty dialogue events")

        return SubtitleData(blocks=blocks, skipped=skipped, detected_format='.ass')

    def _parse_styles(self, lines : list[str]) -> dict[str, dict[str, str]]:
        """
        Index style definitions by name
        """
        styles : dict[str, dict[str, str]] = {}
        for values in self._parse_sections(lines, _STYLE_LINE_PATTERN, 'Style:'):
            name = values.get('Name')
            if name:
                styles[name] = values
        return styles

    def _parse_sections(self, lines : list[str], line_pattern : regex.Pattern, prefix : str):
        """
        Yield a field dictionary for each matching line, using the most recent Format: line for field names
        """
        fields : list[str]|None = None
        for line in lines:
            if _FORMAT_LINE_PATTERN.match(line):
                fields = [ field.strip() for field in line[len('Format:'):].split(',') ]
                continue

            if not fields or not line_pattern.match(line):
                continue

            values = SplitFields(line[len(prefix):].strip(), len(fields))
            yield { field: values[i] if i < len(values) else "" for i, field in enumerate(fields) }

    def _parse_event(self, values : dict[str, str], styles : dict[str, dict[str, str]], original_order : int) -> SubtitleBlock|None:
        start_ms = ParseAssTimestamp(values.get('Start', ""))
        end_ms = ParseAssTimestamp(values.get('End', ""))
        if start_ms is None or end_ms is None:
            logging.debug(f"Invalid event timing: {values.get('Start')} - {values.get('End')}")
            return None

        style = styles.get(values.get('Style', ""), {})
        overrides = AssOverrides(values.get('Text', ""))
        text = _LINE_BREAK_PATTERN.sub('\n', overrides.text)

        font_name = overrides.font_name or style.get('Fontname') or None
        font_size = overrides.font_size or style.get('Fontsize') or None

        color = overrides.color
        if color is None:
            style_color = Color.from_ass(style.get('PrimaryColour'))
            if style_color and not (style_color.is_white and self.options.omit_white):
                color = style_color.to_html()

        text = WrapWithFont(text, font_name, font_size, color)
        if overrides.alignment:
            text = FormatTag(overrides.alignment) + text

        lines = text.split('\n')
        if IsBlank(lines):
            logging.debug(f"Event at {values.get('Start')} has no text")
            return None

        return SubtitleBlock(original_order, start_ms, end_ms, lines)


def SplitFields(line : str, field_count : int) -> list[str]:
    """
    Split a comma-separated ASS line into field_count fields. The last field keeps any remaining commas.
    """
    if field_count < 1:
        return []
    return [ part.strip() for part in line.split(',', field_count - 1) ]
