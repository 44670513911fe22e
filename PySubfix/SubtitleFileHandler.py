from abc import ABC, abstractmethod
from typing import TextIO
import logging
import os

from PySubfix.Helpers.Localization import _
from PySubfix.Options import Options
from PySubfix.SubtitleData import SubtitleData
from PySubfix.SubtitleError import SubtitleParseError

# Default encodings for reading subtitle files
default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')
fallback_encoding = os.getenv('FALLBACK_ENCODING', 'iso-8859-1')

BYTE_ORDER_MARK = '\ufeff'


class SubtitleFileHandler(ABC):
    """
    Abstract interface for reading subtitle files into blocks.

    Implementations handle format-specific parsing, so the resolver never needs to know where blocks came from.
    """

    SUPPORTED_EXTENSIONS: dict[str, int] = {}

    def __init__(self, options : Options|None = None):
        self.options : Options = options or Options()

    @abstractmethod
    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse subtitle string content into blocks.

        Malformed or empty blocks are skipped and counted rather than raising.

        Returns:
            SubtitleData: Parsed blocks and the number of skipped blocks
        """
        raise NotImplementedError

    def parse_file(self, file_obj: TextIO) -> SubtitleData:
        """
        Parse the content of an open file.
        """
        return self.parse_string(file_obj.read())

    def load_file(self, path: str) -> SubtitleData:
        """
        Read a subtitle file and parse it.
        """
        return self.parse_string(ReadSubtitleFile(path))

    def get_file_extensions(self) -> list[str]:
        """
        Get file extensions supported by this handler.
        """
        return list(self.__class__.SUPPORTED_EXTENSIONS.keys())

    def get_extension_priorities(self) -> dict[str, int]:
        """
        Get priority for each supported extension.

        Returns:
            dict: Mapping of file extensions to their priority (higher = more preferred)
        """
        return self.__class__.SUPPORTED_EXTENSIONS.copy()


def NormaliseContent(content : str) -> str:
    """
    Strip a byte order mark and convert line endings to \\n
    """
    if content.startswith(BYTE_ORDER_MARK):
        content = content[len(BYTE_ORDER_MARK):]
    return content.replace('\r\n', '\n').replace('\r', '\n')

def ReadSubtitleFile(path : str) -> str:
    """
    Read the content of a subtitle file, retrying with the fallback encoding if it is not valid in the default encoding.

    Raises:
        SubtitleParseError: If the file cannot be decoded with either encoding
    """
    try:
        with open(path, 'r', encoding=default_encoding, newline='') as f:
            return f.read()
    except UnicodeDecodeError:
        logging.debug(f"Unable to read {path} as {default_encoding}, trying {fallback_encoding}")

    try:
        with open(path, 'r', encoding=fallback_encoding, newline='') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise SubtitleParseError(_("Unable to decode {path}").format(path=path), e)
