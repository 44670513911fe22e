import importlib
import inspect
import logging
import os
import pkgutil
from pathlib import Path

import regex

from PySubfix.Helpers.Localization import _
from PySubfix.Options import Options
from PySubfix.SubtitleFileHandler import SubtitleFileHandler

_SCRIPT_INFO_PATTERN = regex.compile(r'\[Script Info\]', regex.IGNORECASE)
_DIALOGUE_PATTERN = regex.compile(r'^Dialogue:', regex.MULTILINE)

_RICH_FORMATS = ('.ass', '.ssa')


class SubtitleFormatRegistry:
    """
    Manages discovery and lookup of subtitle file handlers.

    Uses lazy discovery to find all subclasses of SubtitleFileHandler in the Formats package.
    Handlers are registered by their supported file extensions and priorities.

    Provides methods to create handler instances based on file extensions, filenames or content.
    """
    _handlers : dict[str, type[SubtitleFileHandler]] = {}
    _priorities : dict[str, int] = {}
    _discovered : bool = False

    @classmethod
    def register_handler(cls, handler_class : type[SubtitleFileHandler]) -> None:
        """
        Register a subtitle file handler class for its supported extensions.
        """
        for ext, priority in handler_class.SUPPORTED_EXTENSIONS.items():
            ext = ext.lower()
            if ext not in cls._handlers or priority >= cls._priorities[ext]:
                cls._handlers[ext] = handler_class
                cls._priorities[ext] = priority

    @classmethod
    def get_handler_by_extension(cls, extension : str) -> type[SubtitleFileHandler]:
        """
        Get the subtitle file handler class for the given extension.
        """
        cls._ensure_discovered()
        ext = extension.lower()
        if ext not in cls._handlers:
            raise ValueError(_("Unknown subtitle format: {extension}. Available formats: {available}").format(extension=extension, available=cls.list_available_formats()))
        return cls._handlers[ext]

    @classmethod
    def create_handler(cls, extension : str|None = None, filename : str|None = None, options : Options|None = None) -> SubtitleFileHandler:
        """
        Instantiate a subtitle file handler for the given extension or filename.
        """
        if extension is None and filename is not None:
            extension = cls.get_format_from_filename(filename)

        if not extension:
            raise ValueError(
                _("Format cannot be deduced from filename or extension '{name}'. Available formats: {formats}").format(
                    name=filename or extension or "None", formats=cls.list_available_formats()))

        handler_cls = cls.get_handler_by_extension(extension)
        return handler_cls(options)

    @classmethod
    def create_handler_for_content(cls, content : str, filename : str|None = None, options : Options|None = None) -> SubtitleFileHandler:
        """
        Choose a handler for a document. An .ass/.ssa filename selects the ASS handler, otherwise the content decides.
        """
        extension = cls.get_format_from_filename(filename) if filename else None
        if extension not in _RICH_FORMATS:
            extension = cls.detect_format_from_content(content)

        logging.debug(f"Using {extension} handler for {filename or 'content'}")
        return cls.create_handler(extension, options=options)

    @classmethod
    def detect_format_from_content(cls, content : str) -> str:
        """
        Sniff the format of a document: a [Script Info] header and a Dialogue: line mean ASS, anything else is treated as SRT.
        """
        if _SCRIPT_INFO_PATTERN.search(content) and _DIALOGUE_PATTERN.search(content):
            return '.ass'
        return '.srt'

    @classmethod
    def enumerate_formats(cls) -> list[str]:
        """
        List all supported subtitle formats (file extensions).
        """
        cls._ensure_discovered()
        return sorted(cls._handlers.keys())

    @classmethod
    def list_available_formats(cls) -> str:
        """
        Get a comma-separated string of all supported subtitle formats.
        """
        formats = cls.enumerate_formats()
        return _("None") if not formats else ", ".join(formats)

    @classmethod
    def disable_autodiscovery(cls) -> None:
        """ Disable automatic discovery of subtitle formats (for testing) """
        cls.clear()
        cls._discovered = True

    @classmethod
    def discover(cls) -> None:
        """
        Discover and register all subtitle file handlers in the Formats package.
        """
        package_path = Path(__file__).parent / "Formats"
        for _finder, module_name, _ispkg in pkgutil.iter_modules([str(package_path)]):
            module = importlib.import_module(f"PySubfix.Formats.{module_name}")
            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, SubtitleFileHandler) and obj is not SubtitleFileHandler:
                    cls.register_handler(obj)
        cls._discovered = True

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered handlers
        """
        cls._handlers.clear()
        cls._priorities.clear()
        cls._discovered = False

    @classmethod
    def get_format_from_filename(cls, filename : str) -> str|None:
        """
        Deduce subtitle format from file extension
        """
        _base, extension = os.path.splitext(filename)
        return extension.lower() if extension else None

    @classmethod
    def _ensure_discovered(cls) -> None:
        if not cls._discovered:
            cls.discover()
