import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PySubfix import init_options
from PySubfix.Options import Options
from PySubfix.SubtitleFormatRegistry import SubtitleFormatRegistry

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str|None

def InitLogger(debug: bool = False, log_path: str|None = None) -> LoggerOptions:
    """ Initialise console logging, and a log file if a path is provided """
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'WARNING').upper()
        logging_level = getattr(logging, level_name, logging.WARNING)

    try:
        logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)
    except Exception:
        logging.basicConfig(format='%(levelname)s: %(message)s', level=logging_level)
        logging.info("Unable to write to utf-8 log, falling back to default encoding")

    if debug:
        logging.debug("Debug logging enabled")

    if log_path:
        try:
            log_directory = os.path.dirname(log_path)
            if log_directory:
                os.makedirs(log_directory, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
            file_handler.setLevel(logging_level)
            file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            logging.getLogger('').addHandler(file_handler)
        except OSError as e:
            logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create an arg parser with the options shared by the subtitle fixer scripts
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('--list-formats', action='store_true', help="List supported subtitle formats and exit")
    parser.add_argument('--clean', action='store_true', default=None, help="Remove existing {\\anN} tags before processing")
    parser.add_argument('--ignore-existing', dest='ignore_existing', action='store_true', default=None, help="Keep existing leading {\\anN} tags and reserve their positions")
    default_group = parser.add_mutually_exclusive_group()
    default_group.add_argument('--omit-default', dest='omit_default', action='store_true', default=None, help="Do not write {\\an2} for bottom-centre subtitles (default)")
    default_group.add_argument('--keep-default', dest='omit_default', action='store_false', help="Always write {\\an2} for bottom-centre subtitles")
    parser.add_argument('--keep-white', dest='keep_white', action='store_true', default=None, help="Keep white colours when converting from ASS")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    parser.add_argument('--log-file', dest='log_file', default=None, help="Path to write a log file")
    parser.set_defaults(omit_default=None)
    return parser

def HandleFormatListing(args: Namespace) -> None:
    """Print supported subtitle formats and exit if requested."""
    if getattr(args, "list_formats", False):
        formats = SubtitleFormatRegistry.list_available_formats()
        if formats:
            print(f"Supported subtitle formats: {formats}")
        else:
            print("No subtitle formats available.")
        raise SystemExit(0)

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line, leaving unspecified settings at their defaults """
    settings = {
        'clean': args.clean,
        'ignore_existing': args.ignore_existing,
        'omit_default': args.omit_default,
        'keep_white': args.keep_white,
    }

    settings.update(kwargs)

    return init_options(**settings)
