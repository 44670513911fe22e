"""
Reposition overlapping subtitles so they do not draw on top of each other.

    srt-fixer input.srt [output.srt] [--clean] [--ignore-existing] [--keep-default] [--keep-white]
    srt-fixer --in input.ass [--out output.srt]

Without an output path the repositioned subtitles are written to stdout.
"""
import logging
import sys

from PySubfix import SubtitleError
from PySubfix.SettingsType import SettingsError
from PySubfix.SubtitleFixer import SubtitleFixer

from scripts.subfix_common import CreateArgParser, CreateOptions, HandleFormatListing, InitLogger

def parse_args(argv : list[str]|None = None):
    parser = CreateArgParser("Moves overlapping subtitles to different screen positions")
    parser.add_argument('input', nargs='?', help="Path to subtitle file (see --list-formats for supported formats)")
    parser.add_argument('output', nargs='?', help="Path to write the repositioned SRT file")
    parser.add_argument('--in', dest='input_option', default=None, help="Path to subtitle file")
    parser.add_argument('--out', dest='output_option', default=None, help="Path to write the repositioned SRT file")
    args = parser.parse_args(argv)

    HandleFormatListing(args)

    args.input = args.input_option or args.input
    args.output = args.output_option or args.output

    if not args.input:
        parser.print_usage(sys.stderr)
        parser.exit(1, "error: an input file is required\n")

    return args

def main(argv : list[str]|None = None) -> int:
    """Entry point for command line execution."""
    args = parse_args(argv)

    logger_options = InitLogger(args.debug, args.log_file)

    try:
        options = CreateOptions(args)
        fixer = SubtitleFixer(options)
        result = fixer.FixFile(args.input, output_path=args.output)

        if not args.output:
            print(result.text)

        if result.skipped > 0:
            print(f"Skipped {result.skipped} empty or malformed block(s).", file=sys.stderr)

    except (SubtitleError, SettingsError, OSError) as e:
        logging.debug(f"Failed to process {args.input}: {e}")
        print(str(e), file=sys.stderr)
        return 1

    finally:
        if logger_options.file_handler:
            logger_options.file_handler.close()
            logging.getLogger('').removeHandler(logger_options.file_handler)

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
