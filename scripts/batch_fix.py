"""Batch reposition subtitle files using PySubfix.

Processes all subtitle files in a source directory and writes repositioned SRT versions to a
destination directory, keeping the relative layout of the source tree.

EXAMPLES:
    python scripts/batch_fix.py ./subtitles ./fixed

    # Strip existing position tags and process four files at a time
    python scripts/batch_fix.py ./subtitles ./fixed --clean --workers 4

Options can be specified by:
- Passing command line arguments
- Editing DEFAULT_OPTIONS in this script
- Via environment variables (e.g. SUBFIX_CLEAN=1)
"""
from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import threading
from concurrent.futures import ThreadPoolExecutor

from PySubfix import init_options
from PySubfix import Options, SettingsType, SubtitleError
from PySubfix import SubtitleFixer
from PySubfix import SubtitleFormatRegistry

from PySubfix.Helpers import FormatErrorMessages, GetOutputPath
from PySubfix.SettingsType import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = SettingsType({
    'source_path': './subtitles',
    'destination_path': './fixed',
    'suffix': 'fixed',                              # Inserted before the .srt extension of each output file
    'workers': 1,                                   # Number of files to process concurrently
    'log_path': './batch-fix.log',
})

class BatchJobConfig:
    """
    Container for batch configuration
    """
    def __init__(self, options : Options):
        self.options = options

        self.source_path = self.options.get_str('source_path') or './subtitles'
        self.destination_path = self.options.get_str('destination_path') or './fixed'
        self.log_path = self.options.get_str('log_path') or './batch-fix.log'
        self.suffix = self.options.get_str('suffix') or 'fixed'
        self.workers = max(1, self.options.get_int('workers') or 1)

class BatchStatistics:
    """Summary of the batch processing run."""

    def __init__(self, discovered_files : int = 0, fixed_files : int = 0, failed_files : int = 0, skipped_blocks : int = 0):
        self.discovered_files = discovered_files
        self.fixed_files = fixed_files
        self.failed_files = failed_files
        self.skipped_blocks = skipped_blocks
        self.errors : list[SubtitleError|str] = []
        self._lock = threading.Lock()

    def record_success(self, skipped_blocks : int) -> None:
        with self._lock:
            self.fixed_files += 1
            self.skipped_blocks += skipped_blocks

    def record_failure(self, source_file : pathlib.Path, error : BaseException) -> None:
        with self._lock:
            self.failed_files += 1
            self.errors.append(f"{source_file.name}: {error}")

    def as_message(self) -> str:
        """Return a human readable summary string."""
        return (
            f"Processed {self.discovered_files} file(s): "
            f"{self.fixed_files} fixed, "
            f"{self.failed_files} failed, "
            f"{self.skipped_blocks} block(s) skipped"
        )

class BatchProcessor:
    """Coordinate discovery and repositioning of subtitle files."""

    def __init__(self, config : BatchJobConfig):
        self.config = config
        self.options = config.options
        self.logger = logger

    def run(self) -> BatchStatistics:
        """Execute the batch workflow."""
        source_root = pathlib.Path(self.config.source_path).expanduser().resolve()
        if not source_root.exists() or not source_root.is_dir():
            raise SubtitleError(f"Source path '{source_root}' does not exist or is not a directory")

        destination_root = pathlib.Path(self.config.destination_path).expanduser().resolve()
        destination_root.mkdir(parents=True, exist_ok=True)

        self.logger.info("Starting batch from %s", source_root)
        self.logger.info("Writing repositioned files to %s", destination_root)

        supported_extensions = {ext.lower() for ext in SubtitleFormatRegistry.enumerate_formats()}
        self.logger.info("Supported subtitle formats: %s", ", ".join(sorted(supported_extensions)))

        files = self._discover_files(source_root, supported_extensions, destination_root)
        stats = BatchStatistics(discovered_files=len(files))

        if not files:
            self.logger.warning("No subtitle files found in %s", source_root)
            return stats

        self.logger.info("Repositioning %d subtitle file(s) with %d worker(s)", len(files), self.config.workers)

        claimed : dict[pathlib.Path, pathlib.Path] = {}

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            for source_file in files:
                destination_file = self._get_destination(destination_root / source_file.relative_to(source_root))

                if destination_file in claimed:
                    self.logger.warning("%s would overwrite the output of %s, skipping it", source_file, claimed[destination_file])
                    stats.record_failure(source_file, SubtitleError(f"Output {destination_file.name} is already written by {claimed[destination_file].name}"))
                    continue

                claimed[destination_file] = source_file
                executor.submit(self._process_file, source_file, destination_file, stats)

        return stats

    def _process_file(self, source_file : pathlib.Path, destination_file : pathlib.Path, stats : BatchStatistics) -> None:
        """
        Reposition one file. Errors are logged and counted so that the rest of the batch continues.
        """
        try:
            destination_file.parent.mkdir(parents=True, exist_ok=True)

            fixer = SubtitleFixer(self.options)
            result = fixer.FixFile(str(source_file), output_path=str(destination_file))

            if result.skipped:
                self.logger.warning("Skipped %d empty or malformed block(s) in %s", result.skipped, source_file)

            self.logger.info("Saved %d block(s) from %s to %s", result.block_count, source_file, destination_file)
            stats.record_success(result.skipped)

        except (SubtitleError, OSError) as exc:
            self.logger.error("Failed to process %s: %s", source_file, exc)
            stats.record_failure(source_file, exc)

        except Exception as exc:
            self.logger.exception("Unexpected error processing %s", source_file)
            stats.record_failure(source_file, exc)

    def _discover_files(
        self,
        root : pathlib.Path,
        supported_extensions : set[str],
        exclude : pathlib.Path | None = None
    ) -> list[pathlib.Path]:
        """Return subtitle files under *root* that match supported extensions."""
        subtitle_files : list[pathlib.Path] = []
        for path in root.rglob('*'):
            if exclude and exclude != root and path.is_relative_to(exclude):
                continue
            if not path.is_file():
                continue
            if path.suffix.lower() in supported_extensions:
                subtitle_files.append(path)
        return sorted(subtitle_files)

    def _get_destination(self, base_output : pathlib.Path) -> pathlib.Path:
        """
        Return the destination path for a file. Inputs that differ only by extension share a destination.
        """
        output_path = GetOutputPath(str(base_output), self.config.suffix, '.srt')
        if not output_path:
            raise SubtitleError(f"Unable to determine output path for {base_output}")

        return pathlib.Path(output_path)


def build_config(args : argparse.Namespace) -> BatchJobConfig:
    """Combine DEFAULT_OPTIONS with command line arguments."""
    settings = SettingsType(DEFAULT_OPTIONS)

    if args.source:
        settings['source_path'] = args.source
    if args.destination:
        settings['destination_path'] = args.destination
    if args.suffix:
        settings['suffix'] = args.suffix
    if args.workers is not None:
        settings['workers'] = args.workers
    if args.log_file:
        settings['log_path'] = args.log_file

    if args.clean is not None:
        settings['clean'] = args.clean
    if args.ignore_existing is not None:
        settings['ignore_existing'] = args.ignore_existing
    if args.omit_default is not None:
        settings['omit_default'] = args.omit_default
    if args.keep_white is not None:
        settings['keep_white'] = args.keep_white

    options = init_options(**settings)

    return BatchJobConfig(options)

def configure_logging(log_path : str, verbose : bool) -> None:
    """Configure logging to emit concise console output and detailed log file."""
    resolved_log_path = pathlib.Path(log_path).expanduser().resolve()
    resolved_log_path.parent.mkdir(parents=True, exist_ok=True)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(resolved_log_path, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(name)s - %(threadName)s - %(message)s'))
    logging.root.addHandler(file_handler)

    # Console only shows messages from this script, and errors from anywhere
    console_handler = logging.StreamHandler(stream=sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    console_handler.addFilter(BatchScriptFilter())
    logging.root.addHandler(console_handler)

class BatchScriptFilter(logging.Filter):
    def filter(self, record):
        return record.name in ('__main__', __name__) or record.levelno >= logging.ERROR

def parse_args(argv : list[str]|None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Batch reposition overlapping subtitles with PySubfix")
    parser.add_argument("source", nargs="?", help="Directory containing subtitle files")
    parser.add_argument("destination", nargs="?", help="Directory to write repositioned subtitles")
    parser.add_argument("--suffix", help="Suffix to add to output file names (default: fixed)")
    parser.add_argument("--workers", type=int, default=None, help="Number of files to process concurrently")
    parser.add_argument("--clean", action="store_true", default=None, help="Remove existing {\\anN} tags before processing")
    parser.add_argument("--ignore-existing", dest="ignore_existing", action="store_true", default=None, help="Keep existing leading {\\anN} tags")
    default_group = parser.add_mutually_exclusive_group()
    default_group.add_argument("--omit-default", dest="omit_default", action="store_true", help="Do not write {\\an2} for bottom-centre subtitles (default)")
    default_group.add_argument("--keep-default", dest="omit_default", action="store_false", help="Always write {\\an2} for bottom-centre subtitles")
    parser.add_argument("--keep-white", dest="keep_white", action="store_true", default=None, help="Keep white colours when converting from ASS")
    parser.add_argument("--log-file", dest="log_file", help="Path to write the detailed log file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose console logging")
    parser.set_defaults(omit_default=None)
    return parser.parse_args(argv)


def main(argv : list[str]|None = None) -> int:
    """Entry point for command line execution."""

    args = parse_args(argv)

    try:
        config = build_config(args)
    except SettingsError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.log_path, args.verbose)

    logger.info("Source directory: %s", str(config.source_path))
    logger.info("Destination directory: %s", str(config.destination_path))

    try:
        processor = BatchProcessor(config)

        try:
            stats = processor.run()

        except (SubtitleError, SettingsError) as exc:
            logger.error("Batch processing failed: %s", exc)
            return 1
        except KeyboardInterrupt:
            logger.warning("Batch processing interrupted by user")
            return 130

        logger.info(stats.as_message())
        if stats.errors:
            logger.error("Failed files: %s", FormatErrorMessages(stats.errors))

    except Exception as error:
        message = error.message or str(error) if isinstance(error, SubtitleError) else str(error)
        logger.exception("An error occurred: %s", message)
        return 1

    return 0 if stats.failed_files == 0 else 1


if __name__ == '__main__':
    raise SystemExit(main())
