import os

from PySubfix.SubtitleError import SubtitleError

def GetInputPath(filepath : str|None) -> str|None:
    """
    Normalize the input file path for cross-platform compatibility.

    Args:
        filepath: Input file path

    Returns:
        str: Normalized path preserving original extension
        None: If filepath is None
    """
    if not filepath:
        return None
    return os.path.normpath(filepath)

def GetOutputPath(filepath : str|None, suffix : str|None = None, format_extension : str|None = None, directory : str|None = None) -> str|None:
    """
    Generate an output path for a repositioned subtitle file.

    Args:
        filepath: Input file path to base output path on
        suffix: Suffix to insert before the extension (defaults to "fixed")
        format_extension: Target extension, defaults to '.srt' since output is always SubRip
        directory: Directory to write to, defaults to the directory of the input file

    Returns:
        str: Output path with format: "basename.suffix.extension"
        None: If filepath is None
    """
    if not filepath:
        return None

    if directory is None:
        directory = os.path.dirname(filepath)

    basename, _ = os.path.splitext(os.path.basename(filepath))

    target_extension = format_extension or '.srt'
    if not target_extension.startswith('.'):
        target_extension = f'.{target_extension}'

    suffix = suffix or "fixed"
    name_suffix = f".{suffix}"
    if not basename.endswith(name_suffix):
        basename = basename + name_suffix

    output_path = os.path.join(directory, f"{basename}{target_extension}")
    return os.path.normpath(output_path)

def FormatErrorMessages(errors : list[SubtitleError|str]) -> str:
    """
    Extract error messages from a list of errors
    """
    return ", ".join([ error.message or str(error) if isinstance(error, SubtitleError) else str(error) for error in errors ])
