class SubtitleError(Exception):
    """
    Base class for errors raised by PySubfix.

    Wraps an optional underlying exception so callers can report the root cause.
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message : str|None = message
        self.error : Exception|None = error

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class SubtitleParseError(SubtitleError):
    """ A subtitle document could not be read at all """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message, error)

class NoValidBlocksError(SubtitleError):
    """
    Parsing finished but produced no usable subtitle blocks, so there is nothing to write.
    """
    def __init__(self, message : str|None = None, skipped : int = 0, format : str|None = None):
        super().__init__(message)
        self.skipped : int = skipped
        self.format : str|None = format
