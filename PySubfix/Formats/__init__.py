"""
PySubfix.Formats - Format-specific file handlers

Explicitly import all format handler modules so they are registered
even where dynamic discovery of the package is not possible.
"""
from . import SrtFileHandler
from . import AssFileHandler
