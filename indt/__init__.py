from .errors import IndentUnderflowError, IndtError
from .sink import Sink, TextSink
from .writer import BaseIndentWriter, IndentTextWriter, IndentWriter

__all__ = [
    "BaseIndentWriter",
    "IndentTextWriter",
    "IndentUnderflowError",
    "IndentWriter",
    "IndtError",
    "Sink",
    "TextSink",
]
