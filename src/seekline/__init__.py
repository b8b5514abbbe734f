import seekline.version
from _seekline.delimiter import Delimiter
from _seekline.errors import (
    InvalidStateError,
    LineDecodeError,
    LineTooLongError,
    PositioningError,
    StreamReadError,
    StreamUnderflowError,
)
from _seekline.line_scanner import LineScanner
from _seekline.reading import lazy_read_lines, read_lines

__author__ = """SeekLine developers"""

__version__ = seekline.version.version

__all__ = [
    "Delimiter",
    "InvalidStateError",
    "LineDecodeError",
    "LineScanner",
    "LineTooLongError",
    "PositioningError",
    "StreamReadError",
    "StreamUnderflowError",
    "lazy_read_lines",
    "read_lines",
]
