class InvalidStateError(Exception):
    """
    Raised when a LineScanner is constructed over a stream
    that is already closed.
    """

    pass


class StreamReadError(Exception):
    """
    Raised when reading from the underlying stream fails.
    """

    pass


class PositioningError(Exception):
    """
    Raised when repositioning the underlying stream fails.

    If the failing seek happened after a line (or raw bytes) had
    already been produced, that value is available as ``value`` so
    that it is not lost.
    """

    def __init__(self, message, value=None):
        super().__init__(message)
        self.value = value


class LineDecodeError(Exception):
    """
    Raised when the bytes of a line cannot be decoded with the
    scanner's encoding. The line is consumed, ``data`` holds its raw
    bytes and ``offset`` the stream offset where it started.
    """

    def __init__(self, message, data, offset):
        super().__init__(message)
        self.data = data
        self.offset = offset


class LineTooLongError(Exception):
    """
    Raised when more than max_line_length bytes are buffered
    without finding a delimiter.
    """

    pass


class StreamUnderflowError(Exception):
    """
    Raised when the stream ends before the requested number of
    bytes could be read.
    """

    pass
