"""
The capabilities a LineScanner needs from its stream, wrapped so that
failures surface as the errors in _seekline.errors.

Any binary file object will do, ie. io.BytesIO, a file opened
with mode "rb" or an io.RawIOBase implementation.
"""

import io

from _seekline.errors import PositioningError, StreamReadError


def is_open(stream):
    return not stream.closed


def read_into(stream, buffer):
    """
    Fill buffer with up to len(buffer) bytes from stream.

    :returns: The number of bytes read, 0 at end of stream.
    """
    try:
        count = stream.readinto(buffer)
    except (OSError, ValueError) as err:
        raise StreamReadError(f"Failed to read from stream: {err}") from err
    if count is None:
        raise StreamReadError("Stream has no data available (non-blocking read)")
    return count


def seek(stream, offset):
    if offset < 0:
        raise PositioningError(f"Cannot seek to negative offset {offset}")
    try:
        stream.seek(offset, io.SEEK_SET)
    except (OSError, ValueError) as err:
        raise PositioningError(f"Failed to seek stream to {offset}: {err}") from err


def tell(stream):
    try:
        return stream.tell()
    except (OSError, ValueError) as err:
        raise PositioningError(f"Failed to get stream position: {err}") from err
