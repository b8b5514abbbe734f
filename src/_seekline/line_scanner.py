"""
A LineScanner reads decoded text lines from a seekable binary stream while
keeping track of how many bytes of the stream it has consumed. After every
call the stream is left positioned right after the consumed bytes, so that
line reads can be interleaved with raw reads and seeks on the same stream.

>>> scanner = LineScanner(io.BytesIO(b"a\\r\\nbb\\r\\nccc"))
>>> list(scanner)
['a', 'bb', 'ccc']
>>> scanner.cursor
10

The stream is read in chunks. Bytes read past the end of the current line
are kept for the next call instead of being read again, and the stream is
seeked back so that its position agrees with the cursor.
"""

import codecs
import warnings

import numpy as np

import _seekline.stream as seekstream
from _seekline.delimiter import Delimiter
from _seekline.errors import (
    InvalidStateError,
    LineDecodeError,
    LineTooLongError,
    PositioningError,
    StreamUnderflowError,
)

# Map from endianess to numpy byteorder character
byteorder = {"little": "<", "big": ">"}


def check_encoding(encoding, errors):
    """
    Lines are split on the raw bytes of the delimiter before decoding,
    so only encodings which encode "\\r\\n" as b"\\r\\n" are accepted.
    """
    try:
        codec = codecs.lookup(encoding)
    except LookupError as err:
        raise ValueError(f"Unknown encoding {encoding}") from err
    try:
        codecs.lookup_error(errors)
    except LookupError as err:
        raise ValueError(f"Unknown error handler {errors}") from err
    try:
        encoded = codec.encode("\r\n")[0]
    except (TypeError, UnicodeError) as err:
        raise ValueError(f"Encoding {encoding} does not encode text") from err
    if encoded != b"\r\n":
        raise ValueError(
            f"Encoding {encoding} is not ascii compatible, "
            "line delimiters can not be found in its bytes"
        )


class LineScanner:
    def __init__(
        self,
        stream,
        delimiter=Delimiter.CRLF,
        encoding="utf-8",
        errors="strict",
        chunk_size=8192,
        max_line_length=None,
        endianess="little",
    ):
        """
        :param stream: An open, seekable binary stream.
        :param delimiter: The Delimiter lines are terminated with.
        :param encoding: Encoding used for decoding lines, has to be
            ascii compatible.
        :param errors: Error handler used when decoding, as for bytes.decode.
        :param chunk_size: Number of bytes requested from the stream per read.
        :param max_line_length: If given, the largest number of bytes a
            line may contain before LineTooLongError is raised.
        :param endianess: Byte order used by read_array.
        """
        if not seekstream.is_open(stream):
            raise InvalidStateError("Cannot scan lines of a closed stream")
        if chunk_size < 1:
            raise ValueError(f"chunk_size has to be positive, got {chunk_size}")
        if max_line_length is not None and max_line_length < 1:
            raise ValueError(
                f"max_line_length has to be positive, got {max_line_length}"
            )
        check_encoding(encoding, errors)

        self.stream = stream
        self.delimiter = Delimiter(delimiter)
        self.encoding = encoding
        self.errors = errors
        self.max_line_length = max_line_length
        self._endianess = None
        self.endianess = endianess

        self._chunk = memoryview(bytearray(chunk_size))
        self._pending = bytearray()
        # No line ends before this index in _pending
        self._scanned = 0
        self._at_end = False
        # The stream returned no more bytes at the current read position
        self._exhausted = False
        self._has_warned = False

        self._cursor = seekstream.tell(stream)
        # Where the scanner left the stream, None when unknown
        self._stream_offset = self._cursor
        # True while a call is running or after it failed part way
        self._in_call = False

    @property
    def endianess(self):
        return self._endianess

    @endianess.setter
    def endianess(self, value):
        if value not in byteorder:
            raise ValueError("endianess has to be either 'little' or 'big'")
        self._endianess = value

    def swap_endianess(self):
        if self.endianess == "little":
            self.endianess = "big"
        else:
            self.endianess = "little"

    @property
    def cursor(self):
        """
        The stream offset right after the bytes consumed so far.
        """
        return self._cursor

    position = cursor

    @property
    def at_end(self):
        return self._at_end

    def has_more(self):
        return not self._at_end

    def __iter__(self):
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line

    def next_line(self):
        """
        :returns: The next line with its delimiter stripped, or None
            when the stream has no more lines.
        """
        self._begin()
        try:
            found = self._read_until_line()
        except LineTooLongError:
            self._finish()
            raise
        if found is None:
            self._finish()
            return None

        content_end, consumed = found
        raw = bytes(self._pending[:content_end])
        start = self._consume(consumed)
        try:
            line = raw.decode(self.encoding, self.errors)
        except UnicodeDecodeError as err:
            self._finish()
            raise LineDecodeError(
                f"Could not decode line at {start} as {self.encoding}: {err}",
                raw,
                start,
            ) from err
        self._finish(line)
        return line

    def read_bytes(self, size):
        """
        Consume up to size raw bytes at the cursor.

        :returns: The bytes read, fewer than size only at end of stream.
        """
        if size < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {size}")
        self._begin()
        self._fill_to(size)
        data = bytes(self._pending[:size])
        self._consume(len(data))
        self._finish(data)
        return data

    def read_array(self, dtype, count):
        """
        Consume count values of the given numpy dtype at the cursor,
        in the byte order given by endianess.

        :raises StreamUnderflowError: If the stream ends before count
            values are read, nothing is consumed in that case.
        """
        if count < 0:
            raise ValueError(f"Cannot read a negative number of values: {count}")
        dtype = np.dtype(dtype).newbyteorder(byteorder[self.endianess])
        num_bytes = count * dtype.itemsize
        self._begin()
        self._fill_to(num_bytes)
        if len(self._pending) < num_bytes:
            available = len(self._pending)
            self._finish()
            raise StreamUnderflowError(
                f"Expected {num_bytes} bytes at {self._cursor} "
                f"for {count} values of {dtype}, only {available} remain"
            )
        data = self._pending[:num_bytes]
        self._consume(num_bytes)
        values = np.frombuffer(data, dtype=dtype)
        self._finish(values)
        return values

    def seek(self, offset):
        """
        Move the stream and the cursor to offset, discarding read-ahead.
        """
        self._stream_offset = None
        seekstream.seek(self.stream, offset)
        self._discard_pending()
        self._exhausted = False
        self._cursor = offset
        self._stream_offset = offset
        self._in_call = False

    def _begin(self):
        if not self._in_call:
            position = seekstream.tell(self.stream)
            if position != self._cursor:
                # stream was moved by the caller since the last call
                self._discard_pending()
                self._exhausted = False
                self._cursor = position
            self._stream_offset = position
        self._in_call = True

    def _finish(self, value=None):
        self._stream_offset = None
        try:
            seekstream.seek(self.stream, self._cursor)
        except PositioningError as err:
            err.value = value
            raise
        self._stream_offset = self._cursor
        self._in_call = False

    def _fill(self):
        read_position = self._cursor + len(self._pending)
        stream_offset, self._stream_offset = self._stream_offset, None
        if stream_offset != read_position:
            seekstream.seek(self.stream, read_position)
        count = seekstream.read_into(self.stream, self._chunk)
        self._stream_offset = read_position + count
        if count == 0:
            self._exhausted = True
        else:
            self._pending += self._chunk[:count]
        return count

    def _fill_to(self, size):
        while len(self._pending) < size and not self._exhausted:
            self._fill()

    def _consume(self, size):
        start = self._cursor
        del self._pending[:size]
        self._scanned = max(0, self._scanned - size)
        self._cursor += size
        return start

    def _discard_pending(self):
        self._pending.clear()
        self._scanned = 0

    def _read_until_line(self):
        """
        Read chunks until _pending holds a terminated line or the stream
        is exhausted.

        :returns: Tuple of the number of content bytes and the number of
            bytes to consume for the next line, or None if there are no
            more lines.
        """
        while True:
            found = self._find_line()
            if found is not None:
                self._check_line_length(found[0])
                return found
            self._check_line_length(self._unterminated_length())
            if self._exhausted:
                self._at_end = True
                break
            self._fill()

        if not self._pending:
            return None
        self._check_line_length(len(self._pending))
        return len(self._pending), len(self._pending)

    def _find_line(self):
        pending = self._pending
        lf_index = pending.find(b"\n", self._scanned)
        while lf_index >= 0:
            length = self.delimiter.terminator_length(pending, lf_index)
            if length:
                return lf_index + 1 - length, lf_index + 1
            self._warn_bare_line_feed(lf_index)
            lf_index = pending.find(b"\n", lf_index + 1)
        self._scanned = len(pending)
        return None

    def _unterminated_length(self):
        # a trailing carriage return may be the first half of a delimiter
        if self._pending.endswith(b"\r"):
            return len(self._pending) - 1
        return len(self._pending)

    def _check_line_length(self, length):
        if self.max_line_length is not None and length > self.max_line_length:
            raise LineTooLongError(
                f"Line at {self._cursor} is longer than "
                f"max_line_length={self.max_line_length}"
            )

    def _warn_bare_line_feed(self, lf_index):
        if self._has_warned:
            return
        self._has_warned = True
        warnings.warn(
            f"Line feed without carriage return at {self._cursor + lf_index} "
            "is kept as line content, use Delimiter.NEWLINE to split on it."
        )
