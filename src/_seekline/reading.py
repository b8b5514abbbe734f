import pathlib
from contextlib import contextmanager

from _seekline.line_scanner import LineScanner


@contextmanager
def lazy_read_lines(filelike, **scanner_options):
    """
    Iterate over the lines of a file or binary stream, ie.

    >>> with lazy_read_lines("/my/file.txt") as lines:
    ...     for line in lines:
    ...         print(line)

    If given a path, the file is opened in binary mode and closed
    on exit, streams are left open.

    :param filelike: A path or an open, seekable binary stream.
    :param scanner_options: Keyword arguments passed on to LineScanner.
    """
    file_stream = filelike
    did_open = False
    if isinstance(filelike, (str, pathlib.Path)):
        did_open = True
        file_stream = open(filelike, "rb")

    try:
        yield iter(LineScanner(file_stream, **scanner_options))
    finally:
        if did_open:
            file_stream.close()


def read_lines(filelike, **scanner_options):
    """
    Reads all lines of a file or binary stream, ie.
    lines = read_lines("/my/file.txt")

    See lazy_read_lines.
    """
    with lazy_read_lines(filelike, **scanner_options) as lines:
        return list(lines)
