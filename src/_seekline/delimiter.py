from enum import Enum, unique

CR = 0x0D


@unique
class Delimiter(Enum):
    """
    The accepted line terminators.

    CRLF only splits on b"\\r\\n", a bare b"\\n" is line content.
    NEWLINE splits on b"\\n" and strips a directly preceding b"\\r",
    so it accepts both b"\\r\\n" and b"\\n" terminated lines.
    """

    CRLF = b"\r\n"
    NEWLINE = b"\n"

    def terminator_length(self, buffer, lf_index):
        """
        :param buffer: The bytes being scanned.
        :param lf_index: Index of a line feed in buffer.
        :returns: The number of bytes ending at lf_index (inclusive) which
            make up the delimiter, or 0 if the line feed does not terminate
            a line.
        """
        preceded_by_cr = lf_index > 0 and buffer[lf_index - 1] == CR
        if preceded_by_cr:
            return 2
        if self == Delimiter.NEWLINE:
            return 1
        return 0
