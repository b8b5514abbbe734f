import io


class ShortReadStream(io.RawIOBase):
    """
    A seekable stream over contents which returns at most max_read
    bytes per read, regardless of the size of the given buffer.
    """

    def __init__(self, contents, max_read=1):
        super().__init__()
        self._buffer = io.BytesIO(contents)
        self.max_read = max_read
        self.num_reads = 0

    def readable(self):
        return True

    def seekable(self):
        return True

    def readinto(self, buffer):
        self.num_reads += 1
        view = memoryview(buffer).cast("B")
        data = self._buffer.read(min(len(view), self.max_read))
        view[: len(data)] = data
        return len(data)

    def seek(self, offset, whence=io.SEEK_SET):
        return self._buffer.seek(offset, whence)

    def tell(self):
        return self._buffer.tell()


class FailingSeekStream(io.BytesIO):
    """
    A BytesIO where seeking raises OSError while fail_seek is set.
    """

    fail_seek = False

    def seek(self, offset, whence=io.SEEK_SET):
        if self.fail_seek:
            raise OSError("seek failed")
        return super().seek(offset, whence)
