"""
The raw byte source that the decoders and the cursor protocol read from.
"""

import os
import sys
import logging
import threading
from contextlib import contextmanager


logger = logging.getLogger("termkeys")


class ReaderBusyError(RuntimeError):
    """Raised when a second reader tries to claim a source that is being read."""


class ByteSource:
    """A blocking, unbuffered, one-byte-at-a-time reader.

    The file can be an int file descriptor (read with ``os.read()``), a
    binary file object with a ``read()`` method, or None to use the fd of
    ``sys.__stdin__``. The terminal is assumed to be in raw mode already.

    The key decoder and the cursor-position query both read from the same
    terminal input, and neither can tell which bytes are meant for the
    other. Only one of them may read at a time. This is up to the caller,
    but ``claim()`` turns a violation into a ``ReaderBusyError`` instead
    of silently corrupting both streams.
    """

    def __init__(self, file=None):
        if file is None:
            file = sys.__stdin__.fileno()
        self._file = file
        self._lock = threading.Lock()
        if isinstance(file, int):
            self._read = lambda: os.read(file, 1)
        else:
            self._read = lambda: file.read(1)

    def __repr__(self):
        return f"<ByteSource {self._file!r}>"

    @contextmanager
    def claim(self):
        """Context manager to become the sole reader of this source."""
        if not self._lock.acquire(blocking=False):
            raise ReaderBusyError(f"{self!r} is already being read from.")
        try:
            yield self
        finally:
            self._lock.release()

    @property
    def claimed(self):
        return self._lock.locked()

    def read_byte(self):
        """Read one byte and return it as an int. Blocks until it arrives."""
        bb = self._read()
        if not bb:
            logger.info("terminal input closed")
            raise EOFError("Terminal input is closed.")
        return bb[0]
