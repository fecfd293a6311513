"""
Querying the cursor position and the screen size.

Both functions write a request and then read the reply directly from the
byte source, bypassing any key decoder. They must not be used while a
decoder is pulling from the same source (the source's single-reader
guard raises ``ReaderBusyError`` if they are).
"""

import re
import logging

from .keys import ESC


logger = logging.getLogger("termkeys")

# Max number of bytes read after "ESC [" (the "R" included)
MAX_REPLY_BYTES = 8

_reply_re = re.compile(r"(\d+);(\d+)")


def get_cursor_position(output, source):
    """Get the current cursor position as a (line, column) tuple.

    The terminal replies with ``ESC [ <line> ; <col> R``. Returns None if
    the reply does not have that form.
    """
    with source.claim():
        output.request_position()
        c = source.read_byte()
        if c != ESC:
            logger.debug(f"cursor position reply: expected ESC, got {c:#04x}")
            return None
        c = source.read_byte()
        if c != ord("["):
            logger.debug(f"cursor position reply: expected '[', got {c:#04x}")
            return None
        reply = bytearray()
        for _ in range(MAX_REPLY_BYTES):
            c = source.read_byte()
            if c == ord("R"):
                break
            reply.append(c)
        else:
            logger.debug(f"cursor position reply too long: {bytes(reply)!r}")
            return None

    m = _reply_re.search(reply.decode("latin-1"))
    if not m:
        logger.debug(f"invalid cursor position reply: {bytes(reply)!r}")
        return None
    return int(m.group(1)), int(m.group(2))


def get_screen_size(output, source):
    """Get the screen size as a (lines, columns) tuple, or None.

    Done by moving the cursor far beyond the bottom-right corner and
    asking where it ended up. The cursor position is restored afterwards.
    """
    output.save()
    try:
        output.down(999)
        output.right(999)
        return get_cursor_position(output, source)
    finally:
        output.restore()
        output.flush()
