"""
termkeys - raw ANSI terminal input and output, without curses.

Emit cursor and color control codes, decode raw key input (including the
escape sequences of function and navigation keys), query the cursor
position and screen size, and switch the tty between raw and sane mode.
"""

from .keys import ESC, DEL, Key, Literal, Special, UNKNOWN, Color, keyname  # noqa
from .source import ByteSource, ReaderBusyError  # noqa
from .input_keys import KeyDecoder, RawKeyDecoder, SEQUENCES  # noqa
from .output import Output  # noqa
from .cursor import get_cursor_position, get_screen_size  # noqa
from .mode import ModeSession  # noqa
from .terminal import Terminal  # noqa
from ._cli import cli  # noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))
