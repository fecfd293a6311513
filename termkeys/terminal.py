import sys

from .source import ByteSource
from .output import Output
from .mode import ModeSession
from .input_keys import KeyDecoder, RawKeyDecoder
from .cursor import get_cursor_position, get_screen_size


class Terminal:
    """A simple ANSI terminal: control codes out, key events in.

    Combines the byte source, the escape-code output and the stty mode
    session for the given streams (stdin and stdout by default). Using it
    as a context manager puts the terminal in raw mode, and restores the
    previous mode on exit.

    The terminal input has a single reader at a time: either a decoder
    returned by ``input()``/``rawinput()``, or one of the cursor queries.
    """

    def __init__(self, stdin=None, stdout=None, stty=None):

        stdin = stdin or sys.__stdin__
        stdout = stdout or sys.__stdout__

        # Warn if it looks like this is not a terminal
        if not stdin.isatty():
            sys.stderr.write(f"Warning: Input is not a tty: {stdin}\n")
            sys.stderr.flush()

        self.source = ByteSource(stdin.fileno())
        self.output = Output(stdout)
        self.mode = ModeSession(stty, stdin=stdin.fileno())

    def __enter__(self):
        self.mode.__enter__()
        return self

    def __exit__(self, *args):
        self.mode.__exit__(*args)

    def __getattr__(self, name):
        # Delegate the escape-code methods (clear, goto, color, ...)
        if name in _OUTPUT_METHODS:
            return getattr(self.output, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def input(self):
        """Get a decoder that produces key events, escape sequences parsed."""
        return KeyDecoder(self.source)

    def rawinput(self):
        """Get a decoder that produces each byte as a literal."""
        return RawKeyDecoder(self.source)

    def get_cursor_position(self):
        """Get the (line, column) of the cursor, or None."""
        return get_cursor_position(self.output, self.source)

    def get_size(self):
        """Get the (lines, columns) of the screen, or None."""
        return get_screen_size(self.output, self.source)

    def set_raw_mode(self):
        return self.mode.set_raw()

    def set_sane_mode(self):
        return self.mode.set_sane()

    def save_mode(self):
        return self.mode.save_mode()

    def restore_mode(self, mode):
        return self.mode.restore_mode(mode)


_OUTPUT_METHODS = {
    "write",
    "flush",
    "clear",
    "clear_eol",
    "goto",
    "up",
    "down",
    "right",
    "left",
    "color",
    "hide",
    "show",
    "save",
    "restore",
    "reset",
}
