"""
Writing ANSI control sequences to the terminal.
"""

import sys


CSI = "\x1b["


class Output:
    """Writes cursor, clear and color control codes to a text stream.

    Nothing is flushed except for ``request_position()``, whose reply the
    caller is going to wait for. Call ``flush()`` when a frame is done.
    """

    def __init__(self, file=None):
        self._file = file or sys.__stdout__

    @property
    def file(self):
        return self._file

    def write(self, text):
        self._file.write(text)

    def flush(self):
        self._file.flush()

    def clear(self):
        """Clear the screen."""
        self.write(CSI + "2J")

    def clear_eol(self):
        """Clear to the end of the line."""
        self.write(CSI + "K")

    def goto(self, line, col):
        """Move the cursor to the given line and column (1-based)."""
        self.write(f"{CSI}{line};{col}H")

    def up(self, n=1):
        self.write(f"{CSI}{n}A")

    def down(self, n=1):
        self.write(f"{CSI}{n}B")

    def right(self, n=1):
        self.write(f"{CSI}{n}C")

    def left(self, n=1):
        self.write(f"{CSI}{n}D")

    def color(self, f, b=None, m=None):
        """Set the foreground color, and optionally background and modifier.

        See ``termkeys.Color`` for values. Trailing parameters that are
        None are left out.
        """
        params = [f, b, m]
        while len(params) > 1 and params[-1] is None:
            params.pop()
        if None in params:
            raise ValueError("color(): only trailing parameters can be omitted.")
        self.write(CSI + ";".join(str(int(p)) for p in params) + "m")

    def hide(self):
        """Hide the cursor."""
        self.write(CSI + "?25l")

    def show(self):
        """Show the cursor."""
        self.write(CSI + "?25h")

    def save(self):
        """Save the cursor position."""
        self.write(CSI + "s")

    def restore(self):
        """Restore the cursor position saved with ``save()``."""
        self.write(CSI + "u")

    def reset(self):
        """Reset the terminal (colors, cursor position, screen)."""
        self.write("\x1bc")

    def request_position(self):
        """Ask the terminal to report the cursor position (and flush)."""
        self.write(CSI + "6n")
        self.flush()
