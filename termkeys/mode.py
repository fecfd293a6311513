"""
Poor man's tty mode management, based on the stty utility (so Unix only).
"""

import os
import logging
import subprocess


logger = logging.getLogger("termkeys")


def default_stty():
    """The stty command to use: $TERMKEYS_STTY, or "stty" found via $PATH."""
    return os.environ.get("TERMKEYS_STTY") or "stty"


class ModeSession:
    """Save, set and restore the terminal mode by running stty.

    Each operation returns the exit status of stty. Nothing is checked or
    retried. A mode obtained with ``save_mode()`` is an opaque token that
    is passed back to stty as-is.

    The stty commands act on the tty given as ``stdin`` (a fd or a file),
    or on the stdin of this process if it is None.

    Used as a context manager, the current mode is saved and raw mode is
    set on enter, and the saved mode is restored on exit.
    """

    def __init__(self, stty=None, stdin=None):
        self.stty = stty or default_stty()
        self.stdin = stdin
        self._entered = False
        self._saved_mode = None

    def __repr__(self):
        return f"<ModeSession {self.stty!r}>"

    def __enter__(self):
        if self._entered:
            raise RuntimeError("Can only enter the mode session once.")
        self._entered = True
        self._saved_mode = self.save_mode()
        self.set_raw()
        return self

    def __exit__(self, *args):
        self._entered = False
        if self._saved_mode is not None:
            self.restore_mode(self._saved_mode)
            self._saved_mode = None
        else:
            self.set_sane()

    def _run(self, *args, **kwargs):
        cmd = [self.stty, *args]
        status = subprocess.run(cmd, stdin=self.stdin, **kwargs).returncode
        if status:
            logger.warning(f"{' '.join(cmd)} exited with status {status}")
        return status

    def set_raw(self):
        """Set the terminal in raw mode: no echo, no line buffering."""
        return self._run("raw", "-echo", stderr=subprocess.DEVNULL)

    def set_sane(self):
        """Set the terminal in a default, "sane" mode."""
        return self._run("sane")

    def save_mode(self):
        """Get the current mode as a string, or None if stty fails."""
        p = subprocess.run(
            [self.stty, "-g"], stdin=self.stdin, stdout=subprocess.PIPE
        )
        if p.returncode:
            logger.warning(f"{self.stty} -g exited with status {p.returncode}")
            return None
        return p.stdout.decode().rstrip("\r\n")

    def restore_mode(self, mode):
        """Restore a mode obtained with ``save_mode()``."""
        return self._run(mode)
