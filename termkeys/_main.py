import sys
import logging

from .keys import Literal
from .terminal import Terminal


logger = logging.getLogger("termkeys")

QUIT_KEYS = (Literal(ord("q")), Literal(0x03))  # q and ctrl-c


def main(raw=False):
    """Run the key inspector: show the name of each key that is pressed."""

    terminal = Terminal()

    with terminal:
        write = terminal.write
        write("Press keys to see how they decode, q or ctrl-c to quit.\r\n")
        terminal.flush()

        decoder = terminal.rawinput() if raw else terminal.input()
        try:
            for event in decoder:
                if event in QUIT_KEYS:
                    break
                try:
                    describe(terminal, event)
                except Exception as err:
                    logger.error(f"Error in handling key {event!r}: {err}")
        except EOFError:
            pass
        finally:
            terminal.color(0)
            terminal.flush()


def describe(terminal, event):
    if isinstance(event, Literal):
        terminal.write(f"{event.byte:#04x}  ")
    else:
        terminal.color(1)
        terminal.write(f"{event.key:#06x}  ")
        terminal.color(0)
    terminal.write(f"{event.name}\r\n")
    terminal.flush()


def print_size():
    """Print the screen size, as reported by the terminal."""
    terminal = Terminal()
    with terminal:
        size = terminal.get_size()
    if size is None:
        sys.stderr.write("Could not get the screen size from the terminal.\n")
        return 1
    print(f"{size[0]} lines, {size[1]} columns")
    return 0
