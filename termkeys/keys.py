"""
Key codes and the key events produced by the decoders.

A decoder yields either a ``Literal`` (a plain byte, to be interpreted by
the caller) or a ``Special`` (a symbolic key such as an arrow or a function
key). The two are different types, so a literal byte can never be mistaken
for a key code, even though the codes are plain ints under the hood.
"""

import enum
from collections import namedtuple


ESC = 0x1B
DEL = 0x7F


class Key(enum.IntEnum):
    """Symbolic codes for non-literal keys. All values are above the byte range."""

    KF1 = 0xFFFF
    KF2 = 0xFFFE
    KF3 = 0xFFFD
    KF4 = 0xFFFC
    KF5 = 0xFFFB
    KF6 = 0xFFFA
    KF7 = 0xFFF9
    KF8 = 0xFFF8
    KF9 = 0xFFF7
    KF10 = 0xFFF6
    KF11 = 0xFFF5
    KF12 = 0xFFF4
    KINS = 0xFFF3
    KDEL = 0xFFF2
    KHOME = 0xFFF1
    KEND = 0xFFF0
    KPGUP = 0xFFEF
    KPGDN = 0xFFEE
    KUP = 0xFFED
    KDOWN = 0xFFEC
    KLEFT = 0xFFEB
    KRIGHT = 0xFFEA
    # A well-formed numbered sequence that is not in the table
    UNKNOWN = 0x10000


class Literal(namedtuple("Literal", ["byte"])):
    """An ordinary input byte (0-255)."""

    __slots__ = ()

    def __new__(cls, byte):
        if not 0 <= byte <= 255:
            raise ValueError(f"Literal must be a byte (0-255), got {byte!r}")
        return super().__new__(cls, int(byte))

    def __repr__(self):
        return f"Literal({self.byte:#04x})"

    @property
    def name(self):
        return keyname(self)


class Special(namedtuple("Special", ["key"])):
    """A key identified by an escape sequence."""

    __slots__ = ()

    def __new__(cls, key):
        return super().__new__(cls, Key(key))

    def __repr__(self):
        return f"Special({self.key.name})"

    @property
    def name(self):
        return keyname(self)


UNKNOWN = Special(Key.UNKNOWN)


class Color(enum.IntEnum):
    """SGR parameters, for use with ``Output.color()``."""

    DEFAULT = 0
    # foreground colors
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    # background colors
    BG_BLACK = 40
    BG_RED = 41
    BG_GREEN = 42
    BG_YELLOW = 43
    BG_BLUE = 44
    BG_MAGENTA = 45
    BG_CYAN = 46
    BG_WHITE = 47
    # attributes
    RESET = 0
    NORMAL = 0
    BRIGHT = 1
    BOLD = 1
    REVERSE = 7


def keyname(key):
    """Get a printable name for a key event (or a plain int code).

    * function and navigation keys get their name in ``Key``, e.g. "kup";
    * ESC and DEL are "esc" and "del";
    * other control chars are represented as "^A";
    * any other byte is the character itself.
    """
    if isinstance(key, Special):
        return key.key.name.lower()
    if isinstance(key, Literal):
        key = key.byte
    if key == ESC:
        return "esc"
    elif key == DEL:
        return "del"
    elif key < 32:
        return "^" + chr(key + 64)
    elif key < 256:
        return chr(key)
    try:
        return Key(key).name.lower()
    except ValueError:
        return str(key)
