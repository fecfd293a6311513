"""
Decoding of raw terminal input into key events.
"""

import logging
from types import MappingProxyType

from .keys import ESC, Key, Literal, Special, UNKNOWN
from .source import ByteSource


logger = logging.getLogger("termkeys")


# Special chars for parsing escape sequences
LETO, LBR, SEMI, TIL = 0x4F, 0x5B, 0x3B, 0x7E  # O [ ; ~


def is_digit_or_semicolon(c):
    return 0x30 <= c <= 0x39 or c == SEMI


# %% Decoder


class KeyDecoder:
    """A lazy decoder that turns terminal input into key events.

    Each call to ``read_key()`` (or ``next(decoder)``) blocks until exactly
    one event can be produced. Escape sequences for function and navigation
    keys become a ``Special``, everything else is a ``Literal``. Bytes that
    start a sequence but do not complete one are replayed as literals, so
    every byte read is accounted for exactly once.

    Nothing is read beyond what is needed to resolve the current event.
    When the source is closed, ``EOFError`` is raised and the decoder is
    exhausted; bytes of an incomplete sequence at that point are lost.
    """

    def __init__(self, source):
        if not isinstance(source, ByteSource):
            source = ByteSource(source)
        self._source = source
        self._events = self._decode(source.read_byte)

    def __iter__(self):
        return self

    def __next__(self):
        with self._source.claim():
            return next(self._events)

    def read_key(self):
        """Block until the next key event is available, and return it."""
        return next(self)

    @property
    def source(self):
        return self._source

    def _decode(self, read):
        table = SEQUENCES
        while True:
            c = read()
            if c != ESC:
                yield Literal(c)
                continue

            c1 = read()
            if c1 == ESC:
                # An escape press, possibly followed by a sequence: the
                # second ESC is the start of that sequence.
                yield Literal(ESC)
                c1 = read()
            if c1 != LBR and c1 != LETO:
                yield Literal(c)
                yield Literal(c1)
                continue

            c2 = read()
            buffered = bytearray((c1, c2))
            if c2 == LBR:
                # esc [ [ x (F1-F5 on the linux console)
                buffered.append(read())
            key = table.get(buffered.decode("latin-1"))
            if key is not None:
                yield Special(key)
                continue
            if not is_digit_or_semicolon(c2):
                yield from self._replay(buffered)
                continue

            # A numbered sequence, e.g. esc [ 1 5 ~
            while True:
                ci = read()
                buffered.append(ci)
                if ci == TIL:
                    key = table.get(buffered.decode("latin-1"))
                    if key is not None:
                        yield Special(key)
                    else:
                        logger.debug(f"unknown key sequence: ESC {bytes(buffered)!r}")
                        yield UNKNOWN
                    break
                elif not is_digit_or_semicolon(ci):
                    yield from self._replay(buffered)
                    break

    def _replay(self, buffered):
        logger.debug(f"not a key sequence: ESC {bytes(buffered)!r}")
        yield Literal(ESC)
        for c in buffered:
            yield Literal(c)


class RawKeyDecoder(KeyDecoder):
    """A decoder that does not interpret escape sequences.

    Every byte becomes a ``Literal``. Useful to inspect or pass on raw
    escape sequences.
    """

    def _decode(self, read):
        while True:
            yield Literal(read())


# %% The sequence table

# (suffix after ESC, key, terminal). The order matters: when two entries
# have the same suffix, the last one wins.
SEQUENCE_ENTRIES = [
    ("[A", Key.KUP, ""),
    ("[B", Key.KDOWN, ""),
    ("[C", Key.KRIGHT, ""),
    ("[D", Key.KLEFT, ""),
    ("[2~", Key.KINS, ""),
    ("[3~", Key.KDEL, ""),
    ("[5~", Key.KPGUP, ""),
    ("[6~", Key.KPGDN, ""),
    ("[7~", Key.KHOME, "rxvt"),
    ("[8~", Key.KEND, "rxvt"),
    ("[1~", Key.KHOME, "linux"),
    ("[4~", Key.KEND, "linux"),
    ("[11~", Key.KF1, ""),
    ("[12~", Key.KF2, ""),
    ("[13~", Key.KF3, ""),
    ("[14~", Key.KF4, ""),
    ("[15~", Key.KF5, ""),
    ("[17~", Key.KF6, ""),
    ("[18~", Key.KF7, ""),
    ("[19~", Key.KF8, ""),
    ("[20~", Key.KF9, ""),
    ("[21~", Key.KF10, ""),
    ("[23~", Key.KF11, ""),
    ("[24~", Key.KF12, ""),
    ("OP", Key.KF1, "xterm"),
    ("OQ", Key.KF2, "xterm"),
    ("OR", Key.KF3, "xterm"),
    ("OS", Key.KF4, "xterm"),
    ("[H", Key.KHOME, "xterm"),
    ("[F", Key.KEND, "xterm"),
    ("[[A", Key.KF1, "linux"),
    ("[[B", Key.KF2, "linux"),
    ("[[C", Key.KF3, "linux"),
    ("[[D", Key.KF4, "linux"),
    ("[[E", Key.KF5, "linux"),
    ("OH", Key.KHOME, "vte"),
    ("OF", Key.KEND, "vte"),
    # Application cursor mode
    ("OA", Key.KUP, "xterm"),
    ("OB", Key.KDOWN, "xterm"),
    ("OC", Key.KRIGHT, "xterm"),
    ("OD", Key.KLEFT, "xterm"),
]


def build_sequence_table(entries):
    """Build a read-only mapping from sequence suffix to key.

    Later entries override earlier ones. Such collisions are logged, so
    a vendor entry that shadows another one does not go unnoticed.
    """
    table = {}
    origin = {}
    for suffix, key, vendor in entries:
        if suffix in table and table[suffix] != key:
            logger.warning(
                f"key sequence ESC {suffix!r}: {vendor or 'default'} {key.name} "
                f"overrides {origin[suffix] or 'default'} {table[suffix].name}"
            )
        table[suffix] = key
        origin[suffix] = vendor
    return MappingProxyType(table)


SEQUENCES = build_sequence_table(SEQUENCE_ENTRIES)
