import io
import random

import pytest

from termkeys import ByteSource, ReaderBusyError
from termkeys.keys import ESC, Key, Literal, Special, UNKNOWN
from termkeys.input_keys import (
    KeyDecoder,
    RawKeyDecoder,
    SEQUENCES,
    SEQUENCE_ENTRIES,
    build_sequence_table,
)


def L(text):
    """Literal events for each char in the given text."""
    return [Literal(c) for c in text.encode("latin-1")]


def test_sequence_table():
    assert len(SEQUENCES) > 0
    for suffix, key in SEQUENCES.items():
        assert isinstance(suffix, str), f"{suffix!r} not a string"
        assert isinstance(key, Key), f"{suffix!r} value not a Key"
        assert key is not Key.UNKNOWN
        assert suffix[0] in "[O"

    # Read-only
    with pytest.raises(TypeError):
        SEQUENCES["[A"] = Key.KDOWN

    # No vendor overrides another in the reference table
    suffixes = [entry[0] for entry in SEQUENCE_ENTRIES]
    assert len(suffixes) == len(set(suffixes))


def test_sequence_table_precedence(caplog):
    entries = [
        ("[1~", Key.KHOME, "linux"),
        ("[1~", Key.KHOME, "tmux"),
        ("[4~", Key.KEND, "linux"),
        ("[4~", Key.KDEL, "other"),
    ]
    with caplog.at_level("WARNING", logger="termkeys"):
        table = build_sequence_table(entries)
    assert table["[1~"] == Key.KHOME
    assert table["[4~"] == Key.KDEL  # last wins
    # Only the collision with a different key is reported
    assert len(caplog.records) == 1
    assert "KDEL" in caplog.records[0].getMessage()


def test_plain_bytes():
    check_decoder(b"a", [Literal(0x61)])
    check_decoder(b"hello", L("hello"))
    check_decoder(b"\r\x03\x7f\x00\xff", L("\r\x03\x7f\x00\xff"))


def test_known_sequences():
    check_decoder(b"\x1b[A", [Special(Key.KUP)])
    check_decoder(b"\x1b[D", [Special(Key.KLEFT)])
    check_decoder(b"\x1bOP", [Special(Key.KF1)])
    check_decoder(b"\x1bOH", [Special(Key.KHOME)])
    check_decoder(b"\x1b[H", [Special(Key.KHOME)])
    check_decoder(b"\x1b[1~", [Special(Key.KHOME)])
    check_decoder(b"\x1b[7~", [Special(Key.KHOME)])
    check_decoder(b"\x1b[3~", [Special(Key.KDEL)])
    check_decoder(b"\x1b[24~", [Special(Key.KF12)])
    check_decoder(b"\x1b[[E", [Special(Key.KF5)])
    check_decoder(b"\x1bOA", [Special(Key.KUP)])


def test_sequence_consumes_exactly_its_bytes():
    bio = io.BytesIO(b"\x1b[Aabc")
    decoder = KeyDecoder(bio)
    assert decoder.read_key() == Special(Key.KUP)
    assert bio.tell() == 3

    bio = io.BytesIO(b"\x1b[[Aabc")
    decoder = KeyDecoder(bio)
    assert decoder.read_key() == Special(Key.KF1)
    assert bio.tell() == 4

    bio = io.BytesIO(b"\x1b[15~abc")
    decoder = KeyDecoder(bio)
    assert decoder.read_key() == Special(Key.KF5)
    assert bio.tell() == 5


def test_all_sequences():
    suffixes = list(SEQUENCES.keys())

    for sep in ["", " ", "a"]:
        compare_with_suffixes(suffixes, sep)
        compare_with_suffixes(reversed(suffixes), sep)

        for _ in range(200):
            random_suffixes = [random.choice(suffixes) for _ in range(50)]
            compare_with_suffixes(random_suffixes, sep)


def test_double_escape():
    check_decoder(b"\x1b\x1b[A", [Literal(ESC), Special(Key.KUP)])
    check_decoder(b"\x1b\x1bOQ", [Literal(ESC), Special(Key.KF2)])
    # esc esc, then something that does not start a sequence
    check_decoder(b"\x1b\x1bx", L("\x1b\x1bx"))
    # three escapes: the third is not a sequence prefix
    check_decoder(b"\x1b\x1b\x1b[A", L("\x1b\x1b\x1b") + [Literal(0x5B), Literal(0x41)])


def test_escape_followed_by_non_prefix():
    check_decoder(b"\x1bx", L("\x1bx"))
    check_decoder(b" \x1b ", L(" \x1b "))
    check_decoder(b"\x1b\r", L("\x1b\r"))


def test_prefix_followed_by_non_sequence():
    check_decoder(b"\x1b[x", L("\x1b[x"))
    check_decoder(b"\x1bOx", L("\x1bOx"))
    check_decoder(b"\x1b[Z", L("\x1b[Z"))
    # Linux console prefix with an unknown letter: the last byte is kept too
    check_decoder(b"\x1b[[Z", L("\x1b[[Z"))
    check_decoder(b"\x1b[[1", L("\x1b[[1"))


def test_unknown_numbered_sequence():
    bio = io.BytesIO(b"\x1b[99~")
    decoder = KeyDecoder(bio)
    assert decoder.read_key() == UNKNOWN
    assert bio.tell() == 5

    check_decoder(b"\x1b[1;5~x", [UNKNOWN, Literal(0x78)])
    check_decoder(b"\x1b[;~", [UNKNOWN])
    check_decoder(b"\x1bO5~", [UNKNOWN])


def test_invalid_numbered_sequence():
    check_decoder(b"\x1b[1x", L("\x1b[1x"))
    check_decoder(b"\x1b[15;2A", L("\x1b[15;2A"))
    # The trailing byte can itself be an escape, it is not re-interpreted
    check_decoder(b"\x1b[1\x1b[A", L("\x1b[1\x1b[A"))


def test_sequences_are_logged(caplog):
    with caplog.at_level("DEBUG", logger="termkeys"):
        check_decoder(b"\x1b[99~", [UNKNOWN])
        check_decoder(b"\x1b[1x", L("\x1b[1x"))
        check_decoder(b"\x1b[A", [Special(Key.KUP)])

    records = [r for r in caplog.records if "sequence" in r.getMessage()]
    assert all(r.levelname == "DEBUG" for r in records)
    assert [r.getMessage() for r in records] == [
        "unknown key sequence: ESC b'[99~'",
        "not a key sequence: ESC b'[1x'",
    ]


def test_no_byte_loss():
    alphabet = b"\x1b\x1b\x1b[[O1259;~~ABHPxa"
    for _ in range(2000):
        data = bytes(random.choice(alphabet) for _ in range(random.randint(0, 30)))
        # Make sure any sequence at the end is resolved
        check_accounting(data + b"xxx")


def test_source_closed():
    decoder = KeyDecoder(io.BytesIO(b"a\x1b["))
    assert decoder.read_key() == Literal(0x61)
    with pytest.raises(EOFError):
        decoder.read_key()
    # The decoder is exhausted now
    with pytest.raises(StopIteration):
        next(decoder)


def test_decoder_is_lazy():
    reads = []

    class Recorder(io.BytesIO):
        def read(self, n=-1):
            bb = super().read(n)
            reads.append(bb)
            return bb

    decoder = KeyDecoder(Recorder(b"ab\x1b[Acd"))
    assert decoder.read_key() == Literal(0x61)
    assert len(reads) == 1
    assert decoder.read_key() == Literal(0x62)
    assert decoder.read_key() == Special(Key.KUP)
    assert len(reads) == 5


def test_raw_decoder():
    data = b"a\x1b[A\x1b[99~\x1b"
    decoder = RawKeyDecoder(io.BytesIO(data))
    assert [decoder.read_key() for _ in range(len(data))] == L(data.decode("latin-1"))
    with pytest.raises(EOFError):
        decoder.read_key()


def test_single_reader():
    source = ByteSource(io.BytesIO(b"ab"))
    decoder1 = KeyDecoder(source)
    decoder2 = RawKeyDecoder(source)

    with source.claim():
        assert source.claimed
        with pytest.raises(ReaderBusyError):
            decoder1.read_key()
    assert not source.claimed

    # Readers that take turns are fine
    assert decoder1.read_key() == Literal(0x61)
    assert decoder2.read_key() == Literal(0x62)


# %% Helpers


def decode_all(data):
    decoder = KeyDecoder(io.BytesIO(data))
    result = []
    while True:
        try:
            result.append(decoder.read_key())
        except EOFError:
            break
    return result


def compare_with_suffixes(suffixes, sep=""):

    data = b""
    expected = []

    for suffix in suffixes:
        data += b"\x1b" + suffix.encode()
        expected.append(Special(SEQUENCES[suffix]))
        data += sep.encode()
        expected.extend(L(sep))

    check_decoder(data, expected)


def check_decoder(data, expected):
    result = decode_all(data)

    info = "decoded result differs from expectation:\n\n"
    info += "input: " + repr(data) + "\n\n"
    if result != expected:
        info += f"  {'RESULT':>16}  EXPECTED\n\n"
        for v1, v2 in zip(result, expected):
            info += "X "[v1 == v2] + f" {v1!r:>16}  {v2!r}\n"
        for v1 in result[len(expected):]:
            info += f"+ {v1!r:>16}  \n"
        for v2 in expected[len(result):]:
            info += f"- {'':>16}  {v2!r}\n"
    assert result == expected, info


def check_accounting(data):
    """Check that every byte is either a literal or part of a sequence, in order."""
    bio = io.BytesIO(data)
    decoder = KeyDecoder(bio)
    accounted = 0
    while True:
        try:
            event = decoder.read_key()
        except EOFError:
            break
        if isinstance(event, Literal):
            assert data[accounted] == event.byte, repr(data)
            accounted += 1
        else:
            # All bytes that were read but not yet accounted for
            seq = data[accounted : bio.tell()]
            assert seq[0] == ESC, repr(data)
            suffix = seq[1:].decode("latin-1")
            if event == UNKNOWN:
                assert suffix.endswith("~") and suffix not in SEQUENCES, repr(data)
            else:
                assert SEQUENCES[suffix] == event.key, repr(data)
            accounted = bio.tell()
    assert accounted == len(data), repr(data)


if __name__ == "__main__":
    test_sequence_table()
    test_plain_bytes()
    test_known_sequences()
    test_sequence_consumes_exactly_its_bytes()
    test_all_sequences()
    test_double_escape()
    test_escape_followed_by_non_prefix()
    test_prefix_followed_by_non_sequence()
    test_unknown_numbered_sequence()
    test_invalid_numbered_sequence()
    test_no_byte_loss()
    test_source_closed()
    test_decoder_is_lazy()
    test_raw_decoder()
    test_single_reader()
