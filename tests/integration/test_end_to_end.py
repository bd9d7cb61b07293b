"""End-to-end integration tests."""

from __future__ import annotations

import struct
from datetime import datetime, timedelta, timezone

import pytest

from osccodec import (
    BUNDLE_MARKER,
    IMMEDIATE,
    Blob,
    Bundle,
    Char,
    Double,
    Infinitum,
    Int64,
    InvalidBundleError,
    InvalidValueError,
    Message,
    OscTime,
    Packet,
    TimeTag,
    TruncatedError,
    decode_packet,
    encode_packet,
    encoded_size,
    value_sizes,
)


def test_oscillator_frequency_message() -> None:
    """Test a single float message byte for byte."""
    msg = Message(address="/oscillator/4/frequency").push(440.0)

    assert encode_packet(msg) == (
        b"/oscillator/4/frequency\x00"
        b",f\x00\x00"
        b"\x43\xdc\x00\x00"
    )


def test_multiple_arguments_message() -> None:
    """Test a message with five mixed arguments byte for byte."""
    msg = Message(address="/foo").push(1000).push(-1).push("hello").push(1.234).push(5.678)

    expected = (
        b"/foo\x00\x00\x00\x00"
        b",iisff\x00\x00"
        b"\x00\x00\x03\xe8"
        b"\xff\xff\xff\xff"
        b"hello\x00\x00\x00"
        + struct.pack(">f", 1.234)
        + struct.pack(">f", 5.678)
    )
    assert encode_packet(msg) == expected
    assert encoded_size(msg) == len(expected)
    assert value_sizes(msg) == {"0:i": 4, "1:i": 4, "2:s": 8, "3:f": 4, "4:f": 4}


def test_scheduled_bundle_round_trip() -> None:
    """Test a scheduled bundle of mixed messages and a nested bundle."""
    start = datetime(2025, 3, 14, 15, 9, 26, 535897, tzinfo=timezone.utc)

    note_on = Message(address="/synth/1/note").push(60).push(0.8)
    sample = Message(
        address="/sampler/load",
        values=[Blob(value=b"\x00\x01\x02\x03\x04"), Char(value="k"), Int64(value=-(1 << 40))],
    )
    cue = Message(
        address="/cue",
        values=[TimeTag(value=start + timedelta(seconds=2)), Double(value=0.1), Infinitum()],
    )

    later = Bundle(time=start + timedelta(seconds=1)).push(cue)
    bundle = Bundle(time=start).push(note_on).push(sample).push(later)

    data = encode_packet(bundle)
    decoded = decode_packet(data)

    assert isinstance(decoded, Bundle)
    assert decoded == bundle
    assert decoded.time.when == start
    assert [m.address for m in decoded.messages()] == ["/synth/1/note", "/sampler/load", "/cue"]
    assert decoded.elements[2].to_bundle().to_packet() == later.to_packet()


def test_immediate_bundle_bytes() -> None:
    """Test an immediate bundle starts with the marker and raw time tag 1."""
    data = encode_packet(Bundle(time=OscTime.immediately()).push(Message(address="/go")))

    assert data[:8] == BUNDLE_MARKER
    assert data[8:16] == b"\x00\x00\x00\x00\x00\x00\x00\x01"
    assert data[16:20] == b"\x00\x00\x00\x08"


def test_receiver_rejects_corrupted_bundle() -> None:
    """Test a receiver fails cleanly on corrupted input."""
    data = bytearray(encode_packet(Bundle(time=IMMEDIATE).push(Message(address="/a").push(1))))

    with pytest.raises(TruncatedError):
        decode_packet(bytes(data[:-2]))

    data[3] = ord("X")
    with pytest.raises(InvalidBundleError):
        Bundle.parse(Packet(bytes(data)))


def test_string_with_nul_never_truncated() -> None:
    """Test a NUL inside a string fails instead of being cut."""
    with pytest.raises(InvalidValueError):
        Message(address="/a").push("bad\x00string")
