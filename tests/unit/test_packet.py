"""Unit tests for the Packet byte buffer."""

from __future__ import annotations

import pytest

from osccodec import InvalidValueError, Packet, TruncatedError


class TestAppend:
    """Test the encode-side discipline."""

    def test_empty_packet(self) -> None:
        """Test a fresh packet has nothing to parse."""
        packet = Packet()
        assert packet.remaining() == 0
        assert len(packet) == 0
        assert packet.to_bytes() == b""

    def test_append_grows(self) -> None:
        """Test appending extends the packet."""
        packet = Packet()
        packet.append(b"/foo")
        packet.append(bytearray(b"\x00\x00\x00\x00"))

        assert packet.remaining() == 8
        assert bytes(packet) == b"/foo\x00\x00\x00\x00"

    def test_initial_data_is_copied(self) -> None:
        """Test the packet does not alias its initial data."""
        source = bytearray(b"abcd")
        packet = Packet(source)
        source[0] = ord("z")

        assert packet.to_bytes() == b"abcd"


class TestConsume:
    """Test the decode-side discipline."""

    def test_take_front(self) -> None:
        """Test consuming from the front shrinks the packet."""
        packet = Packet(b"abcdefgh")

        assert packet.take_front(3) == b"abc"
        assert packet.remaining() == 5
        assert packet.take_front(5) == b"defgh"
        assert packet.remaining() == 0

    def test_take_front_after_compaction(self) -> None:
        """Test reads stay correct once the consumed prefix is released."""
        packet = Packet(b"abcdefgh")
        packet.take_front(5)
        packet.append(b"ij")

        assert packet.find(ord("i")) == 3
        assert packet.take_front(5) == b"fghij"

    def test_take_zero(self) -> None:
        """Test taking zero bytes is a no-op."""
        packet = Packet(b"ab")
        assert packet.take_front(0) == b""
        assert packet.remaining() == 2

    def test_take_too_many(self) -> None:
        """Test error when fewer bytes remain than requested."""
        packet = Packet(b"abc")
        with pytest.raises(TruncatedError, match="need 4, have 3"):
            packet.take_front(4)

    def test_take_negative(self) -> None:
        """Test error on a negative byte count."""
        with pytest.raises(InvalidValueError):
            Packet(b"abc").take_front(-1)

    def test_peek_does_not_consume(self) -> None:
        """Test peek leaves the packet untouched."""
        packet = Packet(b"/foo")
        assert packet.peek(1) == b"/"
        assert packet.peek(10) == b"/foo"
        assert packet.remaining() == 4

    def test_find(self) -> None:
        """Test find is relative to the read position."""
        packet = Packet(b"ab\x00cd\x00")
        assert packet.find(0) == 2
        packet.take_front(3)
        assert packet.find(0) == 2
        assert packet.find(ord("z")) == -1


class TestEquality:
    """Test comparisons."""

    def test_equal_to_bytes(self) -> None:
        """Test a packet compares equal to its unread bytes."""
        packet = Packet(b"xyz")
        packet.take_front(1)
        assert packet == b"yz"
        assert packet == Packet(b"yz")
