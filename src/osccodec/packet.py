"""Byte buffer used as both encode target and decode cursor.

Encoding appends to the end of the buffer. Decoding consumes from the front,
so ``remaining()`` always reflects the bytes that are still unparsed.
"""

from __future__ import annotations

from .exceptions import InvalidValueError, TruncatedError


class Packet:
    """Append-only / consume-from-front byte sequence.

    Consumption moves a read offset instead of reallocating the buffer; the
    consumed prefix is released once it grows past half the storage.

    Example:
        >>> pkt = Packet()
        >>> pkt.append(b"/foo\\x00\\x00\\x00\\x00")
        >>> pkt.remaining()
        8
        >>> pkt.take_front(4)
        b'/foo'
        >>> pkt.remaining()
        4
    """

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        """Initialize a packet holding a copy of ``data``.

        Args:
            data: Initial contents (received bytes on the decode path)
        """
        self._data = bytearray(data)
        self._offset = 0

    def append(self, data: bytes | bytearray | memoryview) -> None:
        """Copy bytes onto the end of the packet.

        Args:
            data: Bytes to append
        """
        self._data.extend(data)

    def remaining(self) -> int:
        """Return the number of unparsed bytes."""
        return len(self._data) - self._offset

    def peek(self, n: int) -> bytes:
        """Return up to ``n`` bytes from the front without consuming them."""
        return bytes(self._data[self._offset : self._offset + n])

    def find(self, byte: int) -> int:
        """Return the position of ``byte`` relative to the front, or -1."""
        index = self._data.find(byte, self._offset)
        return index if index < 0 else index - self._offset

    def take_front(self, n: int) -> bytes:
        """Remove and return the first ``n`` bytes.

        Args:
            n: Number of bytes to consume

        Returns:
            The consumed bytes

        Raises:
            InvalidValueError: If n is negative
            TruncatedError: If fewer than n bytes remain
        """
        if n < 0:
            raise InvalidValueError(f"Cannot take a negative number of bytes: {n}")
        if n > self.remaining():
            raise TruncatedError(f"Not enough bytes: need {n}, have {self.remaining()}")

        start = self._offset
        self._offset += n
        chunk = bytes(self._data[start : self._offset])

        if self._offset * 2 > len(self._data):
            del self._data[: self._offset]
            self._offset = 0

        return chunk

    def to_bytes(self) -> bytes:
        """Return the unparsed bytes as an immutable copy."""
        return bytes(self._data[self._offset :])

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __len__(self) -> int:
        return self.remaining()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Packet):
            return self.to_bytes() == other.to_bytes()
        if isinstance(other, (bytes, bytearray)):
            return self.to_bytes() == bytes(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Packet({self.to_bytes()!r})"
