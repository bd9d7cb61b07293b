"""Top-level packet encoder.

This module provides the encode_packet() function that turns a Message or a
Bundle into the bytes handed to a transport.
"""

from __future__ import annotations

from typing import Union

from ..exceptions import EncodeError
from ..models.bundle import Bundle
from ..models.message import Message


def encode_packet(content: Union[Message, Bundle]) -> bytes:
    """Encode a message or bundle to its OSC wire format.

    Args:
        content: Message or Bundle to encode

    Returns:
        Encoded packet bytes, ready for a datagram or stream transport

    Raises:
        EncodeError: If content is neither a Message nor a Bundle
        InvalidValueError: If a value cannot be represented on the wire

    Examples:
        ```python
        from osccodec import Message, encode_packet

        data = encode_packet(Message(address="/synth/1/freq").push(440.0))
        sock.sendto(data, ("127.0.0.1", 57120))
        ```
    """
    if not isinstance(content, (Message, Bundle)):
        raise EncodeError(f"Expected Message or Bundle, got {type(content).__name__}")

    packet = content.to_packet()

    if len(packet) != content.space():
        raise EncodeError(
            f"Encoded size ({len(packet)} bytes) disagrees with computed size "
            f"({content.space()} bytes)"
        )

    return packet.to_bytes()
