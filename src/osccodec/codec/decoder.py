"""Top-level packet decoder.

This module provides the decode_packet() function that inspects a received
packet and hands it to the message or bundle parser.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..config import DEFAULT_CONFIG, DecodeConfig
from ..exceptions import InvalidMessageError
from ..models.bundle import Bundle
from ..models.message import Message
from ..packet import Packet

_logger = logging.getLogger(__name__)


def decode_packet(
    data: Union[bytes, bytearray, memoryview, Packet],
    config: Optional[DecodeConfig] = None,
) -> Union[Message, Bundle]:
    """Decode a received OSC packet.

    A packet starting with the ``#bundle`` marker is decoded as a Bundle, one
    starting with ``/`` as a Message.

    Args:
        data: Raw packet bytes, or a Packet (which is consumed)
        config: Decoding limits (defaults to DEFAULT_CONFIG)

    Returns:
        Decoded Message or Bundle

    Raises:
        InvalidMessageError: If the packet is neither a message nor a bundle,
            or a message is followed by trailing bytes
        InvalidBundleError: If bundle framing is violated
        TruncatedError: If the packet ends mid-frame
        InvalidTagError: If a type tag is unknown
        InvalidValueError: If a string or blob is malformed

    Examples:
        ```python
        from osccodec import Bundle, decode_packet

        data, addr = sock.recvfrom(65536)
        content = decode_packet(data)
        if isinstance(content, Bundle):
            for msg in content.messages():
                handle(msg)
        else:
            handle(content)
        ```
    """
    config = config or DEFAULT_CONFIG
    packet = data if isinstance(data, Packet) else Packet(data)

    if Bundle.maybe(packet):
        _logger.debug("Decoding %d-byte packet as bundle", len(packet))
        return Bundle.parse(packet, config)

    if Message.maybe(packet):
        _logger.debug("Decoding %d-byte packet as message", len(packet))
        message = Message.parse(packet)
        if packet.remaining() and not config.allow_trailing_bytes:
            raise InvalidMessageError(
                f"{packet.remaining()} trailing bytes after message {message.address!r}"
            )
        return message

    raise InvalidMessageError(f"Packet is neither a message nor a bundle: {packet.peek(8)!r}")
