"""OSC bundle and bundle element models.

A bundle frame on the wire is::

    "#bundle\\0" <8-byte time tag> (<int32 size> <element bytes>)*

Each element is itself a message frame or a nested bundle frame.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import DEFAULT_CONFIG, DecodeConfig
from ..exceptions import InvalidBundleError
from ..packet import Packet
from .message import Message
from .timetag import OscTime
from .values import Int32, TimeTag

_logger = logging.getLogger(__name__)

BUNDLE_MARKER = b"#bundle\x00"

# marker + time tag
HEADER_SIZE = len(BUNDLE_MARKER) + 8

_SIZE_PREFIX = 4


class Element(BaseModel):
    """A bundle element: either a Message or a nested Bundle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content: Union[Message, Bundle]

    def is_message(self) -> bool:
        return isinstance(self.content, Message)

    def is_bundle(self) -> bool:
        return isinstance(self.content, Bundle)

    def to_message(self) -> Message:
        if not isinstance(self.content, Message):
            raise TypeError("Element holds a bundle, not a message")
        return self.content

    def to_bundle(self) -> Bundle:
        if not isinstance(self.content, Bundle):
            raise TypeError("Element holds a message, not a bundle")
        return self.content

    def space(self) -> int:
        """Encoded size of the wrapped frame, excluding its size prefix."""
        return self.content.space()

    def append_to(self, packet: Packet) -> None:
        self.content.append_to(packet)


def _as_element(item: Any) -> Element:
    if isinstance(item, Element):
        return item
    return Element(content=item)


class Bundle(BaseModel):
    """A time tag plus an ordered list of elements.

    The time tag defaults to the moment of construction. Bundles nest
    arbitrarily; decoding depth is bounded by ``DecodeConfig.max_bundle_depth``.

    Example:
        >>> inner = Bundle(time=OscTime.immediately()).push(Message(address="/b"))
        >>> outer = Bundle().push(Message(address="/a")).push(inner)
        >>> Bundle.parse(outer.to_packet()) == outer
        True
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    time: OscTime = Field(default_factory=OscTime.now)
    elements: list[Element] = Field(default_factory=list)

    @field_validator("elements", mode="before")
    @classmethod
    def _wrap_elements(cls, elements: Any) -> Any:
        if isinstance(elements, (list, tuple)):
            return [
                _as_element(e) if isinstance(e, (Element, Message, Bundle)) else e
                for e in elements
            ]
        return elements

    def push(self, item: Union[Message, Bundle, Element]) -> Bundle:
        """Append a message, bundle or element and return the bundle for chaining."""
        self.elements.append(_as_element(item))
        return self

    def messages(self) -> Iterator[Message]:
        """Yield every message in the bundle, depth first."""
        for element in self.elements:
            if element.is_message():
                yield element.to_message()
            else:
                yield from element.to_bundle().messages()

    def space(self) -> int:
        """Return the encoded size of the bundle in bytes."""
        return HEADER_SIZE + sum(_SIZE_PREFIX + e.space() for e in self.elements)

    def append_to(self, packet: Packet) -> None:
        """Append the full bundle frame to ``packet``."""
        packet.append(BUNDLE_MARKER)
        TimeTag(value=self.time).append_to(packet)
        for element in self.elements:
            Int32(value=element.space()).append_to(packet)
            element.append_to(packet)

    def to_packet(self) -> Packet:
        """Encode the bundle into a new Packet ready for transport."""
        packet = Packet()
        self.append_to(packet)
        return packet

    def encode(self) -> bytes:
        """Encode the bundle to bytes."""
        return self.to_packet().to_bytes()

    @staticmethod
    def maybe(packet: Packet) -> bool:
        """Report whether the next frame starts with the bundle marker, without consuming it."""
        return packet.peek(len(BUNDLE_MARKER)) == BUNDLE_MARKER

    @staticmethod
    def parse(packet: Packet, config: Optional[DecodeConfig] = None) -> Bundle:
        """Consume one bundle frame, including all nested elements, from ``packet``.

        The bundle frame is assumed to extend to the end of ``packet``.

        Args:
            packet: Packet positioned at the bundle marker
            config: Decoding limits (defaults to DEFAULT_CONFIG)

        Returns:
            Decoded bundle

        Raises:
            InvalidBundleError: If the marker is missing, an element size is
                negative or inconsistent, or nesting exceeds the limit
            TruncatedError: If an element size exceeds the remaining bytes
            DecodeError: Any error raised while decoding a contained message
        """
        return _parse_bundle(packet, config or DEFAULT_CONFIG, depth=1)


def _parse_bundle(packet: Packet, config: DecodeConfig, depth: int) -> Bundle:
    if depth > config.max_bundle_depth:
        raise InvalidBundleError(
            f"Bundle nesting exceeds max_bundle_depth={config.max_bundle_depth}"
        )
    if not Bundle.maybe(packet):
        raise InvalidBundleError(f"Missing '#bundle' marker, got {packet.peek(8)!r}")

    packet.take_front(len(BUNDLE_MARKER))
    time = TimeTag.read_from(packet).value
    elements: list[Element] = []

    while packet.remaining():
        size = Int32.read_from(packet).value
        if size < 0:
            raise InvalidBundleError(f"Negative element size {size}")

        chunk = Packet(packet.take_front(size))
        content: Union[Message, Bundle]
        if Message.maybe(chunk):
            content = Message.parse(chunk)
        else:
            content = _parse_bundle(chunk, config, depth + 1)

        if chunk.remaining():
            raise InvalidBundleError(
                f"Element declared {size} bytes but {chunk.remaining()} were left unread"
            )

        _logger.debug(
            "Decoded %s element of %d bytes at depth %d",
            "message" if isinstance(content, Message) else "bundle",
            size,
            depth,
        )
        elements.append(Element(content=content))

    return Bundle(time=time, elements=elements)


Element.model_rebuild()
Bundle.model_rebuild()
