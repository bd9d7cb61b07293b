"""OSC message model.

A message frame on the wire is::

    <address: padded string> <",tags": padded string> <value payloads...>
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidMessageError
from ..packet import Packet
from .values import OscValue, String, Value, as_value


class Message(BaseModel):
    """An OSC address plus an ordered list of values.

    Values can be given as OSC value models or as native Python objects,
    which are mapped with ``as_value``.

    Example:
        >>> msg = Message(address="/synth/1/freq").push(440.0)
        >>> msg.type_tags()
        ',f'
        >>> Message.parse(msg.to_packet()) == msg
        True
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    address: str
    values: list[OscValue] = Field(default_factory=list)

    @field_validator("address")
    @classmethod
    def _check_address(cls, address: str) -> str:
        String(value=address)
        return address

    @field_validator("values", mode="before")
    @classmethod
    def _map_native_values(cls, values: Any) -> Any:
        if isinstance(values, (list, tuple)):
            return [as_value(v) for v in values]
        return values

    def push(self, value: Any) -> Message:
        """Append a value and return the message for chaining."""
        self.values.append(as_value(value))
        return self

    @property
    def arguments(self) -> list[Any]:
        """Native Python payloads of the values, in order."""
        return [v.value for v in self.values]

    def type_tags(self) -> str:
        """Return the type tag string, e.g. ``",ifs"``."""
        return "," + "".join(v.type_tag() for v in self.values)

    def space(self) -> int:
        """Return the encoded size of the message in bytes."""
        return (
            String(value=self.address).space()
            + String(value=self.type_tags()).space()
            + sum(v.space() for v in self.values)
        )

    def append_to(self, packet: Packet) -> None:
        """Append the full message frame to ``packet``."""
        String(value=self.address).append_to(packet)
        String(value=self.type_tags()).append_to(packet)
        for value in self.values:
            value.append_to(packet)

    def to_packet(self) -> Packet:
        """Encode the message into a new Packet ready for transport."""
        packet = Packet()
        self.append_to(packet)
        return packet

    def encode(self) -> bytes:
        """Encode the message to bytes."""
        return self.to_packet().to_bytes()

    @staticmethod
    def maybe(packet: Packet) -> bool:
        """Report whether the next frame looks like a message, without consuming it."""
        return packet.peek(1) == b"/"

    @staticmethod
    def parse(packet: Packet) -> Message:
        """Consume one message frame from ``packet``.

        Args:
            packet: Packet positioned at the start of a message frame

        Returns:
            Decoded message

        Raises:
            InvalidMessageError: If the address does not start with '/' or the
                tag string does not start with ','
            TruncatedError: If the packet ends mid-frame
            InvalidTagError: If a tag character is unknown
            InvalidValueError: If a string or blob is malformed
        """
        address = String.read_from(packet).value
        if not address.startswith("/"):
            raise InvalidMessageError(f"Address must start with '/', got {address!r}")

        tags = String.read_from(packet).value
        if not tags.startswith(","):
            raise InvalidMessageError(f"Type tag string must start with ',', got {tags!r}")

        values = [Value.parse(packet, tag) for tag in tags[1:]]
        return Message(address=address, values=values)
