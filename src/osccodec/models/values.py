"""OSC argument values.

This module defines the closed set of OSC atomic types as frozen Pydantic
models. Every variant knows its type tag, its encoded size, how to append
itself to a Packet and how to read itself back.

All multi-byte scalars are big-endian. Strings and blobs are zero-padded to a
multiple of 4 bytes. Bool, Nil and Infinitum carry no payload: the type tag
alone conveys the value.
"""

from __future__ import annotations

import math
import struct
from abc import abstractmethod
from datetime import datetime
from typing import Any, Callable, ClassVar, Iterator, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..exceptions import InvalidTagError, InvalidValueError
from ..packet import Packet
from ..utils.sizing import pad4
from .timetag import OscTime

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_INT64 = struct.Struct(">q")
_UINT64 = struct.Struct(">Q")
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")

# struct's standard sizes always use IEEE 754 binary32/binary64 layouts
assert _FLOAT32.size == 4 and _FLOAT64.size == 8


def _read(packet: Packet, fmt: struct.Struct) -> Any:
    return fmt.unpack(packet.take_front(fmt.size))[0]


def _expect(value: Any, kinds: tuple[type, ...], what: str) -> Any:
    """Reject payloads of the wrong Python type instead of coercing them."""
    # bool is an int subclass but never a numeric payload
    if (isinstance(value, bool) and bool not in kinds) or not isinstance(value, kinds):
        names = " or ".join(kind.__name__ for kind in kinds)
        raise InvalidValueError(f"{what} payload must be {names}, got {type(value).__name__}")
    return value


class Value(BaseModel):
    """Base class for OSC argument values.

    Subclasses set ``tag`` and implement ``space``, ``append_to`` and
    ``read_from``. Use ``Value.parse`` to decode a value given its tag.

    Payloads are type-checked, not coerced: ``Int32(value="5")`` and
    ``Int32(value=True)`` raise InvalidValueError. Float32 and Double also
    accept an int.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tag: ClassVar[str]

    def type_tag(self) -> str:
        """Return the type tag character used in a message's tag string."""
        return self.tag

    @abstractmethod
    def space(self) -> int:
        """Return the number of bytes this value occupies on the wire."""

    @abstractmethod
    def append_to(self, packet: Packet) -> None:
        """Append the encoded payload to ``packet``."""

    @classmethod
    def read_from(cls, packet: Packet) -> Value:
        """Consume and decode one payload of this type from ``packet``.

        Bool has no reader of its own because its value lives in the type
        tag; decode it with ``Value.parse``.
        """
        raise NotImplementedError(f"{cls.__name__} is decoded from its type tag, use Value.parse")

    def encode(self) -> bytes:
        """Encode the payload on its own."""
        packet = Packet()
        self.append_to(packet)
        return packet.to_bytes()

    @staticmethod
    def parse(packet: Packet, tag: str) -> OscValue:
        """Decode one value of the type named by ``tag``.

        Args:
            packet: Packet positioned at the value's payload
            tag: Type tag character (one of ``ifsbhtdcTFNI``)

        Returns:
            Decoded value

        Raises:
            InvalidTagError: If the tag is not in the OSC alphabet
            TruncatedError: If the packet ends before the payload does
            InvalidValueError: If the payload is malformed
        """
        reader = _READERS.get(tag)
        if reader is None:
            raise InvalidTagError(f"Unknown type tag {tag!r}")
        return reader(packet)


class Int32(Value):
    """32-bit signed integer (``i``)."""

    tag: ClassVar[str] = "i"

    value: int

    @field_validator("value", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> int:
        return _expect(value, (int,), "Int32")

    @field_validator("value")
    @classmethod
    def _check_range(cls, value: int) -> int:
        if not INT32_MIN <= value <= INT32_MAX:
            raise InvalidValueError(f"Value {value} does not fit in int32")
        return value

    def space(self) -> int:
        return _INT32.size

    def append_to(self, packet: Packet) -> None:
        packet.append(_INT32.pack(self.value))

    @classmethod
    def read_from(cls, packet: Packet) -> Int32:
        return cls(value=_read(packet, _INT32))


class _IEEEFloat(Value):
    """Shared storage for the IEEE 754 types.

    The raw bit pattern is the stored field, so NaN payloads (signalling
    NaNs included) are re-encoded byte for byte and equal bit patterns
    compare equal. ``value`` gives the payload as a Python float.
    """

    bits_format: ClassVar[struct.Struct]
    float_format: ClassVar[struct.Struct]

    bits: int

    @model_validator(mode="before")
    @classmethod
    def _pack_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and "value" in data:
            if "bits" in data:
                raise InvalidValueError(f"{cls.__name__} takes either value or bits, not both")
            data = dict(data)
            data["bits"] = cls._to_bits(data.pop("value"))
        return data

    @classmethod
    def _to_bits(cls, value: Any) -> int:
        _expect(value, (int, float), cls.__name__)
        try:
            packed = cls.float_format.pack(value)
        except OverflowError as err:
            raise InvalidValueError(f"Value {value} does not fit in {cls.__name__}") from err
        return cls.bits_format.unpack(packed)[0]

    @field_validator("bits", mode="before")
    @classmethod
    def _check_bits(cls, bits: Any) -> int:
        _expect(bits, (int,), cls.__name__)
        if not 0 <= bits < 1 << (8 * cls.bits_format.size):
            raise InvalidValueError(f"Bit pattern {bits:#x} does not fit in {cls.__name__}")
        return bits

    @property
    def value(self) -> float:
        return self.float_format.unpack(self.bits_format.pack(self.bits))[0]

    def __repr_args__(self) -> Iterator[tuple[str, Any]]:
        yield "value", self.value

    def space(self) -> int:
        return self.bits_format.size

    def append_to(self, packet: Packet) -> None:
        packet.append(self.bits_format.pack(self.bits))

    @classmethod
    def read_from(cls, packet: Packet) -> _IEEEFloat:
        return cls(bits=_read(packet, cls.bits_format))


class Float32(_IEEEFloat):
    """32-bit IEEE 754 float (``f``).

    A Python float is rounded to the nearest binary32 number at construction,
    so a decoded value compares equal to the one that was encoded.
    """

    tag: ClassVar[str] = "f"

    bits_format: ClassVar[struct.Struct] = _UINT32
    float_format: ClassVar[struct.Struct] = _FLOAT32


class String(Value):
    """NUL-terminated UTF-8 string (``s``), padded to a multiple of 4 bytes."""

    tag: ClassVar[str] = "s"

    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> str:
        return _expect(value, (str,), "String")

    @field_validator("value")
    @classmethod
    def _check_encodable(cls, value: str) -> str:
        _encode_text(value)
        return value

    def space(self) -> int:
        # +1 reserves the terminating NUL
        return pad4(len(_encode_text(self.value)) + 1)

    def append_to(self, packet: Packet) -> None:
        raw = _encode_text(self.value)
        packet.append(raw + b"\x00" * (pad4(len(raw) + 1) - len(raw)))

    @classmethod
    def read_from(cls, packet: Packet) -> String:
        end = packet.find(0)
        if end < 0:
            raise InvalidValueError("String is missing its NUL terminator")

        raw = packet.take_front(end)
        packet.take_front(pad4(end + 1) - end)

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise InvalidValueError(f"String is not valid UTF-8: {err}") from err
        return cls(value=text)


def _encode_text(text: str) -> bytes:
    """Encode text for the wire, rejecting embedded NULs."""
    if "\x00" in text:
        raise InvalidValueError(f"NUL byte inside string {text!r}")
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as err:
        raise InvalidValueError(f"String is not encodable as UTF-8: {err}") from err


class Blob(Value):
    """Length-prefixed byte string (``b``), padded to a multiple of 4 bytes.

    The length prefix counts the data bytes only, not the padding.
    """

    tag: ClassVar[str] = "b"

    value: bytes

    @field_validator("value", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> bytes:
        return bytes(_expect(value, (bytes, bytearray), "Blob"))

    @field_validator("value")
    @classmethod
    def _check_length(cls, value: bytes) -> bytes:
        if len(value) > INT32_MAX:
            raise InvalidValueError(f"Blob of {len(value)} bytes is too large")
        return value

    def space(self) -> int:
        return _INT32.size + pad4(len(self.value))

    def append_to(self, packet: Packet) -> None:
        size = len(self.value)
        packet.append(_INT32.pack(size))
        packet.append(self.value + b"\x00" * (pad4(size) - size))

    @classmethod
    def read_from(cls, packet: Packet) -> Blob:
        size = _read(packet, _INT32)
        if size < 0:
            raise InvalidValueError(f"Negative blob length {size}")

        data = packet.take_front(size)
        packet.take_front(pad4(size) - size)
        return cls(value=data)


class Int64(Value):
    """64-bit signed integer (``h``)."""

    tag: ClassVar[str] = "h"

    value: int

    @field_validator("value", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> int:
        return _expect(value, (int,), "Int64")

    @field_validator("value")
    @classmethod
    def _check_range(cls, value: int) -> int:
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidValueError(f"Value {value} does not fit in int64")
        return value

    def space(self) -> int:
        return _INT64.size

    def append_to(self, packet: Packet) -> None:
        packet.append(_INT64.pack(self.value))

    @classmethod
    def read_from(cls, packet: Packet) -> Int64:
        return cls(value=_read(packet, _INT64))


class TimeTag(Value):
    """64-bit NTP time tag (``t``).

    Accepts an OscTime, a datetime, or None (immediately).
    """

    tag: ClassVar[str] = "t"

    value: OscTime

    def space(self) -> int:
        return _UINT64.size

    def append_to(self, packet: Packet) -> None:
        packet.append(_UINT64.pack(self.value.to_ntp()))

    @classmethod
    def read_from(cls, packet: Packet) -> TimeTag:
        return cls(value=OscTime.from_ntp(_read(packet, _UINT64)))


class Double(_IEEEFloat):
    """64-bit IEEE 754 float (``d``)."""

    tag: ClassVar[str] = "d"

    bits_format: ClassVar[struct.Struct] = _UINT64
    float_format: ClassVar[struct.Struct] = _FLOAT64


class Char(Value):
    """Single byte-sized character (``c``), sent as a 32-bit integer."""

    tag: ClassVar[str] = "c"

    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> str:
        return _expect(value, (str,), "Char")

    @field_validator("value")
    @classmethod
    def _check_single_byte(cls, value: str) -> str:
        if len(value) != 1 or ord(value) > 0xFF:
            raise InvalidValueError(f"Char must be a single byte-sized character, got {value!r}")
        return value

    def space(self) -> int:
        return _INT32.size

    def append_to(self, packet: Packet) -> None:
        packet.append(_UINT32.pack(ord(self.value)))

    @classmethod
    def read_from(cls, packet: Packet) -> Char:
        return cls(value=chr(_read(packet, _UINT32) & 0xFF))


class Bool(Value):
    """Boolean (``T`` or ``F``), carried by the type tag alone.

    There is no ``read_from``: the payload is empty and the value comes from
    the tag, so decode a Bool with ``Value.parse(packet, "T")`` or ``"F"``.
    """

    tag: ClassVar[str] = "T"

    value: bool

    @field_validator("value", mode="before")
    @classmethod
    def _check_type(cls, value: Any) -> bool:
        return _expect(value, (bool,), "Bool")

    def type_tag(self) -> str:
        return "T" if self.value else "F"

    def space(self) -> int:
        return 0

    def append_to(self, packet: Packet) -> None:
        pass


class Nil(Value):
    """Nil (``N``), carried by the type tag alone."""

    tag: ClassVar[str] = "N"

    @property
    def value(self) -> None:
        return None

    def space(self) -> int:
        return 0

    def append_to(self, packet: Packet) -> None:
        pass

    @classmethod
    def read_from(cls, packet: Packet) -> Nil:
        return cls()


class Infinitum(Value):
    """Infinitum (``I``), carried by the type tag alone."""

    tag: ClassVar[str] = "I"

    @property
    def value(self) -> float:
        return math.inf

    def space(self) -> int:
        return 0

    def append_to(self, packet: Packet) -> None:
        pass

    @classmethod
    def read_from(cls, packet: Packet) -> Infinitum:
        return cls()


OscValue = Union[Int32, Float32, String, Blob, Int64, TimeTag, Double, Char, Bool, Nil, Infinitum]

_READERS: dict[str, Callable[[Packet], OscValue]] = {
    "i": Int32.read_from,
    "f": Float32.read_from,
    "s": String.read_from,
    "b": Blob.read_from,
    "h": Int64.read_from,
    "t": TimeTag.read_from,
    "d": Double.read_from,
    "c": Char.read_from,
    "T": lambda packet: Bool(value=True),
    "F": lambda packet: Bool(value=False),
    "N": Nil.read_from,
    "I": Infinitum.read_from,
}

TYPE_TAGS = "".join(_READERS)


def as_value(obj: Any) -> OscValue:
    """Map a native Python object to an OSC value.

    Mapping:
        - Value instances pass through unchanged
        - bool -> Bool
        - int -> Int32, or Int64 when it does not fit 32 bits
        - float -> Float32 (use Double explicitly for 64-bit precision)
        - str -> String
        - bytes, bytearray, memoryview -> Blob
        - None -> Nil
        - datetime, OscTime -> TimeTag

    Raises:
        InvalidValueError: If the object has no OSC mapping

    Example:
        >>> as_value(42)
        Int32(value=42)
        >>> as_value(1 << 40)
        Int64(value=1099511627776)
    """
    if isinstance(obj, Value):
        return obj  # type: ignore[return-value]
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Bool(value=obj)
    if isinstance(obj, int):
        if INT32_MIN <= obj <= INT32_MAX:
            return Int32(value=obj)
        return Int64(value=obj)
    if isinstance(obj, float):
        return Float32(value=obj)
    if isinstance(obj, str):
        return String(value=obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Blob(value=bytes(obj))
    if obj is None:
        return Nil()
    if isinstance(obj, (datetime, OscTime)):
        return TimeTag(value=obj)

    raise InvalidValueError(f"Cannot map {type(obj).__name__} to an OSC value")
