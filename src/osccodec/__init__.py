"""osccodec: Open Sound Control Codec

A Python library for encoding and decoding the Open Sound Control (OSC) 1.0
binary wire format: typed messages and time-stamped, arbitrarily nested
bundles of messages.

Key Features:
- Pydantic-based value, message and bundle models
- Byte-exact encoding of all OSC 1.0 atomic types plus the common
  extended types (int64, time tag, double, char, true/false, nil, infinitum)
- 64-bit NTP time tags with an explicit "immediately" sentinel
- Pure Python implementation, transport agnostic

Quick Start:
    >>> from osccodec import Bundle, Message, decode_packet, encode_packet
    >>>
    >>> msg = Message(address="/synth/1/freq").push(440.0).push("sine")
    >>> data = encode_packet(msg)
    >>> decode_packet(data) == msg
    True
    >>>
    >>> bundle = Bundle().push(msg).push(Message(address="/synth/1/gate").push(True))
    >>> decoded = decode_packet(encode_packet(bundle))
"""

from __future__ import annotations

from .codec import decode_packet, encode_packet
from .config import DEFAULT_CONFIG, DecodeConfig
from .exceptions import (
    DecodeError,
    EncodeError,
    InvalidBundleError,
    InvalidMessageError,
    InvalidTagError,
    InvalidValueError,
    OscCodecError,
    TruncatedError,
)
from .models import (
    BUNDLE_MARKER,
    IMMEDIATE,
    NTP_EPOCH_OFFSET,
    Blob,
    Bool,
    Bundle,
    Char,
    Double,
    Element,
    Float32,
    Infinitum,
    Int32,
    Int64,
    Message,
    Nil,
    OscTime,
    OscValue,
    String,
    TimeTag,
    Value,
    as_value,
)
from .packet import Packet
from .utils import element_sizes, encoded_size, pad4, value_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Message",
    "Bundle",
    "Element",
    "Packet",
    "encode_packet",
    "decode_packet",
    # Values
    "Value",
    "OscValue",
    "Int32",
    "Float32",
    "String",
    "Blob",
    "Int64",
    "TimeTag",
    "Double",
    "Char",
    "Bool",
    "Nil",
    "Infinitum",
    "as_value",
    # Time tags
    "OscTime",
    "IMMEDIATE",
    "NTP_EPOCH_OFFSET",
    "BUNDLE_MARKER",
    # Configuration
    "DecodeConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "OscCodecError",
    "EncodeError",
    "DecodeError",
    "TruncatedError",
    "InvalidTagError",
    "InvalidValueError",
    "InvalidMessageError",
    "InvalidBundleError",
    # Sizing
    "pad4",
    "encoded_size",
    "value_sizes",
    "element_sizes",
    # Version
    "__version__",
]
