"""OSC data models: values, time tags, messages and bundles."""

from __future__ import annotations

from .bundle import BUNDLE_MARKER, Bundle, Element
from .message import Message
from .timetag import IMMEDIATE, NTP_EPOCH_OFFSET, OscTime
from .values import (
    Blob,
    Bool,
    Char,
    Double,
    Float32,
    Infinitum,
    Int32,
    Int64,
    Nil,
    OscValue,
    String,
    TimeTag,
    Value,
    as_value,
)

__all__ = [
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
    "OscTime",
    "IMMEDIATE",
    "NTP_EPOCH_OFFSET",
    "Message",
    "Element",
    "Bundle",
    "BUNDLE_MARKER",
]
