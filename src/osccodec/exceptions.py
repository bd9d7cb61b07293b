"""Exception hierarchy for osccodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from OscCodecError for easy catching of any osccodec-specific error.

None of these derive from ValueError: pydantic only wraps ValueError and
AssertionError into ValidationError, so raising them from model validators
surfaces the codec error unchanged.
"""

from __future__ import annotations


class OscCodecError(Exception):
    """Base exception for all osccodec errors."""

    pass


class EncodeError(OscCodecError):
    """Raised when encoding a value, message or bundle fails."""

    pass


class DecodeError(OscCodecError):
    """Raised when decoding binary data fails."""

    pass


class TruncatedError(DecodeError):
    """Raised when fewer bytes remain than a field requires.

    Examples:
        - Fewer than 4 bytes left for an int32/float32/char
        - Fewer than 8 bytes left for an int64/double/time tag
        - Blob length prefix larger than the remaining buffer
        - Bundle element size larger than the remaining buffer
    """

    pass


class InvalidTagError(DecodeError):
    """Raised when a type tag character is not part of the OSC alphabet."""

    pass


class InvalidValueError(EncodeError, DecodeError):
    """Raised when a value cannot be represented on the wire.

    Raised on both paths, hence the double inheritance.

    Examples:
        - NUL byte inside a string
        - String missing its NUL terminator
        - Negative blob length
        - Integer outside the int32/int64 range
        - Instant outside the NTP time tag range
    """

    pass


class InvalidMessageError(DecodeError):
    """Raised when message framing is violated.

    Examples:
        - Address does not start with '/'
        - Type tag string does not start with ','
        - Trailing bytes after a top-level message
    """

    pass


class InvalidBundleError(DecodeError):
    """Raised when bundle framing is violated.

    Examples:
        - Missing '#bundle' marker
        - Negative element size
        - Element size disagrees with its parsed content
        - Nesting deeper than the configured limit
    """

    pass
