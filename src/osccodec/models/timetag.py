"""OSC time tags.

An OSC time tag is a 64-bit fixed-point NTP timestamp: the high 32 bits count
seconds since 1 January 1900, the low 32 bits count fractions of a second in
units of 1/2**32. The raw value 1 is reserved for "immediately".
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..exceptions import InvalidValueError

# 1/1/1900 -> 1/1/1970 is 70 years plus 17 leap days
NTP_EPOCH_OFFSET = (70 * 365 + 17) * 24 * 60 * 60

IMMEDIATE_NTP = 1

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_FRACTIONS_PER_SECOND = 1 << 32
_MICROS_PER_SECOND = 1_000_000
_MICROSECOND = timedelta(microseconds=1)


class OscTime(BaseModel):
    """An absolute instant, or the ``Immediate`` sentinel when ``when`` is None.

    Naive datetimes are taken to be UTC. A bare datetime (or None) is accepted
    wherever an OscTime is expected by a model field.

    Example:
        >>> t = OscTime(when=datetime(2024, 1, 1, tzinfo=timezone.utc))
        >>> hex(t.to_ntp())
        '0xe93c7f0000000000'
        >>> OscTime.immediately().to_ntp()
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    when: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_instant(cls, data: Any) -> Any:
        if data is None or isinstance(data, datetime):
            return {"when": data}
        return data

    @field_validator("when")
    @classmethod
    def _normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @classmethod
    def now(cls) -> OscTime:
        """Return the current instant."""
        return cls(when=datetime.now(timezone.utc))

    @classmethod
    def immediately(cls) -> OscTime:
        """Return the ``Immediate`` sentinel."""
        return IMMEDIATE

    @classmethod
    def from_unix(cls, seconds: float) -> OscTime:
        """Build an instant from seconds since the Unix epoch."""
        return cls(when=UNIX_EPOCH + timedelta(seconds=seconds))

    @classmethod
    def from_ntp(cls, raw: int) -> OscTime:
        """Build an instant from a raw 64-bit NTP time tag.

        Args:
            raw: Unsigned 64-bit value as carried on the wire

        Raises:
            InvalidValueError: If raw does not fit in 64 unsigned bits
        """
        if not 0 <= raw < (1 << 64):
            raise InvalidValueError(f"Time tag must fit in 64 unsigned bits, got {raw}")
        if raw == IMMEDIATE_NTP:
            return IMMEDIATE

        seconds = raw >> 32
        fraction = raw & 0xFFFFFFFF
        # round to the nearest microsecond
        micros = (fraction * _MICROS_PER_SECOND + (_FRACTIONS_PER_SECOND >> 1)) >> 32

        return cls(
            when=UNIX_EPOCH
            + timedelta(seconds=seconds - NTP_EPOCH_OFFSET, microseconds=micros)
        )

    @property
    def is_immediate(self) -> bool:
        return self.when is None

    def to_ntp(self) -> int:
        """Convert to the raw 64-bit NTP representation.

        Returns:
            ``(seconds << 32) | fraction``, or 1 for ``Immediate``

        Raises:
            InvalidValueError: If the instant falls outside the 32-bit seconds range
                (before 1900 or after early 2036)
        """
        if self.when is None:
            return IMMEDIATE_NTP

        total_micros = (self.when - UNIX_EPOCH) // _MICROSECOND
        seconds, micros = divmod(total_micros, _MICROS_PER_SECOND)
        seconds += NTP_EPOCH_OFFSET

        if not 0 <= seconds <= 0xFFFFFFFF:
            raise InvalidValueError(f"Instant {self.when.isoformat()} is outside the NTP time tag range")

        fraction = (micros * _FRACTIONS_PER_SECOND + _MICROS_PER_SECOND // 2) // _MICROS_PER_SECOND
        return (seconds << 32) | fraction

    def to_unix(self) -> float:
        """Convert to seconds since the Unix epoch.

        Raises:
            InvalidValueError: For ``Immediate``, which has no fixed instant
        """
        if self.when is None:
            raise InvalidValueError("Immediate time tag has no fixed instant")
        return (self.when - UNIX_EPOCH).total_seconds()

    def __str__(self) -> str:
        return "immediate" if self.when is None else self.when.isoformat()


IMMEDIATE = OscTime(when=None)
