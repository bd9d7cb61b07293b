"""Unit tests for NTP time tags."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from osccodec import IMMEDIATE, NTP_EPOCH_OFFSET, InvalidValueError, OscTime

NEW_YEAR_2024 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestConversion:
    """Test instant <-> NTP conversion."""

    def test_epoch_offset(self) -> None:
        """Test 1900 -> 1970 is 70 years plus 17 leap days."""
        assert NTP_EPOCH_OFFSET == 2208988800

    def test_unix_epoch(self) -> None:
        """Test the Unix epoch lands on the NTP offset."""
        assert OscTime.from_unix(0).to_ntp() == NTP_EPOCH_OFFSET << 32

    def test_whole_seconds(self) -> None:
        """Test whole seconds fill the high word only."""
        assert OscTime(when=NEW_YEAR_2024).to_ntp() == 0xE93C7F00 << 32

    def test_half_second_fraction(self) -> None:
        """Test the fraction is in units of 1/2**32 seconds."""
        t = OscTime(when=NEW_YEAR_2024 + timedelta(milliseconds=500))
        assert t.to_ntp() == (0xE93C7F00 << 32) | 0x80000000

    def test_from_ntp(self) -> None:
        """Test decoding whole and fractional seconds."""
        t = OscTime.from_ntp((0xE93C7F00 << 32) | 0x40000000)
        assert t.when == NEW_YEAR_2024 + timedelta(milliseconds=250)

    def test_microsecond_round_trip(self) -> None:
        """Test microsecond instants survive the fixed-point conversion."""
        t = OscTime(when=NEW_YEAR_2024 + timedelta(microseconds=999999))
        assert OscTime.from_ntp(t.to_ntp()) == t

    def test_before_unix_epoch(self) -> None:
        """Test instants between 1900 and 1970 convert correctly."""
        t = OscTime(when=datetime(1950, 6, 1, 0, 0, 0, 1, tzinfo=timezone.utc))
        assert OscTime.from_ntp(t.to_ntp()) == t

    def test_to_unix(self) -> None:
        """Test conversion back to Unix seconds."""
        assert OscTime.from_unix(1.5).to_unix() == 1.5


class TestImmediate:
    """Test the immediate sentinel."""

    def test_encodes_to_one(self) -> None:
        """Test immediate is raw 1, never a real date."""
        assert IMMEDIATE.to_ntp() == 1
        assert OscTime.immediately() is IMMEDIATE

    def test_decodes_from_one(self) -> None:
        """Test raw 1 decodes to immediate."""
        assert OscTime.from_ntp(1).is_immediate

    def test_has_no_unix_time(self) -> None:
        """Test immediate cannot be converted to an instant."""
        with pytest.raises(InvalidValueError):
            IMMEDIATE.to_unix()

    def test_str(self) -> None:
        """Test the text form."""
        assert str(IMMEDIATE) == "immediate"
        assert str(OscTime(when=NEW_YEAR_2024)) == "2024-01-01T00:00:00+00:00"


class TestValidation:
    """Test construction and range checks."""

    def test_naive_datetime_is_utc(self) -> None:
        """Test naive datetimes are taken as UTC."""
        assert OscTime(when=datetime(2024, 1, 1)) == OscTime(when=NEW_YEAR_2024)

    def test_other_timezone_normalized(self) -> None:
        """Test aware datetimes are normalized to UTC."""
        plus_two = timezone(timedelta(hours=2))
        t = OscTime(when=datetime(2024, 1, 1, 2, tzinfo=plus_two))
        assert t.when == NEW_YEAR_2024
        assert t.when.tzinfo == timezone.utc

    def test_bare_datetime_accepted(self) -> None:
        """Test model validation accepts a bare datetime."""
        assert OscTime.model_validate(NEW_YEAR_2024) == OscTime(when=NEW_YEAR_2024)

    @pytest.mark.parametrize(
        "when",
        [
            datetime(1899, 12, 31, tzinfo=timezone.utc),
            datetime(2036, 2, 8, tzinfo=timezone.utc),
        ],
    )
    def test_out_of_range(self, when: datetime) -> None:
        """Test instants outside the 32-bit seconds range."""
        with pytest.raises(InvalidValueError, match="outside"):
            OscTime(when=when).to_ntp()

    def test_raw_out_of_range(self) -> None:
        """Test raw values beyond 64 bits."""
        with pytest.raises(InvalidValueError):
            OscTime.from_ntp(1 << 64)

    def test_now_is_current(self) -> None:
        """Test now() is close to the system clock."""
        delta = datetime.now(timezone.utc) - OscTime.now().when
        assert abs(delta) < timedelta(seconds=5)
