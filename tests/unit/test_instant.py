"""
Unit tests for the Instant value type (tconv.instant).
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from tconv.exceptions import TimeRangeError
from tconv.instant import Instant


class TestInstant:
    """Tests for construction, equality and shifting."""

    def test_requires_aware_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            Instant(datetime(2006, 1, 2))

    def test_nanosecond_range(self):
        with pytest.raises(ValueError, match="nanosecond"):
            Instant(datetime(2006, 1, 2, tzinfo=timezone.utc), 1000)

    def test_equality_ignores_zone(self):
        utc = Instant.from_epoch_micros(1_000_000)
        tokyo = utc.in_zone(ZoneInfo("Asia/Tokyo"))
        assert utc == tokyo
        assert hash(utc) == hash(tokyo)
        assert utc.moment.hour != tokyo.moment.hour

    def test_nanosecond_breaks_equality(self):
        a = Instant.from_epoch_nanos(1_000_000_000)
        b = Instant.from_epoch_nanos(1_000_000_001)
        assert a != b
        assert b.nanosecond == 1

    def test_negative_nanos(self):
        instant = Instant.from_epoch_nanos(-1)
        assert instant.epoch_nanos == -1
        assert instant.nanosecond == 999

    def test_shift_zero_returns_self(self):
        instant = Instant.from_epoch_micros(0)
        assert instant.shift(timedelta(0)) is instant

    def test_shift_keeps_zone(self):
        instant = Instant.from_epoch_micros(0, ZoneInfo("Asia/Tokyo"))
        shifted = instant.shift(timedelta(hours=1))
        assert shifted.moment.tzinfo == instant.moment.tzinfo
        assert shifted.epoch_micros == 3_600_000_000

    def test_out_of_range(self):
        with pytest.raises(TimeRangeError):
            Instant.from_epoch_micros(10**20)
        with pytest.raises(TimeRangeError):
            Instant(datetime(9999, 12, 31, 23, tzinfo=timezone.utc)).shift(timedelta(days=1))

    def test_now_uses_local_zone(self):
        assert Instant.now().moment.tzinfo is timezone.utc

    def test_str(self):
        instant = Instant.from_epoch_nanos(5)
        assert str(instant) == "1970-01-01T00:00:00+00:00 (+5ns)"
