"""
Unit tests for the scalar converter (tconv.convert).

Every canonical format is checked for idempotence (text -> Instant ->
text gives the same text back). Formats that carry a full date, time and
zone are also checked for instant round trips.
"""

from datetime import timedelta, timezone

import pytest

from tconv.convert import string_to_time, time_to_string
from tconv.exceptions import PatternParseError, UnknownFormatError
from tconv.instant import Instant
from tconv.layout_registry import load_registry

# 2006-01-02T22:04:05.123456789Z
REF = Instant.from_epoch_nanos(1136239445_123456789, timezone.utc)

ALL_FORMATS = [l.name for l in load_registry().layouts] + [e.name for e in load_registry().epochs]

# Epoch values go through a float multiply, so use values it represents exactly
EPOCH_SOURCES = {
    "unix": Instant.from_epoch_micros(1136239445_000000),
    "unix-milli": Instant.from_epoch_micros(1136239445_123000),
    "unix-micro": Instant.from_epoch_micros(1136239445_123456),
}

# Formats whose text pins down the absolute instant (to their precision)
LOSSLESS = {
    "rfc3339nano": REF,
    "unix-micro": Instant.from_epoch_micros(REF.epoch_micros),
}


class TestRoundTrip:
    """Format/parse round trips for every canonical format."""

    @pytest.mark.parametrize("fmt", ALL_FORMATS)
    def test_idempotent(self, fmt):
        text = time_to_string(EPOCH_SOURCES.get(fmt, REF), fmt)
        assert time_to_string(string_to_time(text, fmt), fmt) == text

    @pytest.mark.parametrize("fmt", sorted(LOSSLESS))
    def test_instant_round_trip(self, fmt):
        assert string_to_time(time_to_string(REF, fmt), fmt) == LOSSLESS[fmt]

    @pytest.mark.parametrize(
        "fmt, text",
        [
            ("stamp", "Feb 29 12:00:00"),
            ("stampmilli", "Feb 29 12:00:00.250"),
            ("timeonly", "00:30:00"),
            ("kitchen", "3:04AM"),
        ],
    )
    def test_yearless_formats(self, fmt, text):
        assert time_to_string(string_to_time(text, fmt), fmt) == text

    def test_rfc3339_drops_fraction(self):
        parsed = string_to_time(time_to_string(REF, "rfc3339"), "rfc3339")
        assert parsed.epoch_micros == 1136239445 * 1_000_000


class TestStringToTime:
    """Tests for string_to_time()."""

    def test_named_format_any_case(self):
        a = string_to_time("2006-01-02T15:04:05-07:00", "RFC3339")
        b = string_to_time("2006-01-02T15:04:05-07:00", "rfc3339")
        assert a == b

    def test_raw_reference_layout(self):
        instant = string_to_time("2023/10/26", "2006/01/02")
        assert time_to_string(instant, "dateonly") == "2023-10-26"

    def test_raw_strftime_pattern(self):
        instant = string_to_time("2023-10-26 13:56", "%Y-%m-%d %H:%M")
        assert instant.moment.tzinfo is timezone.utc
        assert time_to_string(instant, "%d/%m/%Y") == "26/10/2023"

    def test_strftime_offset_prints_numeric_zone(self):
        instant = string_to_time("2023-10-26 12:57 +0900", "%Y-%m-%d %H:%M %z")
        assert instant.moment.utcoffset() == timedelta(hours=9)
        assert time_to_string(instant, "rfc1123") == "Thu, 26 Oct 2023 12:57:00 +0900"
        assert time_to_string(instant, "%H:%M %z") == "12:57 +0900"

    def test_strftime_utc_stays_utc(self):
        instant = string_to_time("2023-10-26 12:57 UTC", "%Y-%m-%d %H:%M %Z")
        assert time_to_string(instant, "rfc1123") == "Thu, 26 Oct 2023 12:57:00 UTC"

    def test_strftime_mismatch(self):
        with pytest.raises(PatternParseError, match='as "%Y"'):
            string_to_time("x", "%Y")

    def test_empty_format_guesses(self):
        assert string_to_time("1136239445", "").epoch_micros == 1136239445 * 1_000_000

    def test_guess_failure(self):
        with pytest.raises(UnknownFormatError, match="Unknown format: invalid time"):
            string_to_time("invalid time")

    def test_layout_mismatch(self):
        with pytest.raises(PatternParseError):
            string_to_time("1136239445", "rfc3339")


class TestTimeToString:
    """Tests for time_to_string()."""

    def test_raw_layout(self):
        instant = string_to_time("1698292629", "unix")
        assert time_to_string(instant, "2006-01-02") == "2023-10-26"

    def test_reference_epoch(self):
        instant = string_to_time("2006-01-02T15:04:05-07:00", "rfc3339")
        assert time_to_string(instant, "unix") == "1136239445"

    def test_kitchen(self):
        assert time_to_string(REF, "kitchen") == "10:04PM"
