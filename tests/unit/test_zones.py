"""
Unit tests for timezone loading (tconv.zones).
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from tconv.exceptions import LocationResolutionError
from tconv.zones import local_zone, resolve_location


class TestLocalZone:
    """Tests for local_zone() detection order."""

    def test_tz_utc(self):
        assert local_zone() is timezone.utc

    def test_tz_empty_means_utc(self, monkeypatch):
        monkeypatch.setenv("TZ", "")
        local_zone.cache_clear()
        assert local_zone() is timezone.utc

    def test_tz_iana_name(self, monkeypatch):
        monkeypatch.setenv("TZ", ":Asia/Tokyo")
        local_zone.cache_clear()
        assert local_zone() == ZoneInfo("Asia/Tokyo")

    def test_unusable_tz_falls_back(self, monkeypatch):
        monkeypatch.setenv("TZ", "Not/AZone")
        local_zone.cache_clear()
        zone = local_zone()
        assert datetime(2024, 1, 1, tzinfo=zone).utcoffset() is not None

    def test_cached(self):
        assert local_zone() is local_zone()


class TestResolveLocation:
    """Tests for resolve_location()."""

    @pytest.mark.parametrize("name", ["", None, "Local"])
    def test_local(self, name):
        assert resolve_location(name) is local_zone()

    def test_utc(self):
        assert resolve_location("UTC") is timezone.utc

    def test_iana(self):
        zone = resolve_location("Asia/Tokyo")
        assert datetime(2024, 1, 1, tzinfo=zone).utcoffset() == timedelta(hours=9)

    @pytest.mark.parametrize("name", ["Mars/Olympus", "../etc/passwd"])
    def test_unknown(self, name):
        with pytest.raises(LocationResolutionError, match=f"unknown time zone {name}"):
            resolve_location(name)
