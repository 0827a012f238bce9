"""
The ``Instant`` value type.

An Instant is an absolute point in time plus the zone it is displayed in.
``datetime`` stops at microseconds, so the sub-microsecond remainder is
carried separately in ``nanosecond`` (0..999); that is what lets
``rfc3339nano`` and ``stampnano`` values survive a parse/format round trip.

Instants are immutable. Equality compares the absolute instant only, so the
same moment displayed in Tokyo and in UTC compares equal.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

from tconv.exceptions import TimeRangeError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True, eq=False)
class Instant:
    """An absolute time with display zone and nanosecond precision.

    Attributes:
        moment: Timezone-aware datetime (microsecond precision).
        nanosecond: Sub-microsecond remainder, 0..999.
    """

    moment: datetime
    nanosecond: int = 0

    def __post_init__(self) -> None:
        if self.moment.tzinfo is None:
            raise ValueError("Instant requires a timezone-aware datetime")
        if not 0 <= self.nanosecond < 1000:
            raise ValueError(f"nanosecond must be in 0..999, got {self.nanosecond}")

    # -- Constructors ---------------------------------------------------

    @classmethod
    def from_epoch_micros(cls, micros: int, tz: tzinfo = timezone.utc) -> Instant:
        """Build an Instant from microseconds since the Unix epoch."""
        try:
            moment = (_EPOCH + timedelta(microseconds=micros)).astimezone(tz)
        except OverflowError as e:
            raise TimeRangeError(
                f"time out of range: {micros} microseconds since epoch"
            ) from e
        return cls(moment)

    @classmethod
    def from_epoch_nanos(cls, nanos: int, tz: tzinfo = timezone.utc) -> Instant:
        """Build an Instant from nanoseconds since the Unix epoch."""
        micros, remainder = divmod(nanos, 1000)
        return cls(cls.from_epoch_micros(micros, tz).moment, remainder)

    @classmethod
    def now(cls, tz: tzinfo | None = None) -> Instant:
        """The current time, in *tz* (defaults to the local zone)."""
        if tz is None:
            from tconv.zones import local_zone

            tz = local_zone()
        return cls.from_epoch_nanos(time.time_ns(), tz)

    # -- Epoch views ----------------------------------------------------

    @property
    def epoch_micros(self) -> int:
        return (self.moment - _EPOCH) // _MICROSECOND

    @property
    def epoch_nanos(self) -> int:
        return self.epoch_micros * 1000 + self.nanosecond

    # -- Transformations ------------------------------------------------

    def in_zone(self, tz: tzinfo) -> Instant:
        """Same instant, displayed in *tz*."""
        try:
            return Instant(self.moment.astimezone(tz), self.nanosecond)
        except OverflowError as e:
            raise TimeRangeError(f"time out of range: {self.moment.isoformat()}") from e

    def shift(self, delta: timedelta) -> Instant:
        """Move the instant by *delta* of elapsed time.

        The addition happens in UTC so that DST transitions in the display
        zone do not stretch or shrink the duration.
        """
        if not delta:
            return self
        tz = self.moment.tzinfo
        try:
            moment = (self.moment.astimezone(timezone.utc) + delta).astimezone(tz)
        except OverflowError as e:
            raise TimeRangeError(
                f"time out of range: {self.moment.isoformat()} shifted by {delta}"
            ) from e
        return Instant(moment, self.nanosecond)

    # -- Comparison -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.epoch_nanos == other.epoch_nanos

    def __hash__(self) -> int:
        return hash(self.epoch_nanos)

    def __str__(self) -> str:
        text = self.moment.isoformat()
        if self.nanosecond:
            text += f" (+{self.nanosecond}ns)"
        return text
