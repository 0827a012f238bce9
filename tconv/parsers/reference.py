"""
Reference-time layout engine.

A layout is an example rendering of the reference time
``Mon Jan 2 15:04:05 MST 2006`` (Unix 1136239445, offset -0700). Each
component of that example is a token; everything else is literal text:

    Year        2006 06                    Month   January Jan 1 01
    Day         2 _2 02                    Weekday Monday Mon
    Year-day    __2 002                    Hour    15 3 03
    Minute      4 04                       Second  5 05
    AM/PM       PM pm                      Zone    MST
    Offset      -0700 -07:00 -07 -070000 -07:00:00
    ISO offset  Z0700 Z07:00 Z07 Z070000 Z07:00:00   (``Z`` when UTC)
    Fraction    .000 .999 ,000 ,999 (any width; 9s trim trailing zeros)

Parsing is lenient in a few places:
a space in the layout matches any run of spaces, names match
case-insensitively, unpadded numbers accept one or two digits, and a
fractional second is accepted after the seconds even when the layout has
no fraction token.

Elements missing from the layout default to January 1 of year 4, a leap
year clear of ``datetime.min`` (``datetime`` has no year 0). Without zone
information the result is UTC.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum, auto
from functools import lru_cache
from typing import NamedTuple

from tconv.exceptions import PatternParseError
from tconv.instant import Instant
from tconv.parsers.base import BaseParser
from tconv.zones import local_zone

logger = logging.getLogger(__name__)

LONG_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
SHORT_MONTHS = tuple(m[:3] for m in LONG_MONTHS)
# Indexed by datetime.weekday(): Monday == 0
LONG_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
SHORT_DAYS = tuple(d[:3] for d in LONG_DAYS)

# Leap year, so "Feb 29" parses, with room for west-of-UTC zones and shifts
DEFAULT_YEAR = 4


class Std(Enum):
    LONG_MONTH = auto()
    MONTH = auto()
    NUM_MONTH = auto()
    ZERO_MONTH = auto()
    LONG_WEEKDAY = auto()
    WEEKDAY = auto()
    DAY = auto()
    UNDER_DAY = auto()
    ZERO_DAY = auto()
    UNDER_YEARDAY = auto()
    ZERO_YEARDAY = auto()
    HOUR = auto()
    HOUR12 = auto()
    ZERO_HOUR12 = auto()
    MINUTE = auto()
    ZERO_MINUTE = auto()
    SECOND = auto()
    ZERO_SECOND = auto()
    LONG_YEAR = auto()
    YEAR = auto()
    PM = auto()
    PM_LOWER = auto()
    TZ = auto()
    ISO_TZ = auto()
    ISO_SECONDS_TZ = auto()
    ISO_SHORT_TZ = auto()
    ISO_COLON_TZ = auto()
    ISO_COLON_SECONDS_TZ = auto()
    NUM_TZ = auto()
    NUM_SECONDS_TZ = auto()
    NUM_SHORT_TZ = auto()
    NUM_COLON_TZ = auto()
    NUM_COLON_SECONDS_TZ = auto()
    FRAC_SECOND0 = auto()
    FRAC_SECOND9 = auto()


class Token(NamedTuple):
    """A layout token.

    ``text`` is the layout substring it was read from; ``digits`` is the
    width of a fractional-second token.
    """
    std: Std
    text: str
    digits: int = 0


# "0x" tokens, keyed by the second character
_ZERO_STDS = {
    "1": Std.ZERO_MONTH,
    "2": Std.ZERO_DAY,
    "3": Std.ZERO_HOUR12,
    "4": Std.ZERO_MINUTE,
    "5": Std.ZERO_SECOND,
    "6": Std.YEAR,
}

# Checked in order: longer spellings shadow their prefixes
_NUM_TZ_STDS = (
    ("-070000", Std.NUM_SECONDS_TZ),
    ("-07:00:00", Std.NUM_COLON_SECONDS_TZ),
    ("-0700", Std.NUM_TZ),
    ("-07:00", Std.NUM_COLON_TZ),
    ("-07", Std.NUM_SHORT_TZ),
)
_ISO_TZ_STDS = (
    ("Z070000", Std.ISO_SECONDS_TZ),
    ("Z07:00:00", Std.ISO_COLON_SECONDS_TZ),
    ("Z0700", Std.ISO_TZ),
    ("Z07:00", Std.ISO_COLON_TZ),
    ("Z07", Std.ISO_SHORT_TZ),
)

_ISO_STDS = frozenset(std for _, std in _ISO_TZ_STDS)
_OFFSET_STDS = _ISO_STDS | frozenset(std for _, std in _NUM_TZ_STDS)
_COLON_STDS = frozenset({
    Std.NUM_COLON_TZ, Std.NUM_COLON_SECONDS_TZ,
    Std.ISO_COLON_TZ, Std.ISO_COLON_SECONDS_TZ,
})
_SHORT_STDS = frozenset({Std.NUM_SHORT_TZ, Std.ISO_SHORT_TZ})
_SECONDS_STDS = frozenset({
    Std.NUM_SECONDS_TZ, Std.NUM_COLON_SECONDS_TZ,
    Std.ISO_SECONDS_TZ, Std.ISO_COLON_SECONDS_TZ,
})
_FRAC_STDS = frozenset({Std.FRAC_SECOND0, Std.FRAC_SECOND9})


def _is_digit(s: str, i: int) -> bool:
    return i < len(s) and "0" <= s[i] <= "9"


def _starts_lower(s: str) -> bool:
    return bool(s) and "a" <= s[0] <= "z"


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def _token_at(layout: str, i: int) -> Token | None:
    """Return the token starting at ``layout[i]``, or None for a literal."""
    rest = layout[i:]
    c = rest[0]

    if c == "J":
        if rest.startswith("January"):
            return Token(Std.LONG_MONTH, "January")
        if rest.startswith("Jan") and not _starts_lower(rest[3:]):
            return Token(Std.MONTH, "Jan")
    elif c == "M":
        if rest.startswith("Monday"):
            return Token(Std.LONG_WEEKDAY, "Monday")
        if rest.startswith("Mon") and not _starts_lower(rest[3:]):
            return Token(Std.WEEKDAY, "Mon")
        if rest.startswith("MST"):
            return Token(Std.TZ, "MST")
    elif c == "0":
        if len(rest) >= 2 and rest[1] in _ZERO_STDS:
            return Token(_ZERO_STDS[rest[1]], rest[:2])
        if rest.startswith("002"):
            return Token(Std.ZERO_YEARDAY, "002")
    elif c == "1":
        if rest.startswith("15"):
            return Token(Std.HOUR, "15")
        return Token(Std.NUM_MONTH, "1")
    elif c == "2":
        if rest.startswith("2006"):
            return Token(Std.LONG_YEAR, "2006")
        return Token(Std.DAY, "2")
    elif c == "_":
        if rest.startswith("_2"):
            # "_2006" is a literal underscore followed by the long year
            if rest.startswith("_2006"):
                return None
            return Token(Std.UNDER_DAY, "_2")
        if rest.startswith("__2"):
            return Token(Std.UNDER_YEARDAY, "__2")
    elif c == "3":
        return Token(Std.HOUR12, "3")
    elif c == "4":
        return Token(Std.MINUTE, "4")
    elif c == "5":
        return Token(Std.SECOND, "5")
    elif c == "P":
        if rest.startswith("PM"):
            return Token(Std.PM, "PM")
    elif c == "p":
        if rest.startswith("pm"):
            return Token(Std.PM_LOWER, "pm")
    elif c == "-":
        for text, std in _NUM_TZ_STDS:
            if rest.startswith(text):
                return Token(std, text)
    elif c == "Z":
        for text, std in _ISO_TZ_STDS:
            if rest.startswith(text):
                return Token(std, text)
    elif c in ".,":
        if len(rest) >= 2 and rest[1] in "09":
            ch = rest[1]
            j = 1
            while j < len(rest) and rest[j] == ch:
                j += 1
            # The run of digits must end here to be a fraction
            if not _is_digit(rest, j):
                std = Std.FRAC_SECOND0 if ch == "0" else Std.FRAC_SECOND9
                return Token(std, rest[:j], digits=j - 1)
    return None


@lru_cache(maxsize=256)
def tokenize(layout: str) -> tuple[str | Token, ...]:
    """Split *layout* into literal strings and tokens, in order."""
    chunks: list[str | Token] = []
    literal_start = 0
    i = 0
    while i < len(layout):
        token = _token_at(layout, i)
        if token is None:
            i += 1
            continue
        if literal_start < i:
            chunks.append(layout[literal_start:i])
        chunks.append(token)
        i += len(token.text)
        literal_start = i
    if literal_start < len(layout):
        chunks.append(layout[literal_start:])
    return tuple(chunks)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _offset_seconds(moment: datetime) -> int:
    offset = moment.utcoffset()
    return 0 if offset is None else offset // timedelta(seconds=1)


def _format_offset(offset: int, std: Std) -> str:
    sign = "-" if offset < 0 else "+"
    offset = abs(offset)
    minutes = offset // 60
    colon = ":" if std in _COLON_STDS else ""
    text = f"{sign}{minutes // 60:02d}"
    if std not in _SHORT_STDS:
        text += f"{colon}{minutes % 60:02d}"
    if std in _SECONDS_STDS:
        text += f"{colon}{offset % 60:02d}"
    return text


def _format_fraction(nanos: int, token: Token) -> str:
    digits = f"{nanos:09d}"[: token.digits]
    if token.std is Std.FRAC_SECOND9:
        digits = digits.rstrip("0")
        if not digits:
            return ""
    return token.text[0] + digits


def _format_token(token: Token, moment: datetime, nanos: int) -> str:
    std = token.std
    if std is Std.YEAR:
        return f"{moment.year % 100:02d}"
    if std is Std.LONG_YEAR:
        return f"{moment.year:04d}"
    if std is Std.MONTH:
        return SHORT_MONTHS[moment.month - 1]
    if std is Std.LONG_MONTH:
        return LONG_MONTHS[moment.month - 1]
    if std is Std.NUM_MONTH:
        return str(moment.month)
    if std is Std.ZERO_MONTH:
        return f"{moment.month:02d}"
    if std is Std.WEEKDAY:
        return SHORT_DAYS[moment.weekday()]
    if std is Std.LONG_WEEKDAY:
        return LONG_DAYS[moment.weekday()]
    if std is Std.DAY:
        return str(moment.day)
    if std is Std.UNDER_DAY:
        return f"{moment.day:2d}"
    if std is Std.ZERO_DAY:
        return f"{moment.day:02d}"
    if std is Std.UNDER_YEARDAY:
        return f"{moment.timetuple().tm_yday:3d}"
    if std is Std.ZERO_YEARDAY:
        return f"{moment.timetuple().tm_yday:03d}"
    if std is Std.HOUR:
        return f"{moment.hour:02d}"
    if std in (Std.HOUR12, Std.ZERO_HOUR12):
        hour = moment.hour % 12 or 12
        return str(hour) if std is Std.HOUR12 else f"{hour:02d}"
    if std is Std.MINUTE:
        return str(moment.minute)
    if std is Std.ZERO_MINUTE:
        return f"{moment.minute:02d}"
    if std is Std.SECOND:
        return str(moment.second)
    if std is Std.ZERO_SECOND:
        return f"{moment.second:02d}"
    if std is Std.PM:
        return "PM" if moment.hour >= 12 else "AM"
    if std is Std.PM_LOWER:
        return "pm" if moment.hour >= 12 else "am"
    if std in _FRAC_STDS:
        return _format_fraction(nanos, token)

    offset = _offset_seconds(moment)
    if std is Std.TZ:
        name = moment.tzname()
        if name:
            return name
        # Unnamed zone: fall back to -0700 style
        return _format_offset(offset, Std.NUM_TZ)
    if std in _ISO_STDS and offset == 0:
        return "Z"
    return _format_offset(offset, std)


def format_layout(instant: Instant, layout: str) -> str:
    """Render *instant* according to the reference-time *layout*."""
    moment = instant.moment
    nanos = moment.microsecond * 1000 + instant.nanosecond
    return "".join(
        chunk if isinstance(chunk, str) else _format_token(chunk, moment, nanos)
        for chunk in tokenize(layout)
    )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class _BadValue(Exception):
    """The value does not match the current token (internal signal)."""


def _time_zone_length(value: str) -> int:
    """Length of the zone abbreviation at the start of *value*, 0 if none.

    Accepts three upper-case letters, four ending in T (plus WITA), five
    ending in T, the specials ChST and MeST, ``GMT`` with an optional hour
    offset, and bare ``+hh`` / ``-hh`` names.
    """
    if len(value) < 3:
        return 0
    if value[:4] in ("ChST", "MeST"):
        return 4
    if value.startswith("GMT"):
        return 3 + _signed_offset_length(value[3:])
    if value[0] in "+-":
        return _signed_offset_length(value)

    upper = 0
    while upper < 6 and upper < len(value) and "A" <= value[upper] <= "Z":
        upper += 1
    if upper == 3:
        return 3
    if upper == 4 and (value[3] == "T" or value[:4] == "WITA"):
        return 4
    if upper == 5 and value[4] == "T":
        return 5
    return 0


def _signed_offset_length(value: str) -> int:
    """Length of a ``+h`` / ``-hh`` hour offset (hour <= 23), 0 if none."""
    if not value or value[0] not in "+-":
        return 0
    n = 1
    while _is_digit(value, n):
        n += 1
    if n == 1 or int(value[1:n]) > 23:
        return 0
    return n


def _nanoseconds(fraction: str) -> int:
    """Convert ``.123`` / ``,123456789`` to nanoseconds (max 9 digits used)."""
    if not fraction or fraction[0] not in ".,":
        raise _BadValue
    digits = fraction[1:10]
    if not digits or not all("0" <= c <= "9" for c in digits):
        raise _BadValue
    return int(digits) * 10 ** (9 - len(digits))


class _LayoutReader:
    """Consumes a value against a tokenized layout, collecting fields."""

    def __init__(self, layout: str, value: str) -> None:
        self.layout = layout
        self.value = value
        self.rest = value

        self.year = DEFAULT_YEAR
        self.month = -1
        self.day = -1
        self.yday = -1
        self.hour = 0
        self.minute = 0
        self.second = 0
        self.nanos = 0
        self.pm = False
        self.am = False

        self.zone: tzinfo | None = None
        self.zone_offset: int | None = None
        self.zone_name = ""

    # -- Errors ---------------------------------------------------------

    def _cannot_parse(self, rest: str, element: str) -> PatternParseError:
        return PatternParseError(
            f'parsing time "{self.value}" as "{self.layout}": '
            f'cannot parse "{rest}" as "{element}"'
        )

    def _out_of_range(self, what: str) -> PatternParseError:
        return PatternParseError(f'parsing time "{self.value}": {what} out of range')

    # -- Primitive readers ----------------------------------------------

    def _skip(self, literal: str) -> None:
        prefix, rest = literal, self.rest
        while prefix:
            if prefix[0] == " ":
                if rest and rest[0] != " ":
                    raise self._cannot_parse(rest, literal)
                prefix = prefix.lstrip(" ")
                rest = rest.lstrip(" ")
                continue
            if not rest or rest[0] != prefix[0]:
                raise self._cannot_parse(rest, literal)
            prefix, rest = prefix[1:], rest[1:]
        self.rest = rest

    def _getnum(self, fixed: bool) -> int:
        """One or two digits; exactly two when *fixed*."""
        rest = self.rest
        if not _is_digit(rest, 0):
            raise _BadValue
        if not _is_digit(rest, 1):
            if fixed:
                raise _BadValue
            self.rest = rest[1:]
            return int(rest[0])
        self.rest = rest[2:]
        return int(rest[:2])

    def _getnum3(self, fixed: bool) -> int:
        """One to three digits; exactly three when *fixed*."""
        rest = self.rest
        n = 0
        while n < 3 and _is_digit(rest, n):
            n += 1
        if n == 0 or (fixed and n != 3):
            raise _BadValue
        self.rest = rest[n:]
        return int(rest[:n])

    def _lookup(self, names: tuple[str, ...]) -> int:
        for index, name in enumerate(names):
            if self.rest[: len(name)].lower() == name.lower():
                self.rest = self.rest[len(name):]
                return index
        raise _BadValue

    def _take_digits(self, n: int) -> int:
        head = self.rest[:n]
        if len(head) < n or not all("0" <= c <= "9" for c in head):
            raise _BadValue
        self.rest = self.rest[n:]
        return int(head)

    # -- Token handlers -------------------------------------------------

    def _read_offset(self, std: Std) -> None:
        rest = self.rest
        if std in (Std.ISO_COLON_TZ, Std.NUM_COLON_TZ):
            if len(rest) < 6 or rest[3] != ":":
                raise _BadValue
            sign, hh, mm, ss, rest = rest[0], rest[1:3], rest[4:6], "00", rest[6:]
        elif std in _SHORT_STDS:
            if len(rest) < 3:
                raise _BadValue
            sign, hh, mm, ss, rest = rest[0], rest[1:3], "00", "00", rest[3:]
        elif std in (Std.ISO_COLON_SECONDS_TZ, Std.NUM_COLON_SECONDS_TZ):
            if len(rest) < 9 or rest[3] != ":" or rest[6] != ":":
                raise _BadValue
            sign, hh, mm, ss, rest = rest[0], rest[1:3], rest[4:6], rest[7:9], rest[9:]
        elif std in (Std.ISO_SECONDS_TZ, Std.NUM_SECONDS_TZ):
            if len(rest) < 7:
                raise _BadValue
            sign, hh, mm, ss, rest = rest[0], rest[1:3], rest[3:5], rest[5:7], rest[7:]
        else:
            if len(rest) < 5:
                raise _BadValue
            sign, hh, mm, ss, rest = rest[0], rest[1:3], rest[3:5], "00", rest[5:]

        if sign not in "+-" or not all(len(p) == 2 and p.isascii() and p.isdigit() for p in (hh, mm, ss)):
            raise _BadValue
        hours, minutes, seconds = int(hh), int(mm), int(ss)
        # Offsets of 24 hours / 60 minutes are written by some producers
        if hours > 24:
            raise self._out_of_range("time zone offset hour")
        if minutes > 60:
            raise self._out_of_range("time zone offset minute")
        if seconds > 60:
            raise self._out_of_range("time zone offset second")
        offset = (hours * 60 + minutes) * 60 + seconds
        self.zone_offset = -offset if sign == "-" else offset
        self.rest = rest

    def _read(self, token: Token, following: tuple[str | Token, ...]) -> None:
        std = token.std

        if std is Std.YEAR:
            year = self._take_digits(2)
            self.year = year + (1900 if year >= 69 else 2000)
        elif std is Std.LONG_YEAR:
            self.year = self._take_digits(4)
        elif std is Std.MONTH:
            self.month = self._lookup(SHORT_MONTHS) + 1
        elif std is Std.LONG_MONTH:
            self.month = self._lookup(LONG_MONTHS) + 1
        elif std in (Std.NUM_MONTH, Std.ZERO_MONTH):
            self.month = self._getnum(std is Std.ZERO_MONTH)
            if not 1 <= self.month <= 12:
                raise self._out_of_range("month")
        elif std is Std.WEEKDAY:
            self._lookup(SHORT_DAYS)
        elif std is Std.LONG_WEEKDAY:
            self._lookup(LONG_DAYS)
        elif std in (Std.DAY, Std.UNDER_DAY, Std.ZERO_DAY):
            if std is Std.UNDER_DAY and self.rest.startswith(" "):
                self.rest = self.rest[1:]
            # Any one- or two-digit day; checked against the month later
            self.day = self._getnum(std is Std.ZERO_DAY)
        elif std in (Std.UNDER_YEARDAY, Std.ZERO_YEARDAY):
            for _ in range(2):
                if std is Std.UNDER_YEARDAY and self.rest.startswith(" "):
                    self.rest = self.rest[1:]
            self.yday = self._getnum3(std is Std.ZERO_YEARDAY)
        elif std is Std.HOUR:
            self.hour = self._getnum(False)
            if self.hour >= 24:
                raise self._out_of_range("hour")
        elif std in (Std.HOUR12, Std.ZERO_HOUR12):
            self.hour = self._getnum(std is Std.ZERO_HOUR12)
            if self.hour > 12:
                raise self._out_of_range("hour")
        elif std in (Std.MINUTE, Std.ZERO_MINUTE):
            self.minute = self._getnum(std is Std.ZERO_MINUTE)
            if self.minute >= 60:
                raise self._out_of_range("minute")
        elif std in (Std.SECOND, Std.ZERO_SECOND):
            self.second = self._getnum(std is Std.ZERO_SECOND)
            if self.second >= 60:
                raise self._out_of_range("second")
            self._read_implicit_fraction(following)
        elif std in (Std.PM, Std.PM_LOWER):
            marker = self.rest[:2]
            if len(marker) < 2:
                raise _BadValue
            pm, am = ("PM", "AM") if std is Std.PM else ("pm", "am")
            if marker == pm:
                self.pm = True
            elif marker == am:
                self.am = True
            else:
                raise _BadValue
            self.rest = self.rest[2:]
        elif std in _OFFSET_STDS:
            if std in _ISO_STDS and self.rest.startswith("Z"):
                self.rest = self.rest[1:]
                self.zone = timezone.utc
            else:
                self._read_offset(std)
        elif std is Std.TZ:
            if self.rest.startswith("UTC"):
                self.rest = self.rest[3:]
                self.zone = timezone.utc
                return
            n = _time_zone_length(self.rest)
            if n == 0:
                raise _BadValue
            self.zone_name, self.rest = self.rest[:n], self.rest[n:]
        elif std is Std.FRAC_SECOND0:
            # Exactly as many digits as the layout shows
            width = 1 + token.digits
            if len(self.rest) < width:
                raise _BadValue
            self.nanos = _nanoseconds(self.rest[:width])
            self.rest = self.rest[width:]
        elif std is Std.FRAC_SECOND9:
            rest = self.rest
            if len(rest) < 2 or rest[0] not in ".," or not _is_digit(rest, 1):
                return  # fraction omitted
            n = 1
            while _is_digit(rest, n):
                n += 1
            self.nanos = _nanoseconds(rest[:n])
            self.rest = rest[n:]

    def _read_implicit_fraction(self, following: tuple[str | Token, ...]) -> None:
        """Accept ``.123`` after the seconds when the layout has no fraction."""
        rest = self.rest
        if not (len(rest) >= 2 and rest[0] in ".," and _is_digit(rest, 1)):
            return
        upcoming = next((c for c in following if isinstance(c, Token)), None)
        if upcoming is not None and upcoming.std in _FRAC_STDS:
            return
        n = 2
        while _is_digit(rest, n):
            n += 1
        self.nanos = _nanoseconds(rest[:n])
        self.rest = rest[n:]

    # -- Assembly -------------------------------------------------------

    def read(self) -> Instant:
        chunks = tokenize(self.layout)
        for index, chunk in enumerate(chunks):
            if isinstance(chunk, str):
                self._skip(chunk)
                continue
            hold = self.rest
            try:
                self._read(chunk, chunks[index + 1:])
            except _BadValue:
                raise self._cannot_parse(hold, chunk.text) from None
        if self.rest:
            raise PatternParseError(
                f'parsing time "{self.value}": extra text: "{self.rest}"'
            )
        return self._build()

    def _resolve_date(self) -> tuple[int, int]:
        if self.yday < 0:
            return max(self.month, 1), max(self.day, 1)
        days_in_year = 366 if calendar.isleap(self.year) else 365
        if not 1 <= self.yday <= days_in_year:
            raise self._out_of_range("day-of-year")
        d = date(self.year, 1, 1) + timedelta(days=self.yday - 1)
        if self.month >= 0 and self.month != d.month:
            raise PatternParseError(
                f'parsing time "{self.value}": day-of-year does not match month'
            )
        if self.day >= 0 and self.day != d.day:
            raise PatternParseError(
                f'parsing time "{self.value}": day-of-year does not match day'
            )
        return d.month, d.day

    def _build(self) -> Instant:
        if self.pm and self.hour < 12:
            self.hour += 12
        elif self.am and self.hour == 12:
            self.hour = 0

        if not 1 <= self.year <= 9999:
            raise self._out_of_range("year")
        month, day = self._resolve_date()
        if not 1 <= day <= calendar.monthrange(self.year, month)[1]:
            raise self._out_of_range("day")

        wall = datetime(
            self.year, month, day, self.hour, self.minute, self.second,
            self.nanos // 1000,
        )
        sub_micro = self.nanos % 1000

        if self.zone is not None:
            return Instant(wall.replace(tzinfo=self.zone), sub_micro)
        if self.zone_offset is not None:
            return Instant(self._offset_moment(wall), sub_micro)
        if self.zone_name:
            return Instant(self._named_moment(wall), sub_micro)
        return Instant(wall.replace(tzinfo=timezone.utc), sub_micro)

    def _offset_moment(self, wall: datetime) -> datetime:
        """Wall time at a numeric offset; adopt the local zone if it agrees."""
        offset = timedelta(seconds=self.zone_offset or 0)
        if abs(offset) >= timedelta(hours=24):
            raise self._out_of_range("time zone offset hour")
        moment = wall.replace(tzinfo=timezone(offset))
        try:
            local = moment.astimezone(local_zone())
        except (OverflowError, ValueError):
            local = None
        if (
            local is not None
            and local.utcoffset() == offset
            and (not self.zone_name or local.tzname() == self.zone_name)
        ):
            return local
        # An empty name keeps MST-style formatting on the -0700 fallback
        return wall.replace(tzinfo=timezone(offset, self.zone_name))

    def _named_moment(self, wall: datetime) -> datetime:
        """Wall time in a zone known only by abbreviation."""
        local = local_zone()
        for fold in (0, 1):
            candidate = wall.replace(tzinfo=local, fold=fold)
            if candidate.tzname() == self.zone_name:
                return candidate

        # Abbreviation used by the local zone at some other time (EDT in January)
        known = _abbreviation_offsets(local).get(self.zone_name)
        if known is not None:
            logger.debug("Zone %r read at local zone offset %s", self.zone_name, known)
            return wall.replace(tzinfo=timezone(known, self.zone_name))

        # Unknown abbreviation: keep the name, assume offset 0 unless GMT+h
        offset = 0
        if len(self.zone_name) > 3 and self.zone_name.startswith("GMT"):
            offset = int(self.zone_name[3:]) * 3600
        logger.debug("Zone %r not in local zone; using offset %ds", self.zone_name, offset)
        return wall.replace(tzinfo=timezone(timedelta(seconds=offset), self.zone_name))


@lru_cache(maxsize=8)
def _abbreviation_offsets(zone: tzinfo) -> dict[str, timedelta]:
    """Map each abbreviation *zone* has used since 1900 to its UTC offset.

    Samples the 1st and 15th of every month, newest year first, so an
    abbreviation whose offset changed keeps its most recent one.
    """
    offsets: dict[str, timedelta] = {}
    for year in range(2037, 1899, -1):
        for month in range(1, 13):
            for day in (1, 15):
                sample = datetime(year, month, day, 12, tzinfo=zone)
                name = sample.tzname()
                offset = sample.utcoffset()
                if name and offset is not None:
                    offsets.setdefault(name, offset)
    return offsets


def parse_layout(layout: str, value: str) -> Instant:
    """Parse *value* against the reference-time *layout*.

    Raises:
        PatternParseError: If *value* does not match *layout*.
    """
    return _LayoutReader(layout, value).read()


class ReferenceLayoutParser(BaseParser):
    """Parser for named layouts and raw reference-time layouts."""

    def parse(self, text: str) -> Instant:
        return parse_layout(self.spec.pattern, text)

    def format(self, instant: Instant) -> str:
        return format_layout(instant, self.spec.pattern)
