"""
Duration strings for ``--add`` / ``--sub``.

Grammar: an optional sign, then either ``0`` or one or more
``<decimal><unit>`` components, e.g. ``1h``, ``1h30m``, ``1.5s``,
``-2m3.5s``, ``100ms``. Units: ns, us (also µs/μs), ms, s, m, h.

Values are computed in integer nanoseconds and truncated to the
microsecond resolution of ``timedelta``.
"""

from __future__ import annotations

import re
from datetime import timedelta

from tconv.exceptions import DurationParseError

# Nanoseconds per unit
_UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # Greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Raises:
        DurationParseError: If *text* is not a valid duration.
    """
    error = DurationParseError(f'time: invalid duration "{text}"')
    rest = text
    sign = 1
    if rest[:1] in ("-", "+"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise error

    nanos = 0
    pos = 0
    while pos < len(rest):
        m = _COMPONENT_RE.match(rest, pos)
        whole, frac, unit = m.group(1), m.group(2), m.group(3)
        if not whole and not frac:
            raise error
        if unit not in _UNITS:
            raise error
        scale = _UNITS[unit]
        nanos += int(whole or "0") * scale
        if frac:
            nanos += int(frac) * scale // 10 ** len(frac)
        pos = m.end()

    try:
        return timedelta(microseconds=sign * (nanos // 1000))
    except OverflowError as e:
        raise error from e
