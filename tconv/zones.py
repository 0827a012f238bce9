"""
Timezone loading for tconv.

- ``local_zone()`` figures out the machine's zone once per process:
  the ``TZ`` environment variable first (an empty ``TZ`` means UTC), then
  ``/etc/localtime``, then the fixed offset the platform reports.
- ``resolve_location(name)`` turns a ``--loc`` value into a tzinfo.
  Empty or ``"Local"`` means the local zone; anything else is an IANA
  name loaded through ``zoneinfo``.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone, tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tconv.exceptions import LocationResolutionError

logger = logging.getLogger(__name__)

_LOCALTIME = Path("/etc/localtime")


def _zone_from_env(value: str) -> tzinfo | None:
    """Load the zone named by a ``TZ`` value, or ``None`` if unusable."""
    name = value.lstrip(":")
    if not name or name == "UTC":
        return timezone.utc
    try:
        if os.path.isabs(name):
            with open(name, "rb") as f:
                return ZoneInfo.from_file(f, key="Local")
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.debug("Ignoring TZ=%r: %s", value, e)
        return None


@lru_cache(maxsize=1)
def local_zone() -> tzinfo:
    """Return the local timezone (cached; call ``cache_clear()`` after changing TZ)."""
    env = os.environ.get("TZ")
    if env is not None:
        zone = _zone_from_env(env)
        if zone is not None:
            logger.debug("Local zone from TZ=%r", env)
            return zone

    try:
        with open(_LOCALTIME, "rb") as f:
            zone = ZoneInfo.from_file(f, key="Local")
        logger.debug("Local zone from %s", _LOCALTIME)
        return zone
    except (OSError, ValueError) as e:
        logger.debug("Could not read %s: %s", _LOCALTIME, e)

    # No tz database available: fixed offset, no DST transitions.
    return datetime.now().astimezone().tzinfo or timezone.utc


def resolve_location(name: str | None) -> tzinfo:
    """Resolve a ``--loc`` value to a tzinfo.

    Raises:
        LocationResolutionError: If *name* is not a known zone.
    """
    if not name or name == "Local":
        return local_zone()
    if name == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise LocationResolutionError(f"unknown time zone {name}") from e
