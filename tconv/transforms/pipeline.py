"""
Transform pipeline for tconv.

Runs a fixed sequence of steps on a parsed Instant:

1. **Zone**: Re-express the instant in the target location (the absolute
   time does not change, only the wall clock and offset shown).
2. **Add**: Move forward by ``add``.
3. **Sub**: Move backward by ``sub``.

Both shifts are elapsed time on the absolute timeline, so the order of
steps 2 and 3 does not affect the result; only the display zone of step 1
matters for the output.
"""

from __future__ import annotations

import logging
from datetime import timedelta, tzinfo

from tconv.instant import Instant

logger = logging.getLogger(__name__)


class TransformPipeline:
    """Zone conversion followed by add/sub shifts.

    The pipeline is stateless; one instance can be reused for every value
    of a run.
    """

    def __init__(
        self,
        location: tzinfo,
        add: timedelta = timedelta(0),
        sub: timedelta = timedelta(0),
    ) -> None:
        self.location = location
        self.add = add
        self.sub = sub

    def run(self, instant: Instant) -> Instant:
        """Apply zone, add and sub to *instant*.

        Raises:
            TimeRangeError: If a shift leaves the representable range.
        """
        logger.debug("Step 1/3: Zone -> %s", self.location)
        instant = instant.in_zone(self.location)

        if self.add:
            logger.debug("Step 2/3: Add %s", self.add)
            instant = instant.shift(self.add)
        else:
            logger.debug("Step 2/3: Add SKIPPED (zero)")

        if self.sub:
            logger.debug("Step 3/3: Sub %s", self.sub)
            instant = instant.shift(-self.sub)
        else:
            logger.debug("Step 3/3: Sub SKIPPED (zero)")

        return instant


def transform(
    instant: Instant,
    location: tzinfo,
    add: timedelta = timedelta(0),
    sub: timedelta = timedelta(0),
) -> Instant:
    """Convert *instant* to *location*, then add *add* and subtract *sub*."""
    return TransformPipeline(location, add, sub).run(instant)
