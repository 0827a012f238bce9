"""
Format guessing for tconv.

Uses the ordered rule table in tconv/layouts/guess_rules.yaml instead of
trying every format blindly. Each rule pairs a shape regex with the formats
worth trying when the regex is found in the input.

Guessing algorithm:
1. Walk the rules in file order.
2. Skip a rule whose regex is not found anywhere in the input.
3. Try the rule's formats in order; the first that parses wins.
4. A format that fails is skipped; a later rule may still list it again.
5. Fallback: raise UnknownFormatError naming the input.

There is no scoring. The first success in rule order is the answer, which
keeps results deterministic and easy to reason about.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tconv.convert import string_to_time
from tconv.exceptions import ConversionError, UnknownFormatError
from tconv.instant import Instant
from tconv.layout_registry import GuessRule, load_guess_rules

logger = logging.getLogger(__name__)


def guess_time(text: str, rules: Sequence[GuessRule] | None = None) -> Instant:
    """Parse *text* with the first matching rule's first working format.

    Args:
        text: The value to parse.
        rules: Rule table to use. Defaults to the packaged table.

    Returns:
        The parsed Instant.

    Raises:
        UnknownFormatError: If no candidate of any matching rule parses.
    """
    if rules is None:
        rules = load_guess_rules()

    last_error: ConversionError | None = None
    for rule in rules:
        if not rule.matches(text):
            continue
        logger.debug("Rule %r matches %r", rule.pattern, text)
        for fmt in rule.formats:
            try:
                instant = string_to_time(text, fmt)
            except ConversionError as e:
                logger.debug("  %s: %s", fmt, e)
                last_error = e
                continue
            logger.debug("  %s: ok", fmt)
            return instant

    raise UnknownFormatError(f"Unknown format: {text}") from last_error
