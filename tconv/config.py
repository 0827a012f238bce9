"""
Configuration models and YAML I/O for tconv.

Key models:
- ConvertConfig: The raw option values (format names, duration strings,
  zone name, regex), as given on the command line or in a YAML file.
- ConvertOptions: The same options resolved into working objects
  (``timedelta``, ``tzinfo``, compiled regex). This is what the line
  processor consumes.

Key functions:
- load_config(path) -> ConvertConfig: Load and validate from YAML.
- resolve_options(config) -> ConvertOptions: Parse durations, load the
  zone, compile the pattern.

A config file holds defaults only; explicit command-line values win
(``ConvertConfig.with_overrides``). Example::

    output_format: rfc1123
    location: Asia/Tokyo
    add: 1h
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import timedelta, tzinfo
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from tconv.durations import parse_duration
from tconv.exceptions import ConfigValidationError, PatternCompileError
from tconv.zones import resolve_location

logger = logging.getLogger(__name__)


class ConvertConfig(BaseModel):
    """Option values before resolution.

    Raises ``pydantic.ValidationError`` on unknown keys or wrong types.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    input_format: str = Field(
        "", description="Input format name or pattern; empty means guess"
    )
    output_format: str = Field(
        "rfc3339", description="Output format name or pattern"
    )
    now: bool = Field(False, description="Convert the current time instead of input")
    add: str = Field("", description="Duration to add, e.g. '1h30m'")
    sub: str = Field("", description="Duration to subtract, e.g. '15m'")
    location: str = Field(
        "", description="Output zone: IANA name, 'UTC' or 'Local'; empty means local"
    )
    pattern: str = Field(
        "", description="Regex selecting the substrings to convert; empty means whole lines"
    )

    def with_overrides(self, **values: Any) -> ConvertConfig:
        """Return a copy with every non-None value in *values* applied."""
        updates = {k: v for k, v in values.items() if v is not None}
        if not updates:
            return self
        return ConvertConfig.model_validate({**self.model_dump(), **updates})


@dataclass(frozen=True)
class ConvertOptions:
    """Resolved options for one run.

    Attributes:
        input_format: Format identifier for input; ``""`` means guess.
        output_format: Format identifier for output.
        now: Use the current time instead of reading input.
        location: Output zone.
        add: Duration added after zone conversion.
        sub: Duration subtracted after ``add``.
        pattern: Compiled substitution regex, or ``None`` for whole-line mode.
    """

    input_format: str
    output_format: str
    now: bool
    location: tzinfo
    add: timedelta = timedelta(0)
    sub: timedelta = timedelta(0)
    pattern: re.Pattern[str] | None = None


def load_config(path: str | Path) -> ConvertConfig:
    """Load and validate a YAML config file into a ConvertConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must be a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded config from %s", path)
    return ConvertConfig.model_validate(raw)


def _duration(text: str) -> timedelta:
    return parse_duration(text) if text else timedelta(0)


def resolve_options(config: ConvertConfig) -> ConvertOptions:
    """Turn raw option values into working objects.

    Raises:
        DurationParseError: If ``add`` or ``sub`` is malformed.
        LocationResolutionError: If ``location`` is not a known zone.
        PatternCompileError: If ``pattern`` is not a valid regex.
    """
    pattern = None
    if config.pattern:
        try:
            pattern = re.compile(config.pattern)
        except re.error as e:
            raise PatternCompileError(
                f"invalid pattern {config.pattern!r}: {e}"
            ) from e

    options = ConvertOptions(
        input_format=config.input_format,
        output_format=config.output_format,
        now=config.now,
        location=resolve_location(config.location),
        add=_duration(config.add),
        sub=_duration(config.sub),
        pattern=pattern,
    )
    logger.debug("Resolved options: %s", options)
    return options
