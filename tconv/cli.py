"""
Command-line interface for tconv.

    tconv 1136239445                       # guess input, print RFC3339
    tconv -o kitchen -z Asia/Tokyo 2006-01-02T15:04:05Z
    tconv -n -o unix-milli                 # current time
    tail -f app.log | tconv -g '\\d{10}' -o datetime

Values come from the arguments, or from stdin when there are none. Errors
go to stderr as ``Error: <message>`` with exit status 1.
"""

from __future__ import annotations

import logging
import sys

import click
import yaml
from pydantic import ValidationError

from tconv.config import ConvertConfig, load_config, resolve_options
from tconv.exceptions import TconvError
from tconv.layout_registry import format_examples
from tconv.processor import run

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def _format_epilog() -> str:
    rows = format_examples()
    width = max(len(label) for label, _ in rows)
    lines = ["\b", "Formats:"]
    lines += [f"  {label:<{width}}  {example}" for label, example in rows]
    lines += ["", "Any other text is used as a layout of the reference time, e.g. '2006/01/02 15:04'."]
    return "\n".join(lines)


def _setup_logging(verbose: int) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_format_epilog(),
)
@click.argument("values", nargs=-1, metavar="[VALUES]...")
@click.option("-i", "--in", "input_format", metavar="FORMAT",
              help="Input format; guessed when omitted.")
@click.option("-o", "--out", "output_format", metavar="FORMAT",
              help="Output format.  [default: rfc3339]")
@click.option("-n", "--now", is_flag=True, default=False,
              help="Convert the current time and ignore input.")
@click.option("-a", "--add", metavar="DURATION", help="Add a duration, e.g. 1h30m.")
@click.option("-s", "--sub", metavar="DURATION", help="Subtract a duration, e.g. 15m.")
@click.option("-z", "--loc", "location", metavar="ZONE",
              help="Output timezone: IANA name, UTC or Local.  [default: Local]")
@click.option("-g", "--grep", "pattern", metavar="REGEX",
              help="Convert only the substrings matching REGEX.")
@click.option("-c", "--config", "config_path",
              type=click.Path(exists=True, dir_okay=False),
              help="YAML file with default values for the options above.")
@click.option("-v", "--verbose", count=True, help="Log debug output to stderr.")
def main(
    values: tuple[str, ...],
    input_format: str | None,
    output_format: str | None,
    now: bool,
    add: str | None,
    sub: str | None,
    location: str | None,
    pattern: str | None,
    config_path: str | None,
    verbose: int,
) -> None:
    """Convert time values between formats and timezones."""
    _setup_logging(verbose)

    try:
        config = load_config(config_path) if config_path else ConvertConfig()
        config = config.with_overrides(
            input_format=input_format,
            output_format=output_format,
            now=True if now else None,
            add=add,
            sub=sub,
            location=location,
            pattern=pattern,
        )
        options = resolve_options(config)
        for line in run(options, values, sys.stdin):
            click.echo(line)
    except (TconvError, ValidationError, yaml.YAMLError) as e:
        logger.debug("Aborting: %r", e)
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":  # pragma: no cover
    main()
