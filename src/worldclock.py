from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import TextIO

from dotenv import find_dotenv, load_dotenv

from clocks.config import default_config_path, load_clock_specs
from clocks.errors import WorldClockError
from clocks.formatter import render_clocks
from clocks.output import write_lines
from clocks.resolver import resolve_clocks
from clocks.timesource import Clock, FixedClock, SystemClock

_LOGGER_NAME = "clocks"

_CONFIG_HELP = """\
Path to the TOML file listing the clocks to display.
Default: $WORLDCLOCK_CONFIG, then ~/.config/worldclock.toml.

The file holds a series of [[clocks]] tables, each with an optional
`tz` (IANA name, see `timedatectl list-timezones`) and an optional
`name`. A clock without `tz` shows local time; a clock without `name`
is labelled with its timezone.

    [[clocks]]

    [[clocks]]
    tz = "Europe/Berlin"

    [[clocks]]
    name = "Costa Rica"
    tz = "America/Costa_Rica"
"""


def _parse_time(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 time: {raw!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worldclock",
        description="Shows the current time in multiple time zones.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_CONFIG_HELP,
    )
    parser.add_argument("-c", "--config", type=Path, default=None, help="Config file path.")
    parser.add_argument(
        "-t",
        "--time",
        type=_parse_time,
        default=None,
        help="Show this ISO 8601 time instead of now. Naive values are local time.",
    )
    parser.add_argument(
        "-u", "--utc", action="store_true", help="Interpret a naive --time as UTC."
    )
    parser.add_argument(
        "--no-align", dest="align", action="store_false", help="Do not pad labels to one width."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def _configure_logging(stream: TextIO) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger = logging.getLogger(_LOGGER_NAME)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def _build_clock(
    args: argparse.Namespace, local_zone: tzinfo | None, clock: Clock | None
) -> Clock:
    if args.time is None:
        return clock or SystemClock()
    instant: datetime = args.time
    if instant.tzinfo is None:
        if args.utc:
            instant = instant.replace(tzinfo=timezone.utc)
        elif local_zone is not None:
            instant = instant.replace(tzinfo=local_zone)
        else:
            instant = instant.astimezone()
    return FixedClock(instant.astimezone(timezone.utc))


def run(
    config_path: Path,
    clock: Clock,
    out_stream: TextIO,
    local_zone: tzinfo | None = None,
    align: bool = True,
) -> None:
    specs = load_clock_specs(config_path)
    resolved = resolve_clocks(specs)
    instant = clock.now()
    write_lines(render_clocks(resolved, instant, local_zone=local_zone, align=align), out_stream)


def main(
    argv: list[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    clock: Clock | None = None,
    local_zone: tzinfo | None = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.utc and args.time is None:
        parser.error("--utc can only be used with --time.")

    out_stream = stdout or sys.stdout
    err_stream = stderr or sys.stderr
    handler = _configure_logging(err_stream) if args.verbose else None

    load_dotenv(find_dotenv(usecwd=True), override=False)
    try:
        config_path = args.config or default_config_path()
        run(
            config_path,
            _build_clock(args, local_zone, clock),
            out_stream,
            local_zone=local_zone,
            align=args.align,
        )
        return 0
    except WorldClockError as exc:
        print(f"worldclock: {exc}", file=err_stream)
        return 2
    finally:
        if handler is not None:
            logging.getLogger(_LOGGER_NAME).removeHandler(handler)
            logging.getLogger(_LOGGER_NAME).setLevel(logging.NOTSET)


if __name__ == "__main__":
    raise SystemExit(main())
