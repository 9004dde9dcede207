"""Command-line entry point: ``check_graphite -u URL -m METRIC -w WARN -c CRIT``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Sequence

from pydantic import ValidationError

from check_graphite.core.config import CheckConfig, PluginSettings, get_settings
from check_graphite.core.errors import CheckError, UsageError
from check_graphite.integrations.graphite import GraphiteClient
from check_graphite.services.check import GraphiteCheck


logger = logging.getLogger("check_graphite")


class PluginArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports problems as UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = PluginArgumentParser(
        prog="check_graphite",
        usage="check_graphite [options]",
        description="Average a Graphite metric over a recent window and compare it to thresholds.",
        epilog=(
            "Thresholds run high-is-bad when --critical is above --warning and "
            "low-is-bad otherwise. Exit codes: 0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN."
        ),
    )
    parser.add_argument("-n", "--name", default="value", metavar="NAME", help="Descriptive name (default: value).")
    parser.add_argument("-u", "--url", default=None, metavar="URL", help="Graphite root URL.")
    parser.add_argument("-m", "--metric", default=None, metavar="NAME", help="Metric path string.")
    parser.add_argument(
        "-d",
        "--duration",
        type=int,
        default=5,
        metavar="LENGTH",
        help="Length in minutes of data to parse (default: 5).",
    )
    parser.add_argument("-w", "--warning", type=float, default=None, metavar="VALUE", help="Warning threshold.")
    parser.add_argument("-c", "--critical", type=float, default=None, metavar="VALUE", help="Critical threshold.")
    parser.add_argument(
        "-s",
        "--scale",
        type=float,
        default=1.0,
        metavar="VALUE",
        help="Scale adjustment (default: 1).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity on stderr (default: CHECK_GRAPHITE_LOG_LEVEL or WARNING).",
    )
    return parser


def build_config(args: argparse.Namespace, settings: PluginSettings) -> CheckConfig:
    """Validate parsed arguments and freeze them into a CheckConfig."""
    url = args.url or settings.graphite_url
    if not url:
        raise UsageError("You must specify --url")
    if not args.metric:
        raise UsageError("You must specify --metric")
    # A threshold of 0 is indistinguishable from an omitted one.
    if not args.warning:
        raise UsageError("You must specify --warning")
    if not args.critical:
        raise UsageError("You must specify --critical")
    if args.duration <= 0:
        raise UsageError("--duration must be a positive number of minutes")
    if args.scale <= 0:
        raise UsageError("--scale must be a positive number")

    try:
        return CheckConfig(
            name=args.name,
            base_url=url,
            target=args.metric,
            from_minutes=args.duration,
            warning=args.warning,
            critical=args.critical,
            scale=args.scale,
        )
    except ValidationError as exc:
        raise UsageError(f"Invalid options: {exc.errors()[0]['msg']}") from exc


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    settings = get_settings()

    try:
        args = parser.parse_args(argv)
        config = build_config(args, settings)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        print(parser.format_help(), end="")
        raise SystemExit(exc.exit_code) from exc

    _configure_logging(args.log_level or settings.log_level)

    check = GraphiteCheck(config, client=GraphiteClient.from_settings(settings))
    try:
        result = check.run()
    except CheckError as exc:
        logger.debug("Check %s failed", config.name, exc_info=exc)
        print(f"{config.name} UNKNOWN: {exc}", file=sys.stderr)
        raise SystemExit(exc.exit_code) from exc

    print(result.status_line)
    raise SystemExit(result.exit_code)


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
