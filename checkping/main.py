"""Command line entry point: run the check, print one status line, exit."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from rich.console import Console

from ._aggregate import aggregate
from ._config import CheckConfig
from ._evaluate import evaluate
from ._exceptions import ConfigurationError
from ._logging import configure_logging, logger
from ._models import Verdict
from ._prober import EchoProber, Prober
from ._thresholds import parse_threshold

EXIT_USAGE = 1

stdout = Console(soft_wrap=True, highlight=False)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="check-ping",
        description="Ping a host and report RTT and packet loss as a check result",
    )
    parser.add_argument(
        "-H", "--host", metavar="Host", help="host name or IP address to send ping"
    )
    parser.add_argument(
        "-w",
        "--warning",
        metavar="N, N%",
        default="",
        help="WARNING if average RTT reaches N ms or packet loss reaches N%% "
        "(default: 800, 20%%)",
    )
    parser.add_argument(
        "-c",
        "--critical",
        metavar="N, N%",
        default="",
        help="CRITICAL if average RTT reaches N ms or packet loss reaches N%% "
        "(default: 1000, 40%%)",
    )
    parser.add_argument(
        "-p", "--packets", type=int, default=0, help="packet count to send (default: 5)"
    )
    parser.add_argument(
        "-t", "--timeout", type=int, default=0, help="timeout per packet in seconds (default: 10)"
    )
    parser.add_argument(
        "--exact-loss",
        action="store_true",
        help="compute packet loss from the exact received/sent ratio",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress to stderr (-vv for debug)",
    )
    return parser


def run(config: CheckConfig, prober: Optional[Prober] = None) -> Verdict:
    """Probe ``config.host`` and evaluate the result."""
    try:
        warning = parse_threshold(config.warning)
        critical = parse_threshold(config.critical)
    except ConfigurationError as exc:
        logger.error(str(exc))
        return Verdict.unknown(str(exc))

    stats = aggregate(
        prober or EchoProber(),
        config.host,
        config.packets,
        config.timeout,
        exact_loss=config.exact_loss,
    )
    return evaluate(stats, warning, critical, config.packets)


def check(argv: Optional[Sequence[str]] = None, prober: Optional[Prober] = None) -> Verdict:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = CheckConfig.from_options(
            host=args.host,
            warning=args.warning,
            critical=args.critical,
            packets=args.packets,
            timeout=args.timeout,
            exact_loss=args.exact_loss,
        )
    except ConfigurationError as exc:
        logger.error(str(exc))
        return Verdict.unknown(str(exc))

    return run(config, prober)


def main(argv: Optional[Sequence[str]] = None) -> int:
    verdict = check(argv)
    stdout.print(str(verdict), markup=False)
    return verdict.exit_code


if __name__ == "__main__":
    sys.exit(main())
