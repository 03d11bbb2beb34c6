"""Repeated probing and the statistics derived from it."""

from __future__ import annotations

from ._logging import logger
from ._models import ProbeOutcome, ProbeStatistics, Reply
from ._prober import Prober


def loss_percent(sent: int, received: int, *, exact: bool = False) -> float:
    """Packet loss as a percentage of ``sent``.

    By default the received/sent ratio is truncated to an integer first, so
    any loss at all reports 100%. ``exact=True`` uses the true ratio.
    """
    if not sent:
        return 0.0
    if exact:
        return (1 - received / sent) * 100
    return float((1 - received // sent) * 100)


def summarize(outcomes: list[ProbeOutcome], *, exact_loss: bool = False) -> ProbeStatistics:
    rtts = [outcome.rtt_ms for outcome in outcomes if isinstance(outcome, Reply)]
    sent = len(outcomes)
    received = len(rtts)
    total = sum(rtts)
    average = total / received if received else 0.0
    return ProbeStatistics(
        sent=sent,
        received=received,
        total_latency_ms=total,
        average_latency_ms=average,
        loss_percent=loss_percent(sent, received, exact=exact_loss),
    )


def aggregate(
    prober: Prober,
    host: str,
    packets: int,
    timeout: float,
    *,
    exact_loss: bool = False,
) -> ProbeStatistics:
    """Probe ``host`` ``packets`` times, one after another."""
    outcomes: list[ProbeOutcome] = []

    logger.info("Starting ping to %s (%d probes, timeout %ss)", host, packets, timeout)
    for idx in range(packets):
        logger.debug("Sending ping %d/%d to %s", idx + 1, packets, host)
        outcome = prober.probe(host, timeout)
        outcomes.append(outcome)
        logger.debug("Ping %d: %s", idx + 1, outcome)

    stats = summarize(outcomes, exact_loss=exact_loss)
    logger.info(
        "Ping stats -> sent: %d received: %d loss: %.0f%% avg: %.3f ms",
        stats.sent,
        stats.received,
        stats.loss_percent,
        stats.average_latency_ms,
    )
    return stats
