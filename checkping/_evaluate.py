"""Severity decision over aggregated ping statistics."""

from __future__ import annotations

from ._models import ProbeStatistics, ThresholdSpec, Verdict
from ._thresholds import clamp_thresholds

TOO_MANY_LOSS = "Too many PacketLoss. "
TOO_LONG_RTT = "Too long RTT. "


def evaluate(
    stats: ProbeStatistics,
    warning: ThresholdSpec,
    critical: ThresholdSpec,
    expected_packets: int,
) -> Verdict:
    """Classify ``stats``; the first matching rule wins.

    A run that did not send ``expected_packets`` is UNKNOWN. Otherwise loss
    is checked before latency at each level, critical before warning.
    """
    warning, critical = clamp_thresholds(warning, critical)
    msg = str(stats)
    loss = stats.loss_percent
    avg = stats.average_latency_ms

    if stats.sent != expected_packets:
        return Verdict.unknown(msg)

    if loss < warning.packet_loss and avg < warning.latency_ms:
        return Verdict.ok(msg)

    if loss >= critical.packet_loss:
        return Verdict.critical(TOO_MANY_LOSS + msg)
    if avg >= critical.latency_ms:
        return Verdict.critical(TOO_LONG_RTT + msg)
    if loss >= warning.packet_loss:
        return Verdict.warning(TOO_MANY_LOSS + msg)
    if avg >= warning.latency_ms:
        return Verdict.warning(TOO_LONG_RTT + msg)
    # only reachable with NaN thresholds
    return Verdict.unknown("Unexpected reach to end of evaluation")
