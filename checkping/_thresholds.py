"""Parsing of ``"N, N%"`` threshold options.

The first field is a round-trip time in milliseconds, the second a packet
loss percentage. Values are not range checked.
"""

from __future__ import annotations

import re

from ._exceptions import ThresholdFormatError
from ._models import ThresholdSpec

# optional sign and ASCII digits only
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_threshold(spec: str) -> ThresholdSpec:
    fields = spec.split(",")
    if len(fields) != 2:
        raise ThresholdFormatError(f"threshold {spec} is invalid format")

    rtt_field = fields[0].strip(" ")
    if not INTEGER_RE.fullmatch(rtt_field):
        raise ThresholdFormatError(
            f"threshold {spec} is invalid. err=not an integer: {rtt_field!r}"
        )
    latency_ms = int(rtt_field)

    loss_field = fields[1].strip(" ").strip("%")
    try:
        packet_loss = float(loss_field)
    except ValueError as exc:
        raise ThresholdFormatError(f"threshold {spec} is invalid. err={exc}") from exc

    return ThresholdSpec(latency_ms=latency_ms, packet_loss=packet_loss)


def clamp_thresholds(
    warning: ThresholdSpec, critical: ThresholdSpec
) -> tuple[ThresholdSpec, ThresholdSpec]:
    """Lower each warning component that exceeds its critical counterpart."""
    latency_ms = warning.latency_ms
    if latency_ms > critical.latency_ms:
        latency_ms = critical.latency_ms
    packet_loss = warning.packet_loss
    if packet_loss > critical.packet_loss:
        packet_loss = critical.packet_loss
    return ThresholdSpec(latency_ms=latency_ms, packet_loss=packet_loss), critical
