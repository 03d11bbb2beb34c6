"""Single-echo probing with a tagged outcome."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ._exceptions import TransportError
from ._icmp import Icmp
from ._logging import logger
from ._models import Error, Idle, ProbeOutcome, Reply


class Prober(ABC):
    @abstractmethod
    def probe(self, host: str, timeout: float) -> ProbeOutcome:
        """Send exactly one echo to ``host`` and report what happened."""
        raise NotImplementedError


class EchoProber(Prober):
    """Probe through a fresh :class:`Icmp` session per call.

    The session's socket is closed before :meth:`probe` returns, whether the
    attempt ended with a reply, an idle timeout or an error.
    """

    def __init__(self, transport_factory: Callable[[float], Icmp] = Icmp):
        self.transport_factory = transport_factory

    def probe(self, host: str, timeout: float) -> ProbeOutcome:
        try:
            with self.transport_factory(timeout) as icmp:
                resolved = icmp.resolve_destination(host)
                response = icmp.echo(resolved)
        except TransportError as exc:
            logger.warning("Ping error: %s", exc)
            return Error(cause=str(exc))

        if response is None:
            logger.info("Ping %s: timed out after %ss", host, timeout)
            return Idle()

        logger.info(
            "Reply from %s: time=%.3f ms (seq=%d)",
            response.addr,
            response.rtt,
            response.sequence,
        )
        return Reply(rtt_ms=response.rtt)
