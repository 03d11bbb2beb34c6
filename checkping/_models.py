from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


@dataclass(frozen=True)
class ThresholdSpec:
    latency_ms: int
    packet_loss: float

    def __str__(self) -> str:
        return f"{self.latency_ms}, {self.packet_loss:g}%"


@dataclass(frozen=True)
class Reply:
    rtt_ms: float
    kind: ClassVar[str] = "reply"

    @property
    def received(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"Reply: time={self.rtt_ms:.3f} ms"


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[str] = "idle"

    @property
    def received(self) -> bool:
        return False

    def __str__(self) -> str:
        return "Request timed out."


@dataclass(frozen=True)
class Error:
    cause: str
    kind: ClassVar[str] = "error"

    @property
    def received(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"Error: {self.cause}"


ProbeOutcome = Union[Reply, Idle, Error]


@dataclass(frozen=True)
class ProbeStatistics:
    sent: int
    received: int
    total_latency_ms: float
    average_latency_ms: float
    loss_percent: float

    @property
    def lost(self) -> int:
        return self.sent - self.received

    def __str__(self) -> str:
        return (
            f"Sent: {self.sent}, Recv: {self.received}, "
            f"RTT(Avg): {self.average_latency_ms:.3f}ms, "
            f"PacketLoss {self.loss_percent:.0f}%"
        )

    def __rich__(self) -> str:  # pragma: no cover - rich display helper
        return self.__str__()


class Status(Enum):
    """Check states, valued with the plugin exit code for each."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        return self.value


@dataclass(frozen=True)
class Verdict:
    status: Status
    message: str
    name: str = field(default="Ping", compare=False)

    @classmethod
    def ok(cls, message: str) -> "Verdict":
        return cls(Status.OK, message)

    @classmethod
    def warning(cls, message: str) -> "Verdict":
        return cls(Status.WARNING, message)

    @classmethod
    def critical(cls, message: str) -> "Verdict":
        return cls(Status.CRITICAL, message)

    @classmethod
    def unknown(cls, message: str) -> "Verdict":
        return cls(Status.UNKNOWN, message)

    @property
    def exit_code(self) -> int:
        return self.status.exit_code

    def __str__(self) -> str:
        return f"{self.name} {self.status.name}: {self.message}"

    def __rich__(self) -> str:  # pragma: no cover - rich display helper
        return self.__str__()
