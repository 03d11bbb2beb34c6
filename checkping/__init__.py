from ._aggregate import aggregate, loss_percent, summarize
from ._config import CheckConfig
from ._evaluate import evaluate
from ._exceptions import (
    CheckPingError,
    ConfigurationError,
    RawSocketPermissionError,
    ThresholdFormatError,
    TransportError,
)
from ._icmp import Icmp
from ._models import (
    Error,
    Idle,
    ProbeOutcome,
    ProbeStatistics,
    Reply,
    Status,
    ThresholdSpec,
    Verdict,
)
from ._prober import EchoProber, Prober
from ._thresholds import clamp_thresholds, parse_threshold
from .main import run

__all__ = [
    "aggregate",
    "loss_percent",
    "summarize",
    "CheckConfig",
    "evaluate",
    "CheckPingError",
    "ConfigurationError",
    "RawSocketPermissionError",
    "ThresholdFormatError",
    "TransportError",
    "Icmp",
    "Error",
    "Idle",
    "ProbeOutcome",
    "ProbeStatistics",
    "Reply",
    "Status",
    "ThresholdSpec",
    "Verdict",
    "EchoProber",
    "Prober",
    "clamp_thresholds",
    "parse_threshold",
    "run",
]
