from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ._exceptions import ConfigurationError

DEFAULT_WARNING = "800, 20%"
DEFAULT_CRITICAL = "1000, 40%"
DEFAULT_PACKETS = 5
DEFAULT_TIMEOUT = 10


@dataclass(frozen=True)
class CheckConfig:
    """Options for one check run, with defaults already applied."""

    host: str
    warning: str = DEFAULT_WARNING
    critical: str = DEFAULT_CRITICAL
    packets: int = DEFAULT_PACKETS
    timeout: int = DEFAULT_TIMEOUT
    exact_loss: bool = False

    @classmethod
    def from_options(
        cls,
        host: Optional[str],
        warning: Optional[str] = None,
        critical: Optional[str] = None,
        packets: Optional[int] = None,
        timeout: Optional[int] = None,
        exact_loss: bool = False,
    ) -> "CheckConfig":
        """Build a config from raw flag values.

        Empty strings and zero counts mean "use the default", as unset flags
        do. Raises :class:`ConfigurationError` for a missing host or a
        negative packet count or timeout.
        """
        if not host:
            raise ConfigurationError("Host is required")
        if packets is not None and packets < 0:
            raise ConfigurationError(f"packets must not be negative: {packets}")
        if timeout is not None and timeout < 0:
            raise ConfigurationError(f"timeout must not be negative: {timeout}")

        return cls(
            host=host,
            warning=warning or DEFAULT_WARNING,
            critical=critical or DEFAULT_CRITICAL,
            packets=packets or DEFAULT_PACKETS,
            timeout=timeout or DEFAULT_TIMEOUT,
            exact_loss=exact_loss,
        )
