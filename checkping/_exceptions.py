from __future__ import annotations


class CheckPingError(Exception):
    """Base class for every error raised by checkping."""


class ConfigurationError(CheckPingError, ValueError):
    """Raised when the check is invoked with unusable options."""


class ThresholdFormatError(ConfigurationError):
    """Raised when a ``"N, N%"`` threshold cannot be parsed."""


class TransportError(CheckPingError, OSError):
    """Raised by the ICMP transport when a probe cannot be carried out."""


class RawSocketPermissionError(TransportError, PermissionError):
    """Raised when raw socket creation fails due to missing privileges."""
