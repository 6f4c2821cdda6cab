"""
Errors raised by the external sink adapters and their construction.
"""

from __future__ import annotations


class SinkError(RuntimeError):
    """Raised when a call to an external sink (ledger or notifier) fails."""
    pass


class StartupError(RuntimeError):
    """Raised when required configuration or a sink client is unusable at startup."""
    pass


__all__ = ["SinkError", "StartupError"]
