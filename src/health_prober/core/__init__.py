"""Core module - Configuration, models, errors, and logging."""

from health_prober.core.config import Settings
from health_prober.core.models import ProbeResult, Status

__all__ = [
    "Settings",
    "ProbeResult",
    "Status",
]
