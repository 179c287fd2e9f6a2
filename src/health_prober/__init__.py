"""Health Prober - URL reachability checks, single and in bulk."""

__version__ = "1.0.0"

from health_prober.core.config import Settings
from health_prober.core.models import ProbeResult, Status
from health_prober.prober import BatchCoordinator, ProberEngine

__all__ = [
    "Settings",
    "ProbeResult",
    "Status",
    "ProberEngine",
    "BatchCoordinator",
]
