"""Prober module - Single and batch reachability probes."""

from health_prober.prober.batch import BatchCoordinator
from health_prober.prober.classifier import classify_status_code
from health_prober.prober.engine import ProberEngine

__all__ = [
    "ProberEngine",
    "BatchCoordinator",
    "classify_status_code",
]
