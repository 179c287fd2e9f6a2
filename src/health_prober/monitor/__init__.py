"""Monitor module - Polling status indicator."""

from health_prober.monitor.indicator import (
    HealthCheckIndicator,
    IndicatorState,
    LocalHealthChecker,
    ServiceHealthClient,
)

__all__ = [
    "HealthCheckIndicator",
    "IndicatorState",
    "LocalHealthChecker",
    "ServiceHealthClient",
]
