"""Polling health indicator.

Mirrors the dashboard status light: it checks a URL once when started and
then on a fixed interval, and exposes one of four display states.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

import httpx

from health_prober.core.config import IndicatorSettings
from health_prober.core.logging import get_logger
from health_prober.core.models import Status
from health_prober.prober.engine import ProberEngine

logger = get_logger(__name__)


class IndicatorState(str, Enum):
    """What the indicator currently shows."""

    CHECKING = "checking"
    ONLINE = "online"
    OFFLINE = "offline"
    DISABLED = "disabled"


TITLES = {
    IndicatorState.ONLINE: "Service is online",
    IndicatorState.OFFLINE: "Service is offline",
    IndicatorState.CHECKING: "Checking status...",
    IndicatorState.DISABLED: "",
}


class HealthChecker(Protocol):
    async def is_online(self, url: str) -> bool: ...


class ServiceHealthClient:
    """Asks a running health-prober service about a URL."""

    def __init__(
        self,
        base_url: str,
        route_prefix: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = f"{base_url.rstrip('/')}{route_prefix}/health-check"
        self.timeout = timeout
        self.transport = transport

    async def is_online(self, url: str) -> bool:
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(self.endpoint, json={"url": url})
            response.raise_for_status()
            payload = response.json()

        return bool(payload.get("success")) and (
            (payload.get("data") or {}).get("status") == Status.ONLINE.value
        )


class LocalHealthChecker:
    """Probes in-process instead of going through the HTTP surface."""

    def __init__(self, prober: ProberEngine):
        self.prober = prober

    async def is_online(self, url: str) -> bool:
        result = await self.prober.probe(url)
        return result.is_online


class HealthCheckIndicator:
    """
    Status light for one URL.

    ``checking`` is shown only for the very first check after the
    indicator is created (or re-enabled); later refreshes leave the last
    outcome in place until the new one arrives.
    """

    def __init__(
        self,
        url: str,
        settings: IndicatorSettings,
        checker: HealthChecker,
        on_change: Optional[Callable[[IndicatorState], Awaitable[None] | None]] = None,
    ):
        self.url = url
        self.settings = settings
        self.checker = checker
        self.on_change = on_change
        self.state = IndicatorState.CHECKING
        self._first_check = True

    @property
    def enabled(self) -> bool:
        return self.settings.health_check_enabled

    @property
    def visible(self) -> bool:
        """The indicator is not rendered at all while checks are disabled."""
        return self.enabled

    @property
    def title(self) -> str:
        return TITLES[self.state]

    async def refresh(self) -> IndicatorState:
        """Run one check and return the resulting state."""
        if not self.enabled or not self.url:
            await self._set_state(IndicatorState.DISABLED)
            return self.state

        if self._first_check:
            self._first_check = False
            await self._set_state(IndicatorState.CHECKING)

        try:
            online = await self.checker.is_online(self.url)
        except Exception as e:
            logger.debug("indicator_check_failed", url=self.url, error=str(e))
            online = False

        await self._set_state(IndicatorState.ONLINE if online else IndicatorState.OFFLINE)
        return self.state

    def set_enabled(self, enabled: bool) -> None:
        """Toggle polling; re-enabling shows ``checking`` again on the next check."""
        if enabled and not self.enabled:
            self._first_check = True
        self.settings = self.settings.model_copy(update={"health_check_enabled": enabled})

    async def run(self, stop: asyncio.Event, interval: Optional[float] = None) -> None:
        """Check now, then every interval until ``stop`` is set.

        ``interval`` overrides the configured number of seconds.
        """
        if not self.enabled:
            await self._set_state(IndicatorState.DISABLED)
            return

        interval = interval or self.settings.interval_seconds
        while not stop.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue

    async def _set_state(self, state: IndicatorState) -> None:
        if state == self.state:
            return
        self.state = state
        if self.on_change is not None:
            outcome = self.on_change(state)
            if asyncio.iscoroutine(outcome):
                await outcome
