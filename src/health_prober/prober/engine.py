"""Async reachability prober."""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import httpx

from health_prober.core.config import ProberSettings, Settings
from health_prober.core.exceptions import (
    ProbeConnectionError,
    ProbeError,
    ProbeTimeoutError,
    URLParseError,
)
from health_prober.core.logging import get_logger
from health_prober.core.models import ProbeResult, Status
from health_prober.prober.classifier import classify_status_code
from health_prober.prober.target import ProbeTarget, resolve_target
from health_prober.prober.transport import open_client

logger = get_logger(__name__)


class ProberEngine:
    """
    Issues one HEAD request per URL and classifies the outcome.

    Features:
    - Hard per-probe deadline covering connect, TLS and response
    - Optional TLS verification for https targets (off by default)
    - No redirects followed, no retries
    - Every failure mode becomes an offline ProbeResult
    """

    def __init__(
        self,
        settings: Settings | ProberSettings | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if isinstance(settings, Settings):
            settings = settings.prober
        self.settings = settings or ProberSettings()
        self.transport = transport

    async def probe(self, url: str) -> ProbeResult:
        """
        Probe a single URL.

        Args:
            url: Absolute http(s) URL

        Returns:
            ProbeResult carrying ``url`` unchanged. Never raises for
            probe-level failures.
        """
        start_time = time.monotonic()

        try:
            target = resolve_target(url)
            status_code = await asyncio.wait_for(
                self._send_head(target),
                timeout=self.settings.timeout_seconds,
            )
        except asyncio.TimeoutError:
            return self._failed(url, ProbeTimeoutError(), start_time)
        except ProbeError as e:
            return self._failed(url, e, start_time)
        except Exception as e:
            logger.warning("probe_unexpected_error", url=url, exc_info=True)
            return self._failed(url, e, start_time)

        status = classify_status_code(status_code)
        logger.debug(
            "probe_completed",
            url=url,
            status=status.value,
            http_status=status_code,
            elapsed_ms=round((time.monotonic() - start_time) * 1000, 1),
        )
        return ProbeResult(url=url, status=status)

    async def _send_head(self, target: ProbeTarget) -> int:
        """Send the HEAD request and return the response status code."""
        async with open_client(target, self.settings, self.transport) as client:
            try:
                response = await client.head(target.url)
            except httpx.TimeoutException as e:
                raise ProbeTimeoutError() from e
            except httpx.InvalidURL as e:
                raise URLParseError(f"Invalid URL: {e}") from e
            except httpx.HTTPError as e:
                raise ProbeConnectionError(_describe(e)) from e
            except OSError as e:
                raise ProbeConnectionError(str(e) or e.__class__.__name__) from e

        return response.status_code

    def _failed(self, url: str, error: Exception, start_time: float) -> ProbeResult:
        cause = str(error) or error.__class__.__name__
        logger.info(
            "probe_failed",
            url=url,
            error=cause,
            error_type=error.__class__.__name__,
            elapsed_ms=round((time.monotonic() - start_time) * 1000, 1),
        )
        return ProbeResult(url=url, status=Status.OFFLINE, error=cause)


def _describe(error: httpx.HTTPError) -> str:
    """Human-readable cause for an httpx failure."""
    message = str(error)
    if message:
        return message
    cause = error.__cause__ or error.__context__
    if cause is not None and str(cause):
        return str(cause)
    return error.__class__.__name__
