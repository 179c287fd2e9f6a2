"""Per-probe httpx client construction."""

from __future__ import annotations

from typing import Optional

import httpx

from health_prober.core.config import ProberSettings
from health_prober.prober.target import ProbeTarget


def open_client(
    target: ProbeTarget,
    settings: ProberSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create a client dedicated to one probe.

    Certificate verification for https targets follows
    ``settings.verify_tls`` and is scoped to this client only; no
    process-wide SSL default is touched. Plain http targets always get a
    default client since there is nothing to verify.

    ``transport`` lets tests substitute ``httpx.MockTransport``.
    """
    verify = settings.verify_tls if target.is_tls else True

    return httpx.AsyncClient(
        transport=transport,
        verify=verify,
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=False,
        trust_env=False,
        headers={
            "User-Agent": settings.user_agent,
        },
    )
