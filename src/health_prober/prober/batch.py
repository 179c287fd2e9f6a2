"""Concurrent batch probing."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from health_prober.core.exceptions import RequestValidationError
from health_prober.core.logging import get_logger
from health_prober.core.models import BatchResult, ProbeResult, as_url_text, summarize
from health_prober.prober.engine import ProberEngine

logger = get_logger(__name__)


def validate_urls(urls: Any) -> list[str]:
    """Check that ``urls`` is a sequence and return its items as strings.

    Items that are not strings are kept at their index and stringified;
    they fail URL parsing later and are reported offline.

    Raises:
        RequestValidationError: absent, a bare string, a mapping, or
            not a sequence at all
    """
    if urls is None or isinstance(urls, (str, bytes, Mapping)):
        raise RequestValidationError("URLs array is required")
    if not isinstance(urls, Sequence):
        raise RequestValidationError("URLs array is required")
    return [as_url_text(url) for url in urls]


class BatchCoordinator:
    """Fans a set of URLs out to the prober and joins results by position."""

    def __init__(self, prober: ProberEngine):
        self.prober = prober

    async def probe_batch(self, urls: Sequence[Any]) -> BatchResult:
        """
        Probe every URL concurrently.

        All probes are started at once with no concurrency cap. Results
        are returned in input order; a probe that raises is recorded as
        an offline entry at its own index without affecting the others.

        Raises:
            RequestValidationError: when ``urls`` is not a sequence
        """
        urls = validate_urls(urls)

        outcomes = await asyncio.gather(
            *(self.prober.probe(url) for url in urls),
            return_exceptions=True,
        )

        results: BatchResult = []
        for url, outcome in zip(urls, outcomes):
            if isinstance(outcome, ProbeResult):
                results.append(outcome)
            else:
                logger.warning("batch_probe_error", url=url, error=repr(outcome))
                results.append(
                    ProbeResult.offline(url, str(outcome) or outcome.__class__.__name__)
                )

        logger.debug("batch_completed", **summarize(results))
        return results
