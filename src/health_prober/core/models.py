"""Data models for Health Prober."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Status(str, Enum):
    """Reachability classification produced by a probe."""

    ONLINE = "online"
    OFFLINE = "offline"


class ProbeResult(BaseModel):
    """Outcome of probing a single URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., description="The URL exactly as the caller supplied it")
    status: Status
    checked_at: datetime = Field(
        default_factory=utc_now,
        alias="checkedAt",
        description="When the probe finished (UTC)"
    )
    error: Optional[str] = Field(
        default=None,
        description="Cause when the probe ended in an exception"
    )

    @property
    def is_online(self) -> bool:
        return self.status == Status.ONLINE

    @classmethod
    def online(cls, url: str) -> "ProbeResult":
        return cls(url=url, status=Status.ONLINE)

    @classmethod
    def offline(cls, url: str, error: str | None = None) -> "ProbeResult":
        return cls(url=url, status=Status.OFFLINE, error=error)

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the HTTP surface; ``error`` is dropped when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


BatchResult = list[ProbeResult]


def as_url_text(value: Any) -> str:
    """Render a request value as the string handed to the prober.

    JSON ``null`` becomes ``""``; numbers and other values are stringified
    so they fail URL parsing and come back offline.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class ProbeRequest(BaseModel):
    """Body of ``POST /health-check``.

    ``url`` is left untyped: only a falsy value is rejected, anything else
    is probed and reported.
    """

    url: Any = None


class BatchProbeRequest(BaseModel):
    """Body of ``POST /health-check/batch``."""

    urls: Any = None


class Envelope(BaseModel, Generic[T]):
    """Success wrapper returned by every 200 response."""

    success: bool = True
    data: T


class ErrorEnvelope(BaseModel):
    """Wrapper returned with 4xx responses."""

    success: bool = False
    error: str


def summarize(results: BatchResult) -> dict[str, int]:
    """Count results per status."""
    online = sum(1 for r in results if r.is_online)
    return {
        "total": len(results),
        "online": online,
        "offline": len(results) - online,
    }
