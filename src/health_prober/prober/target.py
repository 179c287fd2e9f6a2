"""Resolve a URL string into the host, port and path to probe."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from health_prober.core.exceptions import URLParseError, UnsupportedSchemeError

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}


@dataclass(frozen=True)
class ProbeTarget:
    """Network target derived from a probe URL."""

    scheme: str
    host: str
    port: int
    path: str

    @property
    def is_tls(self) -> bool:
        return self.scheme == "https"

    @property
    def url(self) -> str:
        """Request URL: scheme, host, explicit port and path only."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}{self.path}"


def resolve_target(url: str) -> ProbeTarget:
    """Parse ``url`` into a ProbeTarget.

    Raises:
        URLParseError: no scheme, no host, or an invalid port
        UnsupportedSchemeError: scheme other than http/https
    """
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError as e:
        raise URLParseError(f"Invalid URL: {e}") from e

    scheme = parts.scheme.lower()
    if not scheme:
        raise URLParseError(f"Invalid URL: missing scheme in '{url}'")

    if not parts.hostname:
        raise URLParseError(f"Invalid URL: missing host in '{url}'")

    if scheme not in DEFAULT_PORTS:
        raise UnsupportedSchemeError(f"Unsupported protocol '{scheme}:'")

    return ProbeTarget(
        scheme=scheme,
        host=parts.hostname,
        port=port or DEFAULT_PORTS[scheme],
        path=parts.path or "/",
    )
