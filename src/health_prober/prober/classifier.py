"""Status-code classification policy."""

from __future__ import annotations

from health_prober.core.models import Status

# Anything below this means the server process answered the request.
# 4xx counts as online: "server is up" is what is measured here, not
# "resource is available".
OFFLINE_STATUS_THRESHOLD = 500


def classify_status_code(status_code: int) -> Status:
    """Map an HTTP status code to a reachability status.

    >>> classify_status_code(404)
    <Status.ONLINE: 'online'>
    >>> classify_status_code(503)
    <Status.OFFLINE: 'offline'>
    """
    if status_code < OFFLINE_STATUS_THRESHOLD:
        return Status.ONLINE
    return Status.OFFLINE
