"""Tests for data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from health_prober.core.models import ProbeResult, Status, summarize


class TestProbeResult:
    """Tests for ProbeResult shape and serialization."""

    def test_payload_uses_camel_case_timestamp(self):
        checked = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        result = ProbeResult(url="https://a.test", status=Status.ONLINE, checked_at=checked)

        payload = result.to_payload()

        assert payload == {
            "url": "https://a.test",
            "status": "online",
            "checkedAt": payload["checkedAt"],
        }
        assert payload["checkedAt"].startswith("2026-01-02T03:04:05")

    def test_payload_includes_error_when_set(self):
        payload = ProbeResult.offline("http://b.test", "Request timeout").to_payload()

        assert payload["status"] == "offline"
        assert payload["error"] == "Request timeout"

    def test_offline_without_error_omits_field(self):
        payload = ProbeResult.offline("http://c.test").to_payload()
        assert "error" not in payload

    def test_is_immutable(self):
        result = ProbeResult.online("https://a.test")

        with pytest.raises(ValidationError):
            result.status = Status.OFFLINE

    def test_accepts_alias_on_input(self):
        result = ProbeResult.model_validate(
            {"url": "https://a.test", "status": "offline", "checkedAt": "2026-01-01T00:00:00Z"}
        )
        assert result.status == Status.OFFLINE
        assert result.checked_at.year == 2026


def test_summarize_counts():
    results = [
        ProbeResult.online("a"),
        ProbeResult.offline("b"),
        ProbeResult.online("c"),
    ]
    assert summarize(results) == {"total": 3, "online": 2, "offline": 1}
