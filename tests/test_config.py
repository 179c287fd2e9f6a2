"""Tests for configuration loading."""

from pathlib import Path

import pytest

from health_prober.core.config import ServerSettings, Settings
from health_prober.core.exceptions import ConfigurationError


class TestDefaults:
    """Tests for built-in defaults."""

    def test_prober_defaults(self, settings):
        assert settings.prober.timeout_ms == 5000
        assert settings.prober.timeout_seconds == 5.0
        assert settings.prober.verify_tls is False

    def test_server_defaults(self, settings):
        assert settings.server.route_prefix == ""
        assert settings.server.port == 8000

    def test_indicator_defaults(self, settings):
        assert settings.indicator.health_check_enabled is True
        assert settings.indicator.health_check_interval is None
        assert settings.indicator.interval_seconds == 60


class TestOverrides:
    """Tests for env and file overrides."""

    def test_env_nested_override(self, monkeypatch):
        monkeypatch.setenv("HEALTH_PROBER_PROBER__TIMEOUT_MS", "2500")
        monkeypatch.setenv("HEALTH_PROBER_INDICATOR__HEALTH_CHECK_ENABLED", "false")

        settings = Settings()

        assert settings.prober.timeout_ms == 2500
        assert settings.indicator.health_check_enabled is False

    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "health-prober.yaml"
        path.write_text(
            "prober:\n"
            "  timeout_ms: 1500\n"
            "  verify_tls: true\n"
            "server:\n"
            "  route_prefix: /api/apps\n"
            "indicator:\n"
            "  health_check_interval: 30\n"
            "logging:\n"
            "  level: debug\n"
        )

        settings = Settings.from_yaml(path)

        assert settings.prober.timeout_ms == 1500
        assert settings.prober.verify_tls is True
        assert settings.server.route_prefix == "/api/apps"
        assert settings.indicator.interval_seconds == 30
        assert settings.logging.level == "DEBUG"

    def test_missing_yaml_gives_defaults(self, tmp_path: Path):
        settings = Settings.from_yaml(tmp_path / "absent.yaml")
        assert settings.prober.timeout_ms == 5000

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("prober: [unclosed\n")

        with pytest.raises(ConfigurationError):
            Settings.from_yaml(path)

    def test_non_mapping_yaml(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            Settings.from_yaml(path)

    def test_from_file_or_default_prefers_explicit_path(self, tmp_path: Path):
        path = tmp_path / "custom.yaml"
        path.write_text("server:\n  port: 9100\n")

        assert Settings.from_file_or_default(path).server.port == 9100

    @pytest.mark.parametrize(
        "raw, expected",
        [("", ""), ("/", ""), ("api/apps", "/api/apps"), ("/api/apps/", "/api/apps")],
    )
    def test_route_prefix_normalized(self, raw, expected):
        assert ServerSettings(route_prefix=raw).route_prefix == expected

    def test_timeout_must_be_positive(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            Settings(prober={"timeout_ms": 0})
