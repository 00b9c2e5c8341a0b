"""
Tests for runtime settings
"""

from contracheck.core.config import MAX_TRACKED_REGIONS, Settings


def test_defaults(monkeypatch):
    for name in ("CONTRACHECK_MAX_REGIONS", "CONTRACHECK_LOG_LEVEL", "CONTRACHECK_HOST", "CONTRACHECK_PORT"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.max_tracked_regions == MAX_TRACKED_REGIONS == 300
    assert settings.log_level == "WARNING"
    assert settings.port == 8000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONTRACHECK_MAX_REGIONS", "50")
    monkeypatch.setenv("CONTRACHECK_LOG_LEVEL", "debug")
    monkeypatch.setenv("CONTRACHECK_HOST", "0.0.0.0")
    monkeypatch.setenv("CONTRACHECK_PORT", "9001")
    settings = Settings.from_env()
    assert settings == Settings(max_tracked_regions=50, log_level="DEBUG", host="0.0.0.0", port=9001)
