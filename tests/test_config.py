import pytest

from core.config import get_settings, _reset_settings_cache_for_tests


def test_defaults(monkeypatch) -> None:
    for name in ("FIXTURES_SOURCE", "FIXTURES_HTTP_TIMEOUT", "FIXTURES_LOG_LEVEL", "FIXTURES_ICS_FILENAME", "FIXTURES_CORS"):
        monkeypatch.delenv(name, raising=False)
    _reset_settings_cache_for_tests()
    s = get_settings()
    assert s.fixtures_source == "data/fixtures.json"
    assert s.http_timeout == 10.0
    assert s.log_level == "INFO"
    assert s.ics_filename == "aus-fixtures.ics"
    assert s.cors_enabled is True


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("FIXTURES_SOURCE", "https://example.org/fixtures.json")
    monkeypatch.setenv("FIXTURES_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("FIXTURES_LOG_LEVEL", "debug")
    monkeypatch.setenv("FIXTURES_CORS", "no")
    _reset_settings_cache_for_tests()
    s = get_settings()
    assert s.fixtures_source == "https://example.org/fixtures.json"
    assert s.http_timeout == 2.5
    assert s.log_level == "DEBUG"
    assert s.cors_enabled is False


def test_invalid_timeout_raises(monkeypatch) -> None:
    monkeypatch.setenv("FIXTURES_HTTP_TIMEOUT", "soon")
    _reset_settings_cache_for_tests()
    with pytest.raises(ValueError) as exc:
        get_settings()
    assert "FIXTURES_HTTP_TIMEOUT" in str(exc.value)


def test_settings_cached(monkeypatch) -> None:
    monkeypatch.setenv("FIXTURES_SOURCE", "a.json")
    _reset_settings_cache_for_tests()
    first = get_settings()
    monkeypatch.setenv("FIXTURES_SOURCE", "b.json")
    assert get_settings() is first
