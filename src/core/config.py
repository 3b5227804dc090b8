import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    v = value.strip().lower()
    if v in {"0", "false", "no"}:
        return False
    return True


@dataclass
class Settings:
    fixtures_source: str
    http_timeout: float
    log_level: str
    ics_filename: str
    cors_enabled: bool

    @classmethod
    def from_env(cls) -> "Settings":
        def _float(name: str, default: float) -> float:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return float(raw)
            except ValueError as e:
                raise ValueError(f"Variabile {name} deve essere un numero (valore: {raw!r})") from e

        fixtures_source = os.getenv("FIXTURES_SOURCE", "data/fixtures.json").strip() or "data/fixtures.json"
        http_timeout = _float("FIXTURES_HTTP_TIMEOUT", 10.0)
        if http_timeout <= 0:
            http_timeout = 10.0
        log_level = os.getenv("FIXTURES_LOG_LEVEL", "INFO").upper()
        ics_filename = os.getenv("FIXTURES_ICS_FILENAME", "aus-fixtures.ics").strip() or "aus-fixtures.ics"
        cors_enabled = _parse_bool(os.getenv("FIXTURES_CORS"), True)

        return cls(
            fixtures_source=fixtures_source,
            http_timeout=http_timeout,
            log_level=log_level,
            ics_filename=ics_filename,
            cors_enabled=cors_enabled,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def _reset_settings_cache_for_tests() -> None:
    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "_reset_settings_cache_for_tests"]
