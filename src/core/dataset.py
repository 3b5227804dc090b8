from __future__ import annotations

import json
from json import JSONDecodeError
from pathlib import Path
from typing import Any, List, Optional

import requests

from .config import get_settings
from .logging import get_logger
from .models import Dataset, DatasetMeta, Fixture

LOGGER = get_logger(__name__)


class DatasetLoadError(Exception):
    """Sollevata quando il dataset delle fixture non può essere letto o decodificato."""


# ---------------------------------------------------------------------------
# Low level
# ---------------------------------------------------------------------------


def _read_file(path: Path) -> Any:
    if not path.exists():
        raise DatasetLoadError(f"Failed to load fixtures dataset: {path} not found")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except JSONDecodeError as e:
        raise DatasetLoadError(f"Failed to load fixtures dataset: invalid JSON in {path}") from e
    except OSError as e:
        raise DatasetLoadError(f"Failed to load fixtures dataset: {e}") from e


def _fetch_url(url: str, timeout: float) -> Any:
    try:
        resp = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
    except requests.RequestException as e:
        raise DatasetLoadError(f"Failed to load fixtures dataset: {e}") from e
    if not resp.ok:
        raise DatasetLoadError(f"Failed to load fixtures dataset: {resp.status_code}")
    try:
        return resp.json()
    except ValueError as e:
        raise DatasetLoadError(f"Failed to load fixtures dataset: invalid JSON from {url}") from e


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_dataset(raw: Any) -> Dataset:
    """
    Decodifica il documento `{"generatedAt", "source", "team", "fixtures": [...]}`.

    Un payload che non è un oggetto è un errore; `fixtures` mancante o non lista
    produce un dataset vuoto (con warning). Elementi non-dict
    vengono scartati con warning.
    """
    if not isinstance(raw, dict):
        raise DatasetLoadError("Invalid fixtures dataset: expected a JSON object")
    items = raw.get("fixtures")
    if not isinstance(items, list):
        LOGGER.warning("Fixtures dataset without a 'fixtures' list, treating as empty")
        items = []

    fixtures: List[Fixture] = []
    skipped = 0
    for item in items:
        if not isinstance(item, dict):
            skipped += 1
            continue
        fixtures.append(Fixture.from_dict(item))
    if skipped:
        LOGGER.warning("Skipped %d invalid fixture entries", skipped, extra={"skipped": skipped})
    return Dataset(meta=DatasetMeta.from_dict(raw), fixtures=tuple(fixtures))


def load_dataset(source: Optional[str] = None, timeout: Optional[float] = None) -> Dataset:
    """Carica il dataset da path locale o URL http(s); default da settings."""
    settings = get_settings()
    src = source or settings.fixtures_source
    if src.lower().startswith(("http://", "https://")):
        raw = _fetch_url(src, timeout if timeout is not None else settings.http_timeout)
    else:
        raw = _read_file(Path(src))
    dataset = decode_dataset(raw)
    LOGGER.info("Loaded %d fixtures from %s", len(dataset.fixtures), src, extra={"source": src})
    return dataset


__all__ = ["DatasetLoadError", "decode_dataset", "load_dataset"]
