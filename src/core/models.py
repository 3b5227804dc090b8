from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

# Campi testuali normalizzati per filtri e calendario; il record originale resta in `raw`
_TEXT_FIELDS = {
    "id": "id",
    "startTime": "start_time",
    "format": "format",
    "opponent": "opponent",
    "homeAway": "home_away",
    "venue": "venue",
    "city": "city",
    "country": "country",
    "competition": "competition",
    "status": "status",
}


def parse_instant(value: Any) -> Optional[datetime]:
    """Converte una stringa ISO 8601 in datetime UTC aware; None se non parseable.

    Valori senza offset vengono interpretati come UTC; i microsecondi sono
    troncati al millisecondo.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # OverflowError: offset che porta fuori dal range di datetime
        return None
    # precisione al millisecondo, come gli instant del dataset
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Fixture:
    id: str
    start_time: str
    format: str = ""
    opponent: str = ""
    home_away: str = ""
    venue: str = ""
    city: str = ""
    country: str = ""
    competition: str = ""
    status: str = "scheduled"
    end_time: Optional[str] = None
    raw: Optional[Mapping[str, Any]] = field(default=None, compare=False, repr=False)

    @property
    def start_instant(self) -> Optional[datetime]:
        return parse_instant(self.start_time)

    @property
    def location(self) -> str:
        return ", ".join(p for p in (self.venue, self.city, self.country) if p)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Fixture":
        values = {attr: _as_text(raw.get(key)) for key, attr in _TEXT_FIELDS.items()}
        if not values["status"]:
            values["status"] = "scheduled"
        end_time = raw.get("endTime")
        return cls(
            end_time=end_time if isinstance(end_time, str) else None,
            raw=dict(raw),
            **values,
        )

    def to_dict(self) -> Dict[str, Any]:
        # record del dataset restituito così com'è
        if self.raw is not None:
            return dict(self.raw)
        return {
            "id": self.id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "format": self.format,
            "opponent": self.opponent,
            "homeAway": self.home_away,
            "venue": self.venue,
            "city": self.city,
            "country": self.country,
            "competition": self.competition,
            "status": self.status,
        }


@dataclass(frozen=True)
class DatasetMeta:
    generated_at: Optional[str] = None
    source: Optional[str] = None
    team: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DatasetMeta":
        team = raw.get("team")
        return cls(
            generated_at=raw.get("generatedAt") or None,
            source=raw.get("source") or None,
            team=team if isinstance(team, dict) else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "source": self.source,
            "team": self.team,
        }


@dataclass(frozen=True)
class Dataset:
    meta: DatasetMeta
    fixtures: Tuple[Fixture, ...]


__all__ = ["Fixture", "DatasetMeta", "Dataset", "parse_instant"]
