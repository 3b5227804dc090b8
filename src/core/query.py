from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from core.models import Fixture

DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 500

HOME_AWAY_VALUES = {"home", "away"}

_YMD_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class _UseDefault:
    """Marker: parametro assente o malformato, il chiamante usa il default del campo."""

    _instance = None

    def __new__(cls) -> "_UseDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "USE_DEFAULT"

    def __bool__(self) -> bool:
        return False


USE_DEFAULT = _UseDefault()


# ---------------------------------------------------------------------------
# Parser per singolo campo (fail-open: mai eccezioni, al limite USE_DEFAULT)
# ---------------------------------------------------------------------------


def parse_ymd(raw: Optional[str]) -> Union[date, _UseDefault]:
    """YYYY-MM-DD; mese e giorno fuori range scorrono (2026-02-30 -> 2026-03-02)."""
    if not raw or not _YMD_RE.fullmatch(raw):
        return USE_DEFAULT
    year, month, day = (int(p) for p in raw.split("-"))
    if year <= 99:
        # anni a due cifre interpretati come 19xx, come Date.UTC
        year += 1900
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return USE_DEFAULT


def parse_formats(raw: Optional[str]) -> Union[FrozenSet[str], _UseDefault]:
    if not raw:
        return USE_DEFAULT
    tokens = {t.strip().lower() for t in raw.split(",")}
    tokens.discard("")
    return frozenset(tokens) if tokens else USE_DEFAULT


def parse_opponent(raw: Optional[str]) -> Union[str, _UseDefault]:
    needle = (raw or "").strip().lower()
    return needle if needle else USE_DEFAULT


def parse_home_away(raw: Optional[str]) -> Union[str, _UseDefault]:
    value = (raw or "").strip().lower()
    return value if value in HOME_AWAY_VALUES else USE_DEFAULT


def parse_limit(raw: Optional[str]) -> Union[int, _UseDefault]:
    """Intero (troncato verso zero) già ristretto a [MIN_LIMIT, MAX_LIMIT].

    Input assente o non numerico -> USE_DEFAULT; numerico fuori range -> clamp.
    """
    text = (raw or "").strip()
    if not text:
        return USE_DEFAULT
    try:
        value = float(text)
    except ValueError:
        return USE_DEFAULT
    if math.isnan(value):
        return USE_DEFAULT
    if math.isinf(value):
        return MAX_LIMIT if value > 0 else MIN_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, int(value)))


def _or_default(value: Any, default: Any) -> Any:
    return default if value is USE_DEFAULT else value


@dataclass(frozen=True)
class FixtureQuery:
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    formats: FrozenSet[str] = field(default_factory=frozenset)
    opponent: str = ""
    home_away: Optional[str] = None
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "FixtureQuery":
        """
        Costruisce la query dai parametri raw (nomi: from, to, format, opponent,
        homeAway, limit). Parametri malformati equivalgono a "nessun filtro".
        """
        return cls(
            date_from=_or_default(parse_ymd(params.get("from")), None),
            date_to=_or_default(parse_ymd(params.get("to")), None),
            formats=_or_default(parse_formats(params.get("format")), frozenset()),
            opponent=_or_default(parse_opponent(params.get("opponent")), ""),
            home_away=_or_default(parse_home_away(params.get("homeAway")), None),
            limit=_or_default(parse_limit(params.get("limit")), DEFAULT_LIMIT),
        )

    @property
    def lower_bound(self) -> Optional[datetime]:
        if self.date_from is None:
            return None
        return datetime.combine(self.date_from, time.min, tzinfo=timezone.utc)

    @property
    def upper_bound(self) -> Optional[datetime]:
        if self.date_to is None:
            return None
        return datetime.combine(self.date_to, time(23, 59, 59, 999000), tzinfo=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.date_from.isoformat() if self.date_from else None,
            "to": self.date_to.isoformat() if self.date_to else None,
            "format": sorted(self.formats),
            "opponent": self.opponent or None,
            "homeAway": self.home_away,
            "limit": self.limit,
        }


def _sort_key(fx: Fixture):
    # start non parseable -> in coda, ordine di input preservato (sort stabile)
    start = fx.start_instant
    return (start is None, start or datetime.min.replace(tzinfo=timezone.utc))


def filter_fixtures(fixtures: Iterable[Fixture], query: FixtureQuery) -> List[Fixture]:
    """
    Applica i filtri della query e restituisce al massimo `query.limit` fixture
    ordinate per startTime crescente. Non modifica la collezione in ingresso.

    Filtri (in AND):
    - from / to: limiti inclusivi in giorni UTC (00:00:00.000 / 23:59:59.999)
    - formats: appartenenza case-insensitive
    - opponent: sottostringa case-insensitive
    - home_away: match esatto su home|away
    """
    out: List[Fixture] = list(fixtures)

    lower = query.lower_bound
    if lower is not None:
        out = [fx for fx in out if fx.start_instant is not None and fx.start_instant >= lower]

    upper = query.upper_bound
    if upper is not None:
        out = [fx for fx in out if fx.start_instant is not None and fx.start_instant <= upper]

    if query.formats:
        out = [fx for fx in out if fx.format.lower() in query.formats]

    if query.opponent:
        out = [fx for fx in out if query.opponent in fx.opponent.lower()]

    if query.home_away in HOME_AWAY_VALUES:
        out = [fx for fx in out if fx.home_away.lower() == query.home_away]

    out.sort(key=_sort_key)
    return out[: query.limit]


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "USE_DEFAULT",
    "FixtureQuery",
    "filter_fixtures",
    "parse_formats",
    "parse_home_away",
    "parse_limit",
    "parse_opponent",
    "parse_ymd",
]
