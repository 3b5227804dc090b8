from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from api.responses import is_pretty, json_response, text_response
from core.calendar import build_ics
from core.config import get_settings
from core.dataset import load_dataset
from core.logging import get_logger
from core.query import FixtureQuery, filter_fixtures

router = APIRouter(prefix="/api", tags=["fixtures"])
logger = get_logger("api.routes.fixtures")


# Tutti i parametri sono stringhe raw: la validazione è fail-open in core.query
def _params(
    date_from: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, inizio giornata UTC", examples=["2026-03-01"]),
    date_to: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, fine giornata UTC inclusa", examples=["2026-03-31"]),
    fmt: Optional[str] = Query(None, alias="format", description="Lista separata da virgole", examples=["Test,ODI,T20I"]),
    opponent: Optional[str] = Query(None, alias="opponent", description="Sottostringa case-insensitive", examples=["india"]),
    home_away: Optional[str] = Query(None, alias="homeAway", description="home | away", examples=["home"]),
    limit: Optional[str] = Query(None, alias="limit", description="1..500, default 50", examples=["50"]),
) -> Dict[str, Optional[str]]:
    return {
        "from": date_from,
        "to": date_to,
        "format": fmt,
        "opponent": opponent,
        "homeAway": home_away,
        "limit": limit,
    }


@router.get("/fixtures", summary="List fixtures")
def list_fixtures(
    request: Request,
    params: Dict[str, Optional[str]] = Depends(_params),
    pretty: Optional[str] = Query(None, description="1 per JSON indentato"),
):
    """
    Ritorna le fixture filtrate dentro un envelope JSON.

    Filtri (tutti opzionali, malformati = ignorati):
    - from / to: intervallo inclusivo in giorni UTC
    - format: insieme di formati (case-insensitive)
    - opponent: sottostringa del nome avversario
    - homeAway: home | away
    - limit: max risultati (1..500, default 50), applicato dopo l'ordinamento
    """
    dataset = load_dataset()
    query = FixtureQuery.from_params(params)
    filtered = filter_fixtures(dataset.fixtures, query)
    echo = dict(request.query_params)
    logger.info("Fixtures query", extra={"query": echo, "count": len(filtered)})
    return json_response(
        {
            "ok": True,
            "dataset": dataset.meta.to_dict(),
            "query": echo,
            "resolved": query.to_dict(),
            "count": len(filtered),
            "fixtures": [fx.to_dict() for fx in filtered],
        },
        pretty=is_pretty(pretty),
    )


@router.get("/fixtures.ics", summary="iCalendar export")
def export_fixtures_ics(params: Dict[str, Optional[str]] = Depends(_params)):
    """Stessi filtri di /api/fixtures, serializzati come calendario ICS."""
    dataset = load_dataset()
    query = FixtureQuery.from_params(params)
    filtered = filter_fixtures(dataset.fixtures, query)
    logger.info("Fixtures ICS export", extra={"query": query.to_dict(), "count": len(filtered)})
    filename = get_settings().ics_filename
    return text_response(
        build_ics(filtered),
        media_type="text/calendar; charset=utf-8",
        headers={"content-disposition": f"attachment; filename={filename}"},
    )
