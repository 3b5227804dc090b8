from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from core.models import Fixture

PRODID = "-//AUS Fixtures Free API//EN"
UID_SUFFIX = "@aus-fixtures"
TEAM_NAME = "Australia"
CRLF = "\r\n"

Lines = Tuple[str, ...]


def ics_escape(text: Optional[str]) -> str:
    # TEXT escaping RFC5545; il backslash va trattato per primo
    text = text or ""
    text = text.replace("\\", "\\\\")
    text = text.replace("\n", "\\n")
    text = text.replace(",", r"\,")
    text = text.replace(";", r"\;")
    return text


def ics_utc(dt: datetime) -> str:
    # YYYYMMDDTHHMMSSZ
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def calendar_header() -> Lines:
    return (
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
    )


def calendar_footer() -> Lines:
    return ("END:VCALENDAR",)


def event_summary(fx: Fixture) -> str:
    return f"{fx.format}: {TEAM_NAME} vs {fx.opponent}"


def event_lines(fx: Fixture, dtstamp: datetime) -> Lines:
    """Righe del VEVENT per una fixture; tupla vuota se startTime non è parseable."""
    start = fx.start_instant
    if start is None:
        return ()

    lines: List[str] = [
        "BEGIN:VEVENT",
        f"UID:{ics_escape(fx.id)}{UID_SUFFIX}",
        f"DTSTAMP:{ics_utc(dtstamp)}",
        f"DTSTART:{ics_utc(start)}",
        f"SUMMARY:{ics_escape(event_summary(fx))}",
    ]
    location = fx.location
    if location:
        lines.append(f"LOCATION:{ics_escape(location)}")
    if fx.competition:
        lines.append(f"DESCRIPTION:{ics_escape(fx.competition)}")
    lines.append("END:VEVENT")
    return tuple(lines)


def build_ics(fixtures: Iterable[Fixture], now: Optional[datetime] = None) -> str:
    """
    Serializza le fixture in un documento iCalendar completo.

    `now` viene usato solo per DTSTAMP ed è identico per tutti gli eventi della
    stessa chiamata. Le fixture con startTime non valido vengono saltate.
    """
    dtstamp = now or datetime.now(timezone.utc)
    lines: Lines = calendar_header()
    for fx in fixtures:
        lines += event_lines(fx, dtstamp)
    lines += calendar_footer()
    return CRLF.join(lines) + CRLF


__all__ = [
    "PRODID",
    "UID_SUFFIX",
    "build_ics",
    "calendar_footer",
    "calendar_header",
    "event_lines",
    "ics_escape",
    "ics_utc",
]
