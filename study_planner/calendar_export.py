"""CalendarExport checks and the downloadable artifacts built from results."""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass
from datetime import date, datetime

from icalendar import Calendar

from generative_api import MalformedResponse
from .models import Flashcard

logger = logging.getLogger(__name__)

ICAL_FILENAME = "study-schedule.ics"


@dataclass
class CalendarEntry:
    """One VEVENT read back from a calendar export."""
    uid: str
    summary: str
    start: t.Optional[date | datetime] = None
    end: t.Optional[date | datetime] = None


def check_calendar_shape(ical: str) -> None:
    """Reject text that is not wrapped in a VCALENDAR block.

    :param ical: Calendar export returned by the model.
    :raises MalformedResponse: If the BEGIN/END markers are missing.
    """
    body = ical.strip()
    if not body.startswith("BEGIN:VCALENDAR") or not body.endswith("END:VCALENDAR"):
        raise MalformedResponse(
            "Calendar export must start with BEGIN:VCALENDAR and end with END:VCALENDAR."
        )


def inspect_calendar(ical: str) -> list[CalendarEntry]:
    """Read back the VEVENT blocks of a calendar export.

    :param ical: iCalendar text.
    :return: One entry per VEVENT, in document order.
    :raises MalformedResponse: If the text cannot be parsed as iCalendar.
    """
    try:
        calendar = Calendar.from_ical(ical)
    except ValueError as e:
        raise MalformedResponse(f"Calendar export could not be parsed: {e}") from e

    entries: list[CalendarEntry] = []
    for component in calendar.walk("VEVENT"):
        entries.append(
            CalendarEntry(
                uid=str(component.get("UID", "")),
                summary=str(component.get("SUMMARY", "")),
                start=_read_time(component, "DTSTART"),
                end=_read_time(component, "DTEND"),
            )
        )
    return entries


def _read_time(component: t.Any, name: str) -> t.Optional[date | datetime]:
    """Value of a DTSTART/DTEND property, or None if it is absent or unreadable.

    A value such as ``2026-11-05T17:00:00`` is not iCalendar syntax; icalendar
    either drops it or keeps it as a broken property that refuses ``.dt``.
    """
    prop = component.get(name)
    if prop is None:
        return None
    try:
        return prop.dt
    except (AttributeError, ValueError) as e:
        logger.debug("Unreadable %s in VEVENT: %s", name, e)
        return None


def render_flashcards_txt(flashcards: list[Flashcard]) -> str:
    """Format flashcards as Q:/A: blocks separated by a --- line."""
    return "\n\n---\n\n".join(f"Q: {card.question}\nA: {card.answer}" for card in flashcards)


def flashcards_filename(document_name: str) -> str:
    """Download name for a document's flashcards, e.g. lecture-3.pdf -> lecture-3-flashcards.txt."""
    return f"{document_name.split('.')[0]}-flashcards.txt"
