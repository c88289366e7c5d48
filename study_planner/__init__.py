"""Extraction and synthesis stages of the study-aid pipeline."""
from .calendar_export import (ICAL_FILENAME, CalendarEntry, check_calendar_shape, flashcards_filename,
                              inspect_calendar, render_flashcards_txt)
from .errors import EmptyDocument, EmptyResult, NoEventsFound
from .extraction import EXTRACTION_SCHEMA, extract_events
from .flashcards import FLASHCARD_SCHEMA, create_flashcards
from .models import ExtractedEvent, Flashcard, ScheduleEvent, SchedulePlan, UserProfile
from .overview import events_by_day, parse_iso_datetime, sorted_schedule
from .synthesis import SCHEDULE_SCHEMA, synthesize_schedule

__all__ = [
    "CalendarEntry",
    "EXTRACTION_SCHEMA",
    "EmptyDocument",
    "EmptyResult",
    "ExtractedEvent",
    "FLASHCARD_SCHEMA",
    "Flashcard",
    "ICAL_FILENAME",
    "NoEventsFound",
    "SCHEDULE_SCHEMA",
    "ScheduleEvent",
    "SchedulePlan",
    "UserProfile",
    "check_calendar_shape",
    "create_flashcards",
    "events_by_day",
    "extract_events",
    "flashcards_filename",
    "inspect_calendar",
    "parse_iso_datetime",
    "render_flashcards_txt",
    "sorted_schedule",
    "synthesize_schedule",
]
