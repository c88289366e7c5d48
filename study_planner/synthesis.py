"""Synthesis stage: aggregated events and a user profile in, schedule and calendar out."""
from __future__ import annotations

import json
import logging
from datetime import datetime

from pydantic import TypeAdapter

from generative_api import GenerativeClient
from prompts import render_prompt
from .calendar_export import check_calendar_shape
from .models import ExtractedEvent, SchedulePlan, UserProfile, validate_answer

logger = logging.getLogger(__name__)

SCHEDULE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "schedule": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "start": {"type": "STRING", "description": "Full ISO 8601 datetime"},
                    "end": {"type": "STRING", "description": "Full ISO 8601 datetime"},
                },
                "required": ["title", "start", "end"],
            },
        },
        "ical": {"type": "STRING", "description": "A full, valid iCalendar (.ics) string."},
    },
    "required": ["schedule", "ical"],
}

_PLAN = TypeAdapter(SchedulePlan)


def _serialize_events_for_llm(events: list[ExtractedEvent]) -> str:
    """Serialize events with the same field names the extraction schema uses."""
    return json.dumps([event.model_dump(by_alias=True) for event in events], indent=2)


def build_schedule_prompt(profile: UserProfile, events: list[ExtractedEvent], now: datetime) -> str:
    return render_prompt(
        "schedule_synthesis_prompt",
        name=profile.name,
        free_time=profile.free_time,
        today=now.strftime("%a %b %d %Y"),
        events_json=_serialize_events_for_llm(events),
    )


def synthesize_schedule(
    client: GenerativeClient,
    profile: UserProfile,
    events: list[ExtractedEvent],
    now: datetime,
) -> SchedulePlan:
    """Turn the aggregated events into a study schedule and its iCalendar export.

    Deadlines keep their date at 17:00; study sessions are placed in the
    user's free time before each deadline. How many sessions each event gets
    is left to the model. The schedule and the calendar come from one call
    and are not cross-checked.

    Args:
        client: Client used for the single model call.
        profile: The user's name and availability.
        events: Every event extracted from every document, in upload order.
        now: Current date and time, quoted in the prompt.

    Returns:
        The SchedulePlan exactly as returned, without reordering or correction.

    Raises:
        ApiError: If the request fails.
        MalformedResponse: If the answer has the wrong shape or the calendar
            is not wrapped in BEGIN:VCALENDAR / END:VCALENDAR.
    """
    prompt = build_schedule_prompt(profile, events, now)
    data = client.generate(prompt, SCHEDULE_SCHEMA)

    plan = validate_answer(_PLAN, data, "schedule generation")
    check_calendar_shape(plan.ical)
    logger.info("Synthesized %d schedule event(s) from %d extracted event(s)", len(plan.schedule), len(events))
    return plan
