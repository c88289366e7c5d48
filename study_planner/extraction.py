"""Extraction stage: one document's text in, its dated events out."""
from __future__ import annotations

import logging

from pydantic import TypeAdapter

from generative_api import GenerativeClient
from prompts import render_prompt
from .models import ExtractedEvent, validate_answer

logger = logging.getLogger(__name__)

EXTRACTION_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "courseName": {"type": "STRING"},
            "eventName": {"type": "STRING"},
            "date": {"type": "STRING", "description": "Date in YYYY-MM-DD format"},
        },
        "required": ["courseName", "eventName", "date"],
    },
}

_EVENTS = TypeAdapter(list[ExtractedEvent])


def extract_events(
    client: GenerativeClient,
    document_text: str,
    current_year: int,
) -> list[ExtractedEvent]:
    """Find every dated event in one document.

    Partial dates such as "Oct 5" are resolved by the model against
    ``current_year``. Zero events is a valid answer.

    Args:
        client: Client used for the single model call.
        document_text: Raw text of one syllabus.
        current_year: Year used to complete partial dates.

    Returns:
        Events in the order the model listed them.

    Raises:
        ApiError: If the request fails.
        MalformedResponse: If the answer is missing or has the wrong shape.
    """
    prompt = render_prompt("event_extraction_prompt", current_year=current_year, document_text=document_text)
    data = client.generate(prompt, EXTRACTION_SCHEMA)
    if data is None:
        return []

    events = validate_answer(_EVENTS, data, "event extraction")
    logger.info("Extracted %d event(s)", len(events))
    return events
