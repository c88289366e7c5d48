"""
Data models for the study planner stages.

These mirror the JSON shapes requested from the model, so answers can be
validated with pydantic before they reach the orchestrator.
"""
from __future__ import annotations

import typing as t

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from generative_api import MalformedResponse


class UserProfile(BaseModel):
    """
    Who the schedule is for and when they can study, e.g.:
    - "Weekday evenings after 6 PM, weekends"
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    free_time: str = Field(alias="freeTime")


class ExtractedEvent(BaseModel):
    """
    One dated event found in a single document.
    """
    model_config = ConfigDict(populate_by_name=True)

    course_name: str = Field(alias="courseName")
    event_name: str = Field(alias="eventName")
    date: str                                       # "YYYY-MM-DD"


class ScheduleEvent(BaseModel):
    """A deadline or study session in the synthesized schedule."""
    title: str
    start: str      # ISO 8601 datetime, not checked against end
    end: str        # ISO 8601 datetime


class SchedulePlan(BaseModel):
    """Schedule plus the calendar export produced by the same model call."""
    schedule: list[ScheduleEvent]
    ical: str


class Flashcard(BaseModel):
    """A question/answer pair."""
    question: str
    answer: str


def validate_answer(adapter: TypeAdapter, data: t.Any, what: str) -> t.Any:
    """Validate a decoded model answer against the shape that was requested.

    :param adapter: TypeAdapter for the expected shape.
    :param data: Decoded JSON answer.
    :param what: Short description used in the error message.
    :return: The validated value.
    :raises MalformedResponse: If the answer does not match the shape.
    """
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise MalformedResponse(
            f"Answer for {what} does not match the requested shape "
            f"({e.error_count()} problem(s)): {e.errors()[0]['msg']}"
        ) from e
