"""
Data models for the wizard state machine.

The wizard owns its state; presentation code only ever sees a WizardSnapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import typing as t

from study_planner.models import Flashcard, ScheduleEvent, UserProfile


class WizardState(Enum):
    """Step the wizard is currently on."""
    WELCOME = "welcome"
    UPLOAD = "upload"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class WizardSnapshot:
    """Read-only view of a wizard, handed to the presentation layer."""
    state: WizardState
    loading_message: str = ""
    error: str = ""
    profile: t.Optional[UserProfile] = None
    event_count: int = 0
    schedule: tuple[ScheduleEvent, ...] = ()
    ical: str = ""
    flashcards: tuple[Flashcard, ...] = ()
    file_name: str = ""
