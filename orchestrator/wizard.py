"""Wizard controllers that sequence reading, extraction and synthesis.

Each controller owns the state of one wizard run and only changes it through
the transition table below. Blocking work (file parsing, HTTP calls) runs via
``asyncio.to_thread`` so the caller's event loop stays responsive, but
documents are processed strictly one after another.
"""
from __future__ import annotations

import asyncio
import logging
import typing as t
from datetime import datetime

from document_reader import PdfCapability, UploadedDocument, read_document
from generative_api import ApiError, GenerativeClient, MalformedResponse
from study_planner import (ExtractedEvent, Flashcard, NoEventsFound, ScheduleEvent, UserProfile,
                           create_flashcards, extract_events, synthesize_schedule)
from orchestrator.models import WizardSnapshot, WizardState

logger = logging.getLogger(__name__)

PHASE_READING = "document reading"
PHASE_EXTRACTION = "event extraction"
PHASE_SCHEDULE = "schedule generation"
PHASE_FLASHCARDS = "flashcard generation"

READING_SYLLABI_MESSAGE = "Reading your syllabi (PDFs may take longer)..."
BUILDING_SCHEDULE_MESSAGE = "Building your personalized schedule..."
READING_TRANSCRIPT_MESSAGE = "Reading and analyzing your transcript..."
CREATING_FLASHCARDS_MESSAGE = "Creating flashcards..."

_TRANSITIONS: dict[WizardState, set[WizardState]] = {
    WizardState.WELCOME: {WizardState.UPLOAD},
    WizardState.UPLOAD: {WizardState.LOADING},
    WizardState.LOADING: {WizardState.RESULT, WizardState.ERROR},
    WizardState.RESULT: set(),
    WizardState.ERROR: set(),
}


class InvalidTransition(RuntimeError):
    """An action was requested in a state that does not allow it."""


def describe_failure(error: BaseException, phase: str) -> str:
    """Map a failure to the message shown to the user.

    Args:
        error: The exception that ended the loading sequence.
        phase: What the wizard was doing, e.g. "event extraction".

    Returns:
        A single human-readable sentence.
    """
    if isinstance(error, ApiError):
        status = f"status {error.status}" if error.status is not None else "status unavailable"
        return f"API error during {phase} ({status}): {error.message}"
    if isinstance(error, MalformedResponse):
        return f"The model returned an unusable answer during {phase}: {error}"
    return str(error) or "An unknown error occurred."


class _Wizard:
    """State handling shared by both wizard variants."""

    reset_state = WizardState.UPLOAD

    def __init__(
        self,
        client: GenerativeClient,
        pdf: t.Optional[PdfCapability] = None,
        clock: t.Callable[[], datetime] = datetime.now,
        on_change: t.Optional[t.Callable[[WizardSnapshot], None]] = None,
    ) -> None:
        self._client = client
        self._pdf = pdf
        self._clock = clock
        self._on_change = on_change
        self._state = self.reset_state
        self._clear()

    @property
    def state(self) -> WizardState:
        return self._state

    def snapshot(self) -> WizardSnapshot:
        raise NotImplementedError

    def reset(self) -> WizardSnapshot:
        """Discard everything from this run and go back to the first step.

        Inert while a generation is in flight, since it cannot be cancelled.
        """
        if self._state is WizardState.LOADING:
            logger.debug("Ignoring reset while loading")
            return self.snapshot()

        logger.debug("Reset %s -> %s", self._state.value, self.reset_state.value)
        self._state = self.reset_state
        self._clear()
        self._notify()
        return self.snapshot()

    def _clear(self) -> None:
        self._loading_message = ""
        self._error = ""

    def _transition(self, target: WizardState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise InvalidTransition(f"Cannot go from {self._state.value} to {target.value}")
        logger.debug("Transition %s -> %s", self._state.value, target.value)
        self._state = target
        if target is not WizardState.LOADING:
            self._loading_message = ""
        self._notify()

    def _set_loading_message(self, message: str) -> None:
        self._loading_message = message
        self._notify()

    def _fail(self, error: Exception, phase: str) -> WizardSnapshot:
        logger.error("Generation failed during %s: %s", phase, error, exc_info=error)
        self._discard_results()
        self._error = describe_failure(error, phase)
        self._transition(WizardState.ERROR)
        return self.snapshot()

    def _discard_results(self) -> None:
        raise NotImplementedError

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self.snapshot())


class ScheduleWizard(_Wizard):
    """welcome -> upload -> loading -> result | error, for study schedules."""

    reset_state = WizardState.WELCOME

    def _clear(self) -> None:
        super()._clear()
        self._profile: t.Optional[UserProfile] = None
        self._discard_results()

    def _discard_results(self) -> None:
        self._events: list[ExtractedEvent] = []
        self._schedule: tuple[ScheduleEvent, ...] = ()
        self._ical = ""

    def snapshot(self) -> WizardSnapshot:
        return WizardSnapshot(
            state=self._state,
            loading_message=self._loading_message,
            error=self._error,
            profile=self._profile,
            event_count=len(self._events),
            schedule=self._schedule,
            ical=self._ical,
        )

    def submit_profile(self, name: str, free_time: str) -> WizardSnapshot:
        """Store who the schedule is for and move on to the upload step.

        :raises ValueError: If either field is blank.
        :raises InvalidTransition: If not on the welcome step.
        """
        if not name.strip() or not free_time.strip():
            raise ValueError("Both a name and a free-time description are required.")
        if self._state is not WizardState.WELCOME:
            raise InvalidTransition(f"Cannot submit a profile from {self._state.value}")

        self._profile = UserProfile(name=name.strip(), free_time=free_time.strip())
        self._transition(WizardState.UPLOAD)
        return self.snapshot()

    async def generate(self, documents: t.Sequence[UploadedDocument]) -> WizardSnapshot:
        """Read every document, extract its events, then build one schedule.

        Does nothing while a generation is already running or when no
        documents were selected.

        Args:
            documents: Uploaded syllabi, processed in the given order.

        Returns:
            Snapshot in the result or error state.
        """
        if self._state is WizardState.LOADING:
            logger.debug("Generation already in flight, ignoring request")
            return self.snapshot()
        if not documents:
            return self.snapshot()

        self._transition(WizardState.LOADING)
        self._error = ""
        now = self._clock()
        phase = PHASE_READING
        try:
            self._set_loading_message(READING_SYLLABI_MESSAGE)
            events: list[ExtractedEvent] = []
            for document in documents:
                phase = PHASE_READING
                text = await asyncio.to_thread(read_document, document, self._pdf)
                phase = PHASE_EXTRACTION
                found = await asyncio.to_thread(extract_events, self._client, text, now.year)
                logger.info("%s: %d event(s)", document.name, len(found))
                events.extend(found)
            if not events:
                raise NoEventsFound()
            self._events = events

            phase = PHASE_SCHEDULE
            self._set_loading_message(BUILDING_SCHEDULE_MESSAGE)
            plan = await asyncio.to_thread(synthesize_schedule, self._client, self._profile, events, now)
        except Exception as e:
            return self._fail(e, phase)

        self._schedule = tuple(plan.schedule)
        self._ical = plan.ical
        self._transition(WizardState.RESULT)
        return self.snapshot()


class FlashcardWizard(_Wizard):
    """upload -> loading -> result | error, for flashcards from one transcript."""

    reset_state = WizardState.UPLOAD

    def _clear(self) -> None:
        super()._clear()
        self._file_name = ""
        self._discard_results()

    def _discard_results(self) -> None:
        self._flashcards: tuple[Flashcard, ...] = ()

    def snapshot(self) -> WizardSnapshot:
        return WizardSnapshot(
            state=self._state,
            loading_message=self._loading_message,
            error=self._error,
            flashcards=self._flashcards,
            file_name=self._file_name,
        )

    async def generate(self, document: t.Optional[UploadedDocument]) -> WizardSnapshot:
        """Read one transcript and turn it into flashcards.

        Does nothing while a generation is already running or when no
        document was selected.
        """
        if self._state is WizardState.LOADING:
            logger.debug("Generation already in flight, ignoring request")
            return self.snapshot()
        if document is None:
            return self.snapshot()

        self._transition(WizardState.LOADING)
        self._error = ""
        self._file_name = document.name
        phase = PHASE_READING
        try:
            self._set_loading_message(READING_TRANSCRIPT_MESSAGE)
            text = await asyncio.to_thread(read_document, document, self._pdf)

            phase = PHASE_FLASHCARDS
            self._set_loading_message(CREATING_FLASHCARDS_MESSAGE)
            cards = await asyncio.to_thread(create_flashcards, self._client, text)
        except Exception as e:
            return self._fail(e, phase)

        self._flashcards = tuple(cards)
        self._transition(WizardState.RESULT)
        return self.snapshot()
