"""Flashcard variant of the synthesis stage."""
from __future__ import annotations

import logging

from pydantic import TypeAdapter

from generative_api import GenerativeClient
from prompts import render_prompt
from .errors import EmptyDocument, EmptyResult
from .models import Flashcard, validate_answer

logger = logging.getLogger(__name__)

FLASHCARD_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "question": {"type": "STRING", "description": "The question for the front of the flashcard."},
            "answer": {"type": "STRING", "description": "The answer for the back of the flashcard."},
        },
        "required": ["question", "answer"],
    },
}

_CARDS = TypeAdapter(list[Flashcard])


def create_flashcards(client: GenerativeClient, document_text: str) -> list[Flashcard]:
    """Generate question/answer pairs from one transcript.

    :param client: Client used for the single model call.
    :param document_text: Raw text of the transcript.
    :return: The flashcards, in the order the model listed them.
    :raises EmptyDocument: If the text is blank; no request is made.
    :raises EmptyResult: If the model returned no flashcards.
    """
    if not document_text.strip():
        raise EmptyDocument()

    data = client.generate(render_prompt("flashcard_prompt", document_text=document_text), FLASHCARD_SCHEMA)
    cards = validate_answer(_CARDS, data, "flashcard generation") if data is not None else []
    if not cards:
        raise EmptyResult()

    logger.info("Generated %d flashcard(s)", len(cards))
    return cards
