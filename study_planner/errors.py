"""Domain-level emptiness, reported to the user as a failure."""


class NoEventsFound(LookupError):
    """No dated events were extracted from any of the documents."""

    def __init__(self) -> None:
        super().__init__(
            "No key dates could be found in the provided syllabi. Please check the files and try again."
        )


class EmptyDocument(ValueError):
    """The document has no text to work with."""

    def __init__(self) -> None:
        super().__init__(
            "The uploaded file appears to be empty. Please provide a transcript with content."
        )


class EmptyResult(LookupError):
    """The model produced no usable flashcards."""

    def __init__(self) -> None:
        super().__init__(
            "The AI could not generate flashcards from this transcript. It might be too short "
            "or lack clear concepts. Please try a different file."
        )
