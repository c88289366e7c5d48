"""Failures raised while turning an uploaded document into text."""
from __future__ import annotations


class UnsupportedFormat(ValueError):
    """The document's extension is not one we know how to read."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(
            f"Unsupported file type: .{extension}. Please upload a .pdf, .txt, or .md file."
        )


class DecodeError(RuntimeError):
    """The document could not be decoded or parsed into text."""
