"""Failures surfaced by the generative API client."""
from __future__ import annotations

import typing as t


class ApiError(RuntimeError):
    """The endpoint answered with a non-success status, or did not answer at all."""

    def __init__(self, status: t.Optional[int], message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"Status: {status}. {message}" if status is not None else message)


class MalformedResponse(ValueError):
    """The endpoint succeeded but its answer is missing or does not parse."""
