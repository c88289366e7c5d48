"""
HTTP client for the generateContent endpoint.

One call sends one prompt plus a response schema and returns the parsed JSON
answer. There is no retry, no rate limiting and, unless the caller passes one,
no timeout.
"""
from __future__ import annotations

import json
import logging
import os
import typing as t

import httpx

from .errors import ApiError, MalformedResponse

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")


class GenerativeClient:
    """Sends schema-constrained prompts to a Gemini-style model endpoint."""

    def __init__(
        self,
        api_key: t.Optional[str] = None,
        model: t.Optional[str] = None,
        base_url: t.Optional[str] = None,
        session: t.Optional[httpx.Client] = None,
        timeout: t.Optional[float] = None,
    ) -> None:
        self.api_key = (api_key or os.getenv("GEMINI_API_KEY", "")).strip()
        self.model = (model or GEMINI_MODEL).strip()
        self.base_url = (base_url or GEMINI_BASE_URL).strip().rstrip("/")
        self.timeout = timeout

        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY environment variable is not set.")

        # Only a session created here is closed by close().
        self._owns_session = session is None
        self._session = session if session is not None else httpx.Client()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> GenerativeClient:
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str, response_schema: dict[str, t.Any]) -> t.Any:
        """Send a prompt and return the model's JSON answer, parsed.

        Args:
            prompt: Prompt text sent as a single user turn.
            response_schema: Schema the endpoint should constrain its answer to.

        Returns:
            The decoded JSON value of the answer text.

        Raises:
            ApiError: On a non-success status or a transport failure.
            MalformedResponse: If the answer text is missing or is not JSON.
        """
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        logger.debug("POST %s (%d prompt chars)", self.endpoint, len(prompt))
        try:
            response = self._session.post(
                self.endpoint,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            raise ApiError(None, f"Request to {self.endpoint} failed: {e}") from e

        logger.debug("Response status %s", response.status_code)
        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response))

        return _parse_answer(response)


def _error_message(response: httpx.Response) -> str:
    """Best-effort server message for a failed response."""
    try:
        data = response.json()
    except ValueError:
        return f"{response.status_code} {response.reason_phrase}".strip()

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return json.dumps(data)


def _parse_answer(response: httpx.Response) -> t.Any:
    try:
        envelope = response.json()
    except ValueError as e:
        raise MalformedResponse(f"Response body is not JSON: {e}") from e

    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse("Response did not contain any answer text.") from e
    if not isinstance(text, str) or not text:
        raise MalformedResponse("Response did not contain any answer text.")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Answer text is not valid JSON: {e}") from e
