"""Shared fakes for the study-aid tests: no network, no real PDFs."""
import json
import typing as t
from datetime import datetime

import pytest


FIXED_NOW = datetime(2026, 10, 19, 9, 30)


class FakeClient:
    """Stands in for GenerativeClient, replaying canned answers in order."""

    def __init__(self, answers: list[t.Any]) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def __enter__(self) -> "FakeClient":
        return self

    def __exit__(self, *exc: t.Any) -> None:
        self.closed = True

    def generate(self, prompt: str, response_schema: dict) -> t.Any:
        self.calls.append((prompt, response_schema))
        if not self.answers:
            raise AssertionError("Unexpected call to generate()")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeResponse:
    """Minimal httpx.Response lookalike."""

    def __init__(self, status_code: int, body: t.Any, reason: str = "") -> None:
        self.status_code = status_code
        self.reason_phrase = reason
        self._body = body

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> t.Any:
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body


class FakeSession:
    """Records every POST and returns (or raises) a prepared result."""

    def __init__(self, result: t.Any) -> None:
        self.result = result
        self.posts: list[dict[str, t.Any]] = []
        self.closed = False

    def post(self, url: str, **kwargs: t.Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def close(self) -> None:
        self.closed = True


class FakePage:
    def __init__(self, words: list[str]) -> None:
        self.words = words

    def extract_words(self) -> list[dict[str, t.Any]]:
        return [{"text": word, "x0": float(i)} for i, word in enumerate(self.words)]


class FakePdf:
    def __init__(self, pages: list[FakePage]) -> None:
        self.pages = pages

    def __enter__(self) -> "FakePdf":
        return self

    def __exit__(self, *exc: t.Any) -> None:
        return None


class FakePdfBackend:
    """Module-like object exposing a pdfplumber-style open()."""

    def __init__(self, pages: list[list[str]], error: t.Optional[Exception] = None) -> None:
        self.pages = pages
        self.error = error
        self.opened: list[bytes] = []

    def open(self, fp: t.Any) -> FakePdf:
        self.opened.append(fp.read())
        if self.error:
            raise self.error
        return FakePdf([FakePage(words) for words in self.pages])


def envelope(answer: t.Any) -> dict[str, t.Any]:
    """Wrap a decoded answer the way the generateContent endpoint does."""
    return {"candidates": [{"content": {"parts": [{"text": json.dumps(answer)}]}}]}


def make_ical(*events: tuple[str, str, str, str]) -> str:
    """Build a calendar from (uid, summary, dtstart, dtend) tuples."""
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//study-aid tests//EN"]
    for uid, summary, start, end in events:
        lines += [
            "BEGIN:VEVENT",
            f"UID:{uid}",
            "DTSTAMP:20261019T000000Z",
            f"DTSTART:{start}",
            f"DTEND:{end}",
            f"SUMMARY:{summary}",
            "END:VEVENT",
        ]
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fake_client() -> t.Callable[..., FakeClient]:
    """Factory: fake_client(answer1, answer2, ...)."""
    return lambda *answers: FakeClient(list(answers))


@pytest.fixture
def fake_session() -> t.Callable[[t.Any], FakeSession]:
    return FakeSession


@pytest.fixture
def fake_response() -> t.Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def fake_pdf_backend() -> t.Callable[..., FakePdfBackend]:
    return FakePdfBackend


@pytest.fixture
def wrap_answer() -> t.Callable[[t.Any], dict[str, t.Any]]:
    return envelope


@pytest.fixture
def ical_builder() -> t.Callable[..., str]:
    return make_ical
